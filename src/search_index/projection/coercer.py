"""
목적: 단일 스칼라 원본 값을 대상 필드의 정적 종류에 맞춰 대입한다.
설명: 정수<-정수, 문자열<-문자열, 실수<-실수 조합만 허용하며 종류 간 변환은 하지 않는다.
디자인 패턴: 전략 패턴
참조: src/search_index/projection/descriptor.py, src/search_index/projection/binder.py
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from search_index.projection.descriptor import FieldKind, FieldLocator
from search_index.projection.errors import UnsupportedType
from search_index.projection.source_value import ScalarValue

Assign = Callable[[Any, FieldLocator, Any], None]


def direct_assign(instance: Any, locator: FieldLocator, value: Any) -> None:
    """저널 없이 필드에 바로 대입한다."""

    locator.set(instance, value)


def _is_integer(value: Any) -> bool:
    # bool 은 int 의 하위 타입이지만 정수로 취급하지 않는다.
    return type(value) is int


def _is_float(value: Any) -> bool:
    return type(value) is float


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


class ValueCoercer:
    """스칼라 값 대입기."""

    _ACCEPTS: Dict[FieldKind, Callable[[Any], bool]] = {
        FieldKind.INTEGER: _is_integer,
        FieldKind.FLOAT: _is_float,
        FieldKind.STRING: _is_string,
    }

    def accepts(self, kind: FieldKind, value: Any) -> bool:
        """kind 필드가 value 를 그대로 받을 수 있는지 확인한다."""

        check = self._ACCEPTS.get(kind)
        return check is not None and check(value)

    def coerce(
        self,
        source: ScalarValue,
        destination: FieldLocator,
        instance: Any,
        path: str = "",
        assign: Optional[Assign] = None,
    ) -> None:
        """스칼라 값을 destination 필드에 대입한다.

        assign 이 주어지면 직접 setattr 하는 대신 그 함수로 대입한다.

        Raises:
            UnsupportedType: 원본/대상 종류 조합에 대한 규칙이 없는 경우. 필드 값은 바뀌지 않는다.
        """

        value = source.value
        if not self.accepts(destination.kind, value):
            raise UnsupportedType(
                "스칼라 값을 대상 필드 종류로 변환할 수 없습니다.",
                path=path or destination.tag,
                cause=f"{type(value).__name__} -> {destination.kind.value}",
                value=value,
                value_type=type(value).__name__,
                destination_kind=destination.kind.value,
            )
        (assign or direct_assign)(instance, destination, value)


__all__ = ["Assign", "ValueCoercer", "direct_assign"]
