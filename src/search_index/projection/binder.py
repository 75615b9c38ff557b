"""
목적: 부분 필드 맵을 정적 구조 대상 인스턴스에 바인딩한다.
설명: 원본 값 트리와 대상 인스턴스를 동시에 순회하며 스칼라는 값 대입기에, 중첩 구조는 재귀 호출에 위임한다.
디자인 패턴: 방문자(재귀 하강), 되돌리기 저널
참조: src/search_index/projection/descriptor.py, src/search_index/projection/coercer.py,
    src/search_index/projection/source_value.py
"""

from __future__ import annotations

import weakref
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel

from search_index.projection.coercer import Assign, ValueCoercer, direct_assign
from search_index.projection.descriptor import (
    DescriptorResolver,
    FieldKind,
    FieldLocator,
    default_resolver,
    is_structural,
)
from search_index.projection.errors import (
    InvalidTarget,
    ProjectionError,
    ShapeMismatch,
    UnsupportedType,
)
from search_index.projection.source_value import (
    MappingValue,
    ScalarValue,
    SequenceValue,
    SourceValue,
    from_raw,
)
from search_index.shared.logging import Logger, create_default_logger

_VALUE_TYPES = (bool, int, float, complex, str, bytes, tuple, frozenset)


def dereference(target: Any, path: str = "") -> Any:
    """weakref 간접 참조를 끝까지 따라가 값을 받을 수 있는 인스턴스를 반환한다.

    Raises:
        InvalidTarget: None, 해제된 참조, 클래스, 불변 값, frozen 구조 인스턴스인 경우.
    """

    current = target
    while isinstance(current, weakref.ReferenceType):
        current = current()
        if current is None:
            raise InvalidTarget("참조 대상이 이미 해제되었습니다.", path=path)
    if current is None:
        raise InvalidTarget("바인딩 대상이 None 입니다.", path=path)
    if isinstance(current, type):
        raise InvalidTarget(
            "타입이 아닌 인스턴스를 전달해야 합니다.",
            path=path,
            cause=f"target={current.__name__}",
            hint="대상 클래스의 인스턴스를 만들어 전달하세요.",
        )
    if isinstance(current, _VALUE_TYPES):
        raise InvalidTarget(
            "불변 값에는 바인딩할 수 없습니다.",
            path=path,
            cause=f"target_type={type(current).__name__}",
        )
    _ensure_mutable(current, path)
    return current


def _ensure_mutable(instance: Any, path: str) -> None:
    if isinstance(instance, BaseModel):
        frozen = bool(type(instance).model_config.get("frozen"))
    else:
        params = getattr(type(instance), "__dataclass_params__", None)
        frozen = bool(params is not None and params.frozen)
    if frozen:
        raise InvalidTarget(
            "frozen 인스턴스에는 바인딩할 수 없습니다.",
            path=path,
            cause=f"target_type={type(instance).__name__}",
        )


class _UndoJournal:
    """대입 직전 값을 기록해 두었다가 역순으로 복원한다."""

    def __init__(self) -> None:
        self._entries: List[Tuple[Any, FieldLocator, Any]] = []

    def assign(self, instance: Any, locator: FieldLocator, value: Any) -> None:
        self._entries.append((instance, locator, locator.get(instance)))
        locator.set(instance, value)

    def rollback(self) -> int:
        restored = len(self._entries)
        for instance, locator, previous in reversed(self._entries):
            locator.set(instance, previous)
        self._entries.clear()
        return restored


class StructuralBinder:
    """필드 맵을 구조 대상에 바인딩하는 엔진이다.

    기본 동작은 비트랜잭션이다. 첫 오류에서 중단하며, 그 전에 처리된 필드는 새 값을 유지한다.
    ``transactional=True`` 이면 모든 대입을 저널에 기록하고 오류 시 이전 값으로 되돌린 뒤 예외를 다시 던진다.

    Args:
        resolver: 대상 타입 해석기. 생략하면 공용 리졸버를 사용한다.
        coercer: 스칼라 값 대입기.
        transactional: 전부 아니면 전무 방식 사용 여부.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        resolver: Optional[DescriptorResolver] = None,
        coercer: Optional[ValueCoercer] = None,
        transactional: bool = False,
        logger: Optional[Logger] = None,
    ) -> None:
        self._resolver = resolver or default_resolver()
        self._coercer = coercer or ValueCoercer()
        self._transactional = transactional
        self._logger = logger or create_default_logger("StructuralBinder")

    @property
    def transactional(self) -> bool:
        return self._transactional

    def bind(self, target: Any, fields: Any) -> Any:
        """fields 를 target 에 바인딩하고, 역참조된 대상 인스턴스를 반환한다.

        Args:
            target: 구조 타입 인스턴스 또는 그것을 가리키는 weakref.
            fields: MappingValue 또는 디코딩된 JSON 객체(사전).

        Raises:
            InvalidTarget: 대상이 값을 받을 수 없는 경우.
            ShapeMismatch: 원본 값 형태가 선언된 필드 형태와 다른 경우.
            UnsupportedType: 원본/대상 종류 조합에 대한 규칙이 없는 경우.
        """

        instance = dereference(target)
        source = self._as_mapping(fields)
        journal = _UndoJournal() if self._transactional else None
        assign = journal.assign if journal is not None else direct_assign
        try:
            self._bind_struct(instance, source, "", assign)
        except ProjectionError as exc:
            if journal is not None:
                restored = journal.rollback()
                self._logger.warning(
                    "바인딩 실패로 대입 내역을 되돌렸습니다.",
                    target_type=type(instance).__name__,
                    code=exc.code,
                    path=exc.path,
                    restored=restored,
                )
            raise
        return instance

    def _as_mapping(self, fields: Any) -> MappingValue:
        if isinstance(fields, MappingValue):
            return fields
        if isinstance(fields, Mapping):
            return from_raw(fields)
        raise ShapeMismatch(
            "필드 맵은 객체여야 합니다.",
            cause=f"fields_type={type(fields).__name__}",
        )

    def _bind_struct(self, instance: Any, source: MappingValue, path: str, assign: Assign) -> None:
        if not is_structural(instance):
            raise ShapeMismatch(
                "구조 타입 필드가 아닌 값에는 중첩 객체를 바인딩할 수 없습니다.",
                path=path,
                cause=f"value_type={type(instance).__name__}",
            )
        _ensure_mutable(instance, path)
        descriptor = self._resolver.resolve(type(instance))
        for tag, value in source.items():
            locator = descriptor.lookup(tag)
            if locator is None:
                continue
            self._bind_field(instance, locator, value, _join(path, tag), assign)

    def _bind_field(
        self,
        instance: Any,
        locator: FieldLocator,
        value: SourceValue,
        path: str,
        assign: Assign,
    ) -> None:
        if locator.kind is FieldKind.UNSUPPORTED:
            raise UnsupportedType(
                "대상 필드 타입에 대한 바인딩 규칙이 없습니다.",
                path=path,
                cause=f"annotation={locator.annotation!r}",
                value=value.to_raw(),
                destination_kind=locator.kind.value,
            )
        if isinstance(value, ScalarValue):
            if not locator.kind.is_scalar:
                raise self._shape_mismatch(locator, value, path)
            self._coercer.coerce(value, locator, instance, path, assign)
        elif isinstance(value, MappingValue):
            if locator.kind is not FieldKind.STRUCT:
                raise self._shape_mismatch(locator, value, path)
            self._bind_nested(instance, locator, value, path, assign)
        elif isinstance(value, SequenceValue):
            if locator.kind is not FieldKind.SEQUENCE:
                raise self._shape_mismatch(locator, value, path)
            self._bind_sequence(instance, locator, value, path, assign)
        else:
            raise UnsupportedType(
                "바인딩할 수 없는 원본 값입니다.",
                path=path,
                cause=f"value_type={type(value.to_raw()).__name__}",
                value=value.to_raw(),
                destination_kind=locator.kind.value,
            )

    def _bind_nested(
        self,
        instance: Any,
        locator: FieldLocator,
        value: MappingValue,
        path: str,
        assign: Assign,
    ) -> None:
        current = locator.get(instance)
        if current is None:
            child = self.allocate(locator.target_type, path)
            assign(instance, locator, child)
        else:
            child = dereference(current, path)
        self._bind_struct(child, value, path, assign)

    def _bind_sequence(
        self,
        instance: Any,
        locator: FieldLocator,
        value: SequenceValue,
        path: str,
        assign: Assign,
    ) -> None:
        for index, item in enumerate(value):
            if not isinstance(item, MappingValue):
                raise ShapeMismatch(
                    "구조 타입 시퀀스에는 객체 원소만 바인딩할 수 있습니다.",
                    path=f"{path}[{index}]",
                    cause=f"item_shape={item.shape.value}",
                    value=item.to_raw(),
                )
        container = [self.allocate(locator.target_type, path) for _ in range(len(value))]
        for index, (element, item) in enumerate(zip(container, value)):
            # 새 원소는 아직 대상에 연결되지 않았으므로 되돌릴 필요가 없다.
            self._bind_struct(element, item, f"{path}[{index}]", direct_assign)
        assign(instance, locator, container)

    def allocate(self, target_type: Any, path: str = "") -> Any:
        """중첩 필드나 시퀀스 원소로 쓸 빈 인스턴스를 만든다."""

        if issubclass(target_type, BaseModel):
            return target_type.model_construct()
        try:
            return target_type()
        except TypeError as exc:
            raise InvalidTarget(
                "인자 없이 생성할 수 없는 타입입니다.",
                path=path,
                cause=f"target_type={target_type.__name__}: {exc}",
                hint="중첩/시퀀스 원소 타입의 모든 필드에 기본값을 지정하세요.",
            ) from exc

    def _shape_mismatch(self, locator: FieldLocator, value: SourceValue, path: str) -> ShapeMismatch:
        return ShapeMismatch(
            "원본 값 형태가 대상 필드 선언과 다릅니다.",
            path=path,
            cause=f"{value.shape.value} -> {locator.kind.value}",
            value=value.to_raw(),
            destination_kind=locator.kind.value,
        )


def _join(path: str, tag: str) -> str:
    return f"{path}.{tag}" if path else tag


_DEFAULT_BINDER = StructuralBinder()


def bind(target: Any, fields: Any) -> Any:
    """공용 비트랜잭션 바인더로 fields 를 target 에 바인딩한다."""

    return _DEFAULT_BINDER.bind(target, fields)


__all__ = ["StructuralBinder", "bind", "dereference"]
