"""
목적: 검색 백엔드가 돌려준 비정형 필드 값을 태그드 변형(variant)으로 표현한다.
설명: JSON 디코딩 결과를 저장소가 한 번만 분류해 두고, 바인더는 판별자만 보고 분기한다.
디자인 패턴: 태그드 유니온, 팩토리 함수
참조: src/search_index/projection/binder.py, src/search_index/integrations/elasticsearch/document_mapper.py
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple, Union

from search_index.projection.errors import ShapeMismatch


class ValueShape(str, Enum):
    """원본 값의 형태 판별자."""

    SCALAR = "SCALAR"
    MAPPING = "MAPPING"
    SEQUENCE = "SEQUENCE"
    OPAQUE = "OPAQUE"


@dataclass(frozen=True)
class ScalarValue:
    """정수/실수/문자열/불리언 단일 값."""

    value: Union[int, float, str, bool]
    shape = ValueShape.SCALAR

    def to_raw(self) -> Any:
        return self.value


@dataclass(frozen=True)
class MappingValue(Mapping):
    """태그 -> 원본 값 사전. 읽기 전용 Mapping 으로 동작한다."""

    fields: Dict[str, "SourceValue"] = field(default_factory=dict)
    shape = ValueShape.MAPPING

    def __getitem__(self, tag: str) -> "SourceValue":
        return self.fields[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def to_raw(self) -> Dict[str, Any]:
        return {tag: value.to_raw() for tag, value in self.fields.items()}


@dataclass(frozen=True)
class SequenceValue:
    """순서가 있는 원본 값 목록. 항목 형태 검증은 바인더가 담당한다."""

    items: Tuple["SourceValue", ...] = ()
    shape = ValueShape.SEQUENCE

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["SourceValue"]:
        return iter(self.items)

    def to_raw(self) -> list:
        return [item.to_raw() for item in self.items]


@dataclass(frozen=True)
class OpaqueValue:
    """어느 형태에도 속하지 않는 값(null 등). 선언된 필드에 도달하면 UnsupportedType 이 된다."""

    value: Any = None
    shape = ValueShape.OPAQUE

    def to_raw(self) -> Any:
        return self.value


SourceValue = Union[ScalarValue, MappingValue, SequenceValue, OpaqueValue]

_SCALAR_TYPES = (bool, int, float, str)


def from_raw(raw: Any) -> SourceValue:
    """디코딩된 JSON 트리를 SourceValue 트리로 분류한다."""

    if isinstance(raw, (ScalarValue, MappingValue, SequenceValue, OpaqueValue)):
        return raw
    if isinstance(raw, _SCALAR_TYPES):
        return ScalarValue(raw)
    if isinstance(raw, Mapping):
        return MappingValue({str(key): from_raw(value) for key, value in raw.items()})
    if isinstance(raw, (list, tuple)):
        return SequenceValue(tuple(from_raw(item) for item in raw))
    return OpaqueValue(raw)


def parse_fields(raw: Any) -> MappingValue:
    """최상위 필드 맵을 분류한다. None 은 빈 맵으로 본다.

    Raises:
        ShapeMismatch: 최상위 값이 객체가 아닌 경우.
    """

    if raw is None:
        return MappingValue()
    value = from_raw(raw)
    if not isinstance(value, MappingValue):
        raise ShapeMismatch(
            "필드 맵은 객체여야 합니다.",
            cause=f"fields_type={type(raw).__name__}",
        )
    return value


__all__ = [
    "ValueShape",
    "ScalarValue",
    "MappingValue",
    "SequenceValue",
    "OpaqueValue",
    "SourceValue",
    "from_raw",
    "parse_fields",
]
