"""
목적: 구조 프로젝션 엔진 공개 API를 제공한다.
설명: 대상 해석기, 값 대입기, 구조 바인더, 원본 값 변형과 예외를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/search_index/projection/binder.py, src/search_index/projection/descriptor.py
"""

from search_index.projection.binder import StructuralBinder, bind, dereference
from search_index.projection.coercer import ValueCoercer
from search_index.projection.descriptor import (
    DescriptorResolver,
    FieldKind,
    FieldLocator,
    TargetDescriptor,
    default_resolver,
    is_structural,
    is_structural_type,
    resolve,
)
from search_index.projection.errors import (
    InvalidTarget,
    ProjectionError,
    ShapeMismatch,
    UnsupportedType,
)
from search_index.projection.serializer import to_field_map
from search_index.projection.source_value import (
    MappingValue,
    OpaqueValue,
    ScalarValue,
    SequenceValue,
    SourceValue,
    ValueShape,
    from_raw,
    parse_fields,
)
from search_index.projection.tags import IGNORE_TAG, tagged

__all__ = [
    "StructuralBinder",
    "bind",
    "dereference",
    "ValueCoercer",
    "DescriptorResolver",
    "FieldKind",
    "FieldLocator",
    "TargetDescriptor",
    "default_resolver",
    "is_structural",
    "is_structural_type",
    "resolve",
    "ProjectionError",
    "InvalidTarget",
    "ShapeMismatch",
    "UnsupportedType",
    "to_field_map",
    "MappingValue",
    "OpaqueValue",
    "ScalarValue",
    "SequenceValue",
    "SourceValue",
    "ValueShape",
    "from_raw",
    "parse_fields",
    "IGNORE_TAG",
    "tagged",
]
