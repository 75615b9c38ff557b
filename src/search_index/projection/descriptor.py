"""
목적: 대상 타입의 필드 구조를 해석해 태그 -> 필드 위치 대응표를 만든다.
설명: dataclass와 Pydantic 모델의 선언 필드와 타입 힌트를 한 번 읽어 (태그, 접근자, 종류) 목록으로 캐시한다.
디자인 패턴: 리졸버, 캐시
참조: src/search_index/projection/tags.py, src/search_index/projection/binder.py
"""

from __future__ import annotations

import dataclasses
import threading
import types
from enum import Enum
from typing import (
    Annotated,
    Any,
    Dict,
    Iterator,
    List,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel, ConfigDict

from search_index.projection.errors import ShapeMismatch
from search_index.projection.tags import dataclass_field_tag, model_field_tag

_NONE_TYPE = type(None)


class FieldKind(str, Enum):
    """대상 필드의 정적 종류."""

    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    STRING = "STRING"
    STRUCT = "STRUCT"
    SEQUENCE = "SEQUENCE"
    UNSUPPORTED = "UNSUPPORTED"

    @property
    def is_scalar(self) -> bool:
        return self in (FieldKind.INTEGER, FieldKind.FLOAT, FieldKind.STRING)


class FieldLocator(BaseModel):
    """태그가 붙은 필드 하나의 위치와 종류를 표현한다.

    Args:
        tag: 외부 필드명.
        attribute: 파이썬 속성 이름.
        kind: 필드 종류.
        target_type: STRUCT 이면 선언 타입, SEQUENCE 이면 원소 타입.
        optional: Optional[...] 로 선언되었는지 여부.
        annotation: 원래의 타입 힌트(진단용).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    tag: str
    attribute: str
    kind: FieldKind
    target_type: Any = None
    optional: bool = False
    annotation: Any = None

    def get(self, instance: Any) -> Any:
        """인스턴스에서 필드 값을 읽는다. 아직 설정되지 않은 속성은 None 으로 본다."""

        return getattr(instance, self.attribute, None)

    def set(self, instance: Any, value: Any) -> None:
        """인스턴스의 기존 슬롯에 값을 대입한다."""

        setattr(instance, self.attribute, value)


class TargetDescriptor:
    """구조 타입 하나에 대한 태그 -> FieldLocator 대응표이다."""

    def __init__(self, target_type: type, locators: List[FieldLocator]) -> None:
        self._target_type = target_type
        self._locators: Dict[str, FieldLocator] = {locator.tag: locator for locator in locators}

    @property
    def target_type(self) -> type:
        return self._target_type

    def lookup(self, tag: str) -> Optional[FieldLocator]:
        """태그에 해당하는 필드를 찾는다. 없으면 None."""

        return self._locators.get(tag)

    def tags(self) -> List[str]:
        return list(self._locators)

    def locators(self) -> List[FieldLocator]:
        return list(self._locators.values())

    def __iter__(self) -> Iterator[Tuple[str, FieldLocator]]:
        return iter(self._locators.items())

    def __len__(self) -> int:
        return len(self._locators)

    def __contains__(self, tag: object) -> bool:
        return tag in self._locators

    def __repr__(self) -> str:
        return f"TargetDescriptor({self._target_type.__name__}, tags={self.tags()})"


def is_structural_type(candidate: Any) -> bool:
    """dataclass 타입 또는 Pydantic 모델 타입인지 확인한다."""

    if not isinstance(candidate, type):
        return False
    return dataclasses.is_dataclass(candidate) or issubclass(candidate, BaseModel)


def is_structural(instance: Any) -> bool:
    """구조 타입의 인스턴스인지 확인한다."""

    return not isinstance(instance, type) and is_structural_type(type(instance))


class DescriptorResolver:
    """타입별 TargetDescriptor 를 만들어 캐시한다. 캐시 접근은 스레드 안전하다."""

    def __init__(self) -> None:
        self._cache: Dict[type, TargetDescriptor] = {}
        self._lock = threading.RLock()

    def resolve(self, target_type: Any) -> TargetDescriptor:
        """구조 타입의 대응표를 반환한다.

        Raises:
            ShapeMismatch: 구조 타입이 아니거나 한 계층에 같은 태그가 두 번 선언된 경우.
        """

        if not is_structural_type(target_type):
            name = getattr(target_type, "__name__", type(target_type).__name__)
            raise ShapeMismatch(
                "구조 타입이 아닌 대상은 해석할 수 없습니다.",
                cause=f"target_type={name}",
                hint="dataclass 또는 pydantic BaseModel 을 사용하세요.",
            )
        with self._lock:
            descriptor = self._cache.get(target_type)
            if descriptor is None:
                descriptor = TargetDescriptor(target_type, self._build(target_type))
                self._cache[target_type] = descriptor
            return descriptor

    def resolve_instance(self, instance: Any) -> TargetDescriptor:
        """인스턴스의 구체 타입에 대한 대응표를 반환한다."""

        if not is_structural(instance):
            raise ShapeMismatch(
                "구조 타입 인스턴스가 아닙니다.",
                cause=f"value_type={type(instance).__name__}",
            )
        return self.resolve(type(instance))

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _build(self, target_type: type) -> List[FieldLocator]:
        locators: List[FieldLocator] = []
        seen: Dict[str, str] = {}
        for attribute, tag, annotation in self._declared_fields(target_type):
            if tag is None:
                continue
            if tag in seen:
                raise ShapeMismatch(
                    "한 구조 계층에 같은 태그가 중복 선언되었습니다.",
                    cause=f"type={target_type.__name__}, tag={tag}",
                    attributes=[seen[tag], attribute],
                )
            seen[tag] = attribute
            kind, element, optional = _classify(annotation)
            locators.append(
                FieldLocator(
                    tag=tag,
                    attribute=attribute,
                    kind=kind,
                    target_type=element,
                    optional=optional,
                    annotation=annotation,
                )
            )
        return locators

    def _declared_fields(self, target_type: type) -> List[Tuple[str, Optional[str], Any]]:
        if issubclass(target_type, BaseModel):
            return [
                (name, model_field_tag(info), info.annotation)
                for name, info in target_type.model_fields.items()
            ]
        try:
            hints = get_type_hints(target_type, include_extras=True)
        except (NameError, TypeError) as exc:
            raise ShapeMismatch(
                "타입 힌트를 해석할 수 없습니다.",
                cause=f"type={target_type.__name__}: {exc}",
                hint="전방 참조 타입이 모듈 전역에 정의되어 있는지 확인하세요.",
            ) from exc
        return [
            (field.name, dataclass_field_tag(field), hints.get(field.name, field.type))
            for field in dataclasses.fields(target_type)
        ]


def _classify(annotation: Any) -> Tuple[FieldKind, Any, bool]:
    annotation, optional = _unwrap_optional(_strip_annotated(annotation))
    if annotation is bool:
        return FieldKind.UNSUPPORTED, None, optional
    if annotation is int:
        return FieldKind.INTEGER, None, optional
    if annotation is float:
        return FieldKind.FLOAT, None, optional
    if annotation is str:
        return FieldKind.STRING, None, optional
    if is_structural_type(annotation):
        return FieldKind.STRUCT, annotation, optional
    if get_origin(annotation) is list:
        args = get_args(annotation)
        element = _strip_annotated(args[0]) if args else None
        if is_structural_type(element):
            return FieldKind.SEQUENCE, element, optional
    return FieldKind.UNSUPPORTED, None, optional


def _strip_annotated(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation, False
    members = [arg for arg in get_args(annotation) if arg is not _NONE_TYPE]
    if len(members) == 1:
        return _strip_annotated(members[0]), True
    return annotation, False


_DEFAULT_RESOLVER = DescriptorResolver()


def default_resolver() -> DescriptorResolver:
    """프로세스 공용 리졸버를 반환한다. 대응표는 타입에서 유도되는 읽기 전용 값이다."""

    return _DEFAULT_RESOLVER


def resolve(target_type: Any) -> TargetDescriptor:
    """공용 리졸버로 대응표를 반환한다."""

    return _DEFAULT_RESOLVER.resolve(target_type)


__all__ = [
    "FieldKind",
    "FieldLocator",
    "TargetDescriptor",
    "DescriptorResolver",
    "default_resolver",
    "is_structural",
    "is_structural_type",
    "resolve",
]
