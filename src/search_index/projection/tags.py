"""
목적: 대상 필드에 외부 필드명(태그)을 선언하는 도우미를 제공한다.
설명: dataclass 필드 메타데이터와 Pydantic 필드 정보에서 태그를 읽는 규칙을 한 곳에 모은다.
디자인 패턴: 유틸리티 모듈
참조: src/search_index/projection/descriptor.py
"""

from __future__ import annotations

import dataclasses
from typing import Any, Optional

TAG_KEY = "tag"
IGNORE_TAG = "-"


def tagged(tag: str, **field_kwargs: Any) -> Any:
    """외부 필드명이 붙은 dataclass 필드를 만든다.

    ``dataclasses.field`` 인자(default, default_factory 등)는 그대로 전달된다.

    Example:
        >>> @dataclass
        ... class Author:
        ...     name: str = tagged("name", default="")
    """

    if not tag:
        raise ValueError("태그는 비어 있을 수 없습니다.")
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    return dataclasses.field(metadata=metadata, **field_kwargs)


def dataclass_field_tag(field: dataclasses.Field) -> Optional[str]:
    return _normalize(field.metadata.get(TAG_KEY))


def model_field_tag(field_info: Any) -> Optional[str]:
    """Pydantic FieldInfo에서 태그를 읽는다. json_schema_extra["tag"]가 alias보다 우선한다."""

    extra = field_info.json_schema_extra
    if isinstance(extra, dict) and TAG_KEY in extra:
        return _normalize(extra[TAG_KEY])
    return _normalize(field_info.alias)


def _normalize(tag: Any) -> Optional[str]:
    if not isinstance(tag, str) or not tag or tag == IGNORE_TAG:
        return None
    return tag


__all__ = ["TAG_KEY", "IGNORE_TAG", "tagged", "dataclass_field_tag", "model_field_tag"]
