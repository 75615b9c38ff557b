"""
목적: 구조 대상 인스턴스를 태그 기반 필드 맵으로 직렬화한다.
설명: 바인딩의 역방향 경로로, 문서 색인 시 본문을 만들고 바인딩 결과의 왕복 검증에 사용한다.
디자인 패턴: 매퍼 패턴
참조: src/search_index/projection/descriptor.py, src/search_index/integrations/elasticsearch/document_mapper.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from search_index.projection.descriptor import (
    DescriptorResolver,
    FieldKind,
    default_resolver,
    is_structural,
)


def to_field_map(instance: Any, resolver: Optional[DescriptorResolver] = None) -> Dict[str, Any]:
    """태그가 선언된 필드만 ``tag -> 값`` 사전으로 만든다. None 값은 생략한다."""

    resolver = resolver or default_resolver()
    descriptor = resolver.resolve_instance(instance)
    result: Dict[str, Any] = {}
    for tag, locator in descriptor:
        value = locator.get(instance)
        if value is None:
            continue
        if locator.kind is FieldKind.STRUCT and is_structural(value):
            result[tag] = to_field_map(value, resolver)
        elif locator.kind is FieldKind.SEQUENCE:
            result[tag] = [to_field_map(item, resolver) for item in value]
        else:
            result[tag] = value
    return result


__all__ = ["to_field_map"]
