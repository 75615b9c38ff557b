"""
목적: search_index 패키지 최상위 공개 API를 제공한다.
설명: 구조 프로젝션 엔진과 Elasticsearch 문서 저장소의 주요 진입점을 노출한다.
디자인 패턴: 퍼사드
참조: src/search_index/projection/__init__.py, src/search_index/integrations/elasticsearch/__init__.py
"""

from search_index.integrations.elasticsearch import (
    ClientRegistry,
    DocType,
    FetchResult,
    Index,
    SearchHit,
    SearchResult,
)
from search_index.projection import (
    InvalidTarget,
    ProjectionError,
    ShapeMismatch,
    StructuralBinder,
    UnsupportedType,
    bind,
    tagged,
    to_field_map,
)

__all__ = [
    "ClientRegistry",
    "Index",
    "DocType",
    "FetchResult",
    "SearchHit",
    "SearchResult",
    "StructuralBinder",
    "bind",
    "tagged",
    "to_field_map",
    "ProjectionError",
    "InvalidTarget",
    "ShapeMismatch",
    "UnsupportedType",
]
