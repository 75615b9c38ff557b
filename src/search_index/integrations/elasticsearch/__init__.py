"""
목적: Elasticsearch 문서 저장소 공개 API를 제공한다.
설명: 클라이언트 레지스트리, 인덱스/문서 핸들, 결과 모델과 예외를 노출한다.
디자인 패턴: 퍼사드
참조: src/search_index/integrations/elasticsearch/registry.py, src/search_index/integrations/elasticsearch/doc_type.py
"""

from search_index.integrations.elasticsearch.connection import ElasticConnectionManager
from search_index.integrations.elasticsearch.doc_type import DocType
from search_index.integrations.elasticsearch.document_mapper import ElasticDocumentMapper
from search_index.integrations.elasticsearch.errors import (
    DocumentStoreError,
    NotAcknowledgedError,
    StoreRequestError,
    UnknownClientError,
    translate_errors,
)
from search_index.integrations.elasticsearch.index import Index
from search_index.integrations.elasticsearch.models import FetchResult, SearchHit, SearchResult
from search_index.integrations.elasticsearch.registry import ClientRegistry

__all__ = [
    "ClientRegistry",
    "ElasticConnectionManager",
    "ElasticDocumentMapper",
    "Index",
    "DocType",
    "FetchResult",
    "SearchHit",
    "SearchResult",
    "DocumentStoreError",
    "UnknownClientError",
    "NotAcknowledgedError",
    "StoreRequestError",
    "translate_errors",
]
