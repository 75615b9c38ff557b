"""
목적: Elasticsearch 문서 매퍼 모듈을 제공한다.
설명: 색인 본문 생성과 조회/검색 응답의 _source 를 분류된 필드 맵으로 바꾸는 변환을 담당한다.
디자인 패턴: 매퍼 패턴
참조: src/search_index/integrations/elasticsearch/models.py, src/search_index/projection/serializer.py
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Dict

from search_index.integrations.elasticsearch.models import FetchResult, SearchHit, SearchResult
from search_index.projection.descriptor import is_structural
from search_index.projection.serializer import to_field_map
from search_index.projection.source_value import parse_fields


def response_body(response: Any) -> Dict[str, Any]:
    """클라이언트 응답(ObjectApiResponse 또는 사전)에서 본문 사전을 꺼낸다."""

    body = getattr(response, "body", response)
    if isinstance(body, Mapping):
        return dict(body)
    return {}


class ElasticDocumentMapper:
    """Elasticsearch 문서 매퍼."""

    def load_body(self, body: Any) -> Dict[str, Any]:
        """사전 또는 JSON 문자열 본문을 사전으로 만든다."""

        if isinstance(body, (str, bytes)):
            try:
                body = json.loads(body)
            except json.JSONDecodeError as exc:
                raise ValueError("JSON 본문 파싱에 실패했습니다.") from exc
        if not isinstance(body, Mapping):
            raise ValueError(f"본문은 JSON 객체여야 합니다: {type(body).__name__}")
        return dict(body)

    def to_index_document(self, doc: Any) -> Dict[str, Any]:
        """색인용 문서 본문을 생성한다. 구조 타입 인스턴스는 태그 기반 필드 맵으로 직렬화한다."""

        if is_structural(doc):
            return to_field_map(doc)
        return self.load_body(doc)

    def from_get_response(self, response: Any, index: str, doc_id: str) -> FetchResult:
        """단건 조회 응답을 FetchResult 로 변환한다."""

        response = response_body(response)
        found = bool(response.get("found", False))
        return FetchResult(
            doc_id=str(response.get("_id", doc_id)),
            index=str(response.get("_index", index)),
            found=found,
            version=response.get("_version"),
            fields=parse_fields(response.get("_source") if found else None),
        )

    def from_hit(self, hit: Mapping) -> SearchHit:
        """검색 히트를 SearchHit 로 변환한다."""

        return SearchHit(
            doc_id=str(hit.get("_id", "")),
            index=str(hit.get("_index", "")),
            score=hit.get("_score"),
            fields=parse_fields(hit.get("_source")),
        )

    def from_search_response(self, response: Any) -> SearchResult:
        """검색 응답을 SearchResult 로 변환한다."""

        response = response_body(response)
        hits = response.get("hits") or {}
        total = hits.get("total", 0)
        # 7.x 이후에는 {"value": n, "relation": "eq"} 형태다.
        if isinstance(total, Mapping):
            total = total.get("value", 0)
        return SearchResult(
            total_hits=int(total or 0),
            max_score=hits.get("max_score"),
            took=response.get("took"),
            hits=[self.from_hit(hit) for hit in hits.get("hits", [])],
        )
