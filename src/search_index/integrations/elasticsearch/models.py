"""
목적: 문서 저장소 조회/검색 결과 모델을 정의한다.
설명: 단건 조회와 검색 히트의 필드 맵을 이미 분류된 MappingValue 로 보관한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_index/integrations/elasticsearch/document_mapper.py, src/search_index/projection/source_value.py
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from search_index.projection.source_value import MappingValue


class FetchResult(BaseModel):
    """단건 조회 결과.

    Args:
        doc_id: 문서 식별자.
        index: 인덱스 이름.
        found: 문서 존재 여부.
        version: 문서 버전.
        fields: 바인더 입력으로 쓰는 필드 맵. 문서가 없으면 빈 맵이다.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    doc_id: str
    index: str
    found: bool = False
    version: Optional[int] = None
    fields: MappingValue = Field(default_factory=MappingValue)


class SearchHit(BaseModel):
    """검색 히트 한 건."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    doc_id: str
    index: str
    score: Optional[float] = None
    fields: MappingValue = Field(default_factory=MappingValue)


class SearchResult(BaseModel):
    """검색 응답."""

    total_hits: int = 0
    max_score: Optional[float] = None
    took: Optional[int] = None
    hits: List[SearchHit] = Field(default_factory=list)
