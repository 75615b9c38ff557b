"""
목적: 인덱스 하나 안의 문서 CRUD/검색 핸들을 제공한다.
설명: 색인, 단건 조회, 삭제, 검색을 수행하고 조회 결과를 구조 바인더로 대상 객체에 투영한다.
    Elasticsearch 7 이후에는 매핑 타입이 없으므로 name 은 요청에 실리지 않는 논리 이름이다.
디자인 패턴: 어댑터 패턴
참조: src/search_index/integrations/elasticsearch/index.py, src/search_index/projection/binder.py
"""

from __future__ import annotations

from typing import Any, List, Optional, Type, TypeVar

from search_index.integrations.elasticsearch.document_mapper import (
    ElasticDocumentMapper,
    response_body,
)
from search_index.integrations.elasticsearch.errors import translate_errors
from search_index.integrations.elasticsearch.index import Index
from search_index.integrations.elasticsearch.models import FetchResult, SearchResult
from search_index.projection.binder import StructuralBinder

T = TypeVar("T")


class DocType:
    """문서 핸들.

    Args:
        index: 문서가 속한 인덱스.
        name: 논리 문서 종류 이름.
        binder: get_into/search_into 에서 쓸 기본 바인더.
    """

    def __init__(self, index: Index, name: str, binder: Optional[StructuralBinder] = None) -> None:
        self._index = index
        self._name = name
        self._binder = binder or StructuralBinder()
        self._mapper = ElasticDocumentMapper()

    @property
    def index(self) -> Index:
        return self._index

    @property
    def name(self) -> str:
        return self._name

    def index_doc(self, doc: Any, doc_id: Optional[str] = None) -> str:
        """문서를 색인하고 백엔드가 부여한 식별자를 반환한다.

        Args:
            doc: 사전, JSON 문자열 또는 구조 타입 인스턴스.
            doc_id: 문서 식별자. 생략하면 백엔드가 생성한다.
        """

        body = self._mapper.to_index_document(doc)
        kwargs = {"index": self._index.name, "document": body}
        if doc_id:
            kwargs["id"] = doc_id
        with translate_errors("index", index=self._index.name, doc_id=doc_id):
            response = self._index.client.ensure_client().index(**kwargs)
        return str(response_body(response).get("_id", doc_id or ""))

    def fetch(self, doc_id: str) -> FetchResult:
        """문서를 조회한다. 없는 문서는 found=False 로 반환한다."""

        client = self._index.client.with_options(ignore_status=[404])
        with translate_errors("get", index=self._index.name, doc_id=doc_id):
            response = client.get(index=self._index.name, id=doc_id)
        return self._mapper.from_get_response(response, self._index.name, doc_id)

    def get_into(self, doc_id: str, target: Any, binder: Optional[StructuralBinder] = None) -> bool:
        """문서를 조회해 target 에 바인딩한다. 문서가 없으면 target 을 건드리지 않고 False 를 반환한다."""

        result = self.fetch(doc_id)
        if not result.found:
            return False
        (binder or self._binder).bind(target, result.fields)
        return True

    def delete(self, doc_id: str) -> bool:
        """문서를 삭제한다. 삭제했으면 True, 없던 문서면 False."""

        client = self._index.client.with_options(ignore_status=[404])
        with translate_errors("delete", index=self._index.name, doc_id=doc_id):
            response = client.delete(index=self._index.name, id=doc_id)
        return response_body(response).get("result") == "deleted"

    def search(self, body: Any) -> SearchResult:
        """검색 요청 본문(사전 또는 JSON 문자열)을 실행한다."""

        query = self._mapper.load_body(body)
        with translate_errors("search", index=self._index.name):
            response = self._index.client.ensure_client().search(index=self._index.name, body=query)
        return self._mapper.from_search_response(response)

    def search_into(
        self,
        body: Any,
        target_type: Type[T],
        binder: Optional[StructuralBinder] = None,
    ) -> List[T]:
        """검색 히트마다 target_type 인스턴스를 새로 만들어 바인딩한 목록을 반환한다."""

        active = binder or self._binder
        result = self.search(body)
        items: List[T] = []
        for hit in result.hits:
            instance = active.allocate(target_type)
            items.append(active.bind(instance, hit.fields))
        return items
