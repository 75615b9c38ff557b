"""
목적: Elasticsearch 단위 테스트용 가짜 클라이언트와 픽스처를 제공한다.
설명: elasticsearch_cls 주입 지점에 넣을 인메모리 클라이언트로 색인/조회/검색/관리 요청을 흉내 낸다.
디자인 패턴: 테스트 더블(Fake)
참조: src/search_index/integrations/elasticsearch/registry.py, src/search_index/integrations/elasticsearch/connection.py
"""

from __future__ import annotations

import itertools
from typing import Any, Dict, List, Optional

import pytest

from search_index.integrations.elasticsearch import ClientRegistry, Index
from search_index.shared.logging import InMemoryLogger, InMemoryLogRepository


class FakeIndices:
    """indices 네임스페이스 흉내."""

    def __init__(self, owner: "FakeElasticsearch") -> None:
        self._owner = owner
        self.created: Dict[str, Dict[str, Any]] = {}
        self.templates: Dict[str, Dict[str, Any]] = {}
        self.refreshed: List[str] = []

    def exists(self, index: str) -> bool:
        self._owner.maybe_fail()
        return index in self.created

    def create(self, index: str, mappings: Optional[dict] = None, settings: Optional[dict] = None) -> dict:
        self._owner.maybe_fail()
        if self._owner.acknowledge:
            self.created[index] = {"mappings": mappings, "settings": settings}
        return {"acknowledged": self._owner.acknowledge, "index": index}

    def delete(self, index: str) -> dict:
        self._owner.maybe_fail()
        if self._owner.acknowledge:
            self.created.pop(index, None)
            self._owner.documents.pop(index, None)
        return {"acknowledged": self._owner.acknowledge}

    def refresh(self, index: str) -> dict:
        self._owner.maybe_fail()
        self.refreshed.append(index)
        return {"_shards": {"total": 1, "successful": 1, "failed": 0}}

    def put_index_template(self, name: str, body: dict) -> dict:
        self._owner.maybe_fail()
        self.templates[name] = body
        return {"acknowledged": self._owner.acknowledge}

    def delete_index_template(self, name: str) -> dict:
        self._owner.maybe_fail()
        self.templates.pop(name, None)
        return {"acknowledged": self._owner.acknowledge}


class FakeElasticsearch:
    """인메모리 Elasticsearch 클라이언트 흉내."""

    instances: List["FakeElasticsearch"] = []

    def __init__(self, hosts: List[str], **options: Any) -> None:
        self.hosts = hosts
        self.options_kwargs = options
        self.closed = False
        self.acknowledge = True
        self.failure: Optional[Exception] = None
        self.ignore_status: Any = None
        self.documents: Dict[str, Dict[str, dict]] = {}
        self.searches: List[dict] = []
        self.indices = FakeIndices(self)
        self._ids = itertools.count(1)
        FakeElasticsearch.instances.append(self)

    def maybe_fail(self) -> None:
        if self.failure is not None:
            raise self.failure

    def options(self, ignore_status: Any = None) -> "FakeElasticsearch":
        self.ignore_status = ignore_status
        return self

    def index(self, index: str, document: dict, id: Optional[str] = None) -> dict:
        self.maybe_fail()
        doc_id = id or f"generated-{next(self._ids)}"
        bucket = self.documents.setdefault(index, {})
        result = "updated" if doc_id in bucket else "created"
        bucket[doc_id] = document
        return {"_index": index, "_id": doc_id, "_version": 1, "result": result}

    def get(self, index: str, id: str) -> dict:
        self.maybe_fail()
        source = self.documents.get(index, {}).get(id)
        if source is None:
            return {"_index": index, "_id": id, "found": False}
        return {"_index": index, "_id": id, "_version": 3, "found": True, "_source": source}

    def delete(self, index: str, id: str) -> dict:
        self.maybe_fail()
        removed = self.documents.get(index, {}).pop(id, None)
        return {"_index": index, "_id": id, "result": "deleted" if removed is not None else "not_found"}

    def search(self, index: str, body: dict) -> dict:
        self.maybe_fail()
        self.searches.append(body)
        hits = [
            {"_index": index, "_id": doc_id, "_score": 1.0, "_source": source}
            for doc_id, source in self.documents.get(index, {}).items()
        ]
        return {
            "took": 2,
            "hits": {
                "total": {"value": len(hits), "relation": "eq"},
                "max_score": 1.0 if hits else None,
                "hits": hits,
            },
        }

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_es_cls():
    FakeElasticsearch.instances.clear()
    return FakeElasticsearch


@pytest.fixture
def log_repository() -> InMemoryLogRepository:
    return InMemoryLogRepository()


@pytest.fixture
def registry(fake_es_cls, log_repository):
    """가짜 클라이언트가 주입된 레지스트리를 반환한다."""

    logger = InMemoryLogger(name="es-unit", repository=log_repository, emit_stdout=False)
    registry = ClientRegistry(logger=logger, elasticsearch_cls=fake_es_cls)
    registry.register("local", "http://127.0.0.1:9200")
    yield registry
    registry.close()


@pytest.fixture
def fake_client(registry) -> FakeElasticsearch:
    return registry.client("local").ensure_client()


@pytest.fixture
def articles(registry, log_repository) -> Index:
    logger = InMemoryLogger(name="es-index", repository=log_repository, emit_stdout=False)
    return Index("articles", registry.client("local"), logger=logger)
