"""
목적: Elasticsearch 인덱스 관리 모듈을 제공한다.
설명: 인덱스 설정/매핑 누적, 존재 확인, 생성/삭제, 인덱스 템플릿 관리를 담당한다.
    모든 관리 요청은 acknowledged 응답을 요구한다.
디자인 패턴: 매니저 패턴
참조: src/search_index/integrations/elasticsearch/connection.py, src/search_index/integrations/elasticsearch/doc_type.py
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, Optional

from search_index.integrations.elasticsearch.connection import ElasticConnectionManager
from search_index.integrations.elasticsearch.document_mapper import (
    ElasticDocumentMapper,
    response_body,
)
from search_index.integrations.elasticsearch.errors import NotAcknowledgedError, translate_errors
from search_index.shared.logging import LogContext, Logger, create_default_logger

if TYPE_CHECKING:
    from search_index.integrations.elasticsearch.doc_type import DocType


class Index:
    """명명된 클라이언트에 묶인 인덱스 핸들.

    Args:
        name: 인덱스 이름.
        client: 연결 관리자. 보통 ClientRegistry.client(name) 결과를 전달한다.
        logger: 주입 가능한 로거.
    """

    def __init__(
        self,
        name: str,
        client: ElasticConnectionManager,
        logger: Optional[Logger] = None,
    ) -> None:
        if not name:
            raise ValueError("인덱스 이름이 필요합니다.")
        self._name = name
        self._client = client
        self._settings: Dict[str, Any] = {}
        self._properties: Dict[str, Any] = {}
        self._mapper = ElasticDocumentMapper()
        self._logger = (logger or create_default_logger("Index")).with_context(
            LogContext(client=client.name, index=name)
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def client(self) -> ElasticConnectionManager:
        return self._client

    @property
    def logger(self) -> Logger:
        return self._logger

    @property
    def settings(self) -> Dict[str, Any]:
        return dict(self._settings)

    @property
    def mappings(self) -> Dict[str, Any]:
        return {"properties": dict(self._properties)}

    def add_settings(self, settings: Mapping[str, Any]) -> None:
        """인덱스 생성 시 사용할 설정을 병합한다. 같은 키는 나중 값이 이긴다."""

        self._settings.update(settings)

    def add_mapping(self, properties: Mapping[str, Any]) -> None:
        """필드 매핑을 mappings.properties 에 병합한다."""

        self._properties.update(properties)

    def check_structure(self) -> bool:
        """인덱스가 없으면 누적된 설정/매핑으로 생성한다. 생성했으면 True."""

        if self.exists():
            return False
        self.create_index()
        return True

    def exists(self, name: Optional[str] = None) -> bool:
        target = name or self._name
        with translate_errors("indices.exists", index=target):
            return bool(self._client.ensure_client().indices.exists(index=target))

    def create_index(self, name: Optional[str] = None) -> None:
        """인덱스를 생성한다. 다른 이름을 주면 같은 설정/매핑으로 그 이름의 인덱스를 만든다."""

        target = name or self._name
        kwargs: Dict[str, Any] = {"index": target, "mappings": self.mappings}
        if self._settings:
            kwargs["settings"] = dict(self._settings)
        with translate_errors("indices.create", index=target):
            response = self._client.ensure_client().indices.create(**kwargs)
        self._require_ack(response, "indices.create", index=target)
        self._logger.info(f"Elasticsearch 인덱스 생성 완료: {target}")

    def delete_index(self, name: Optional[str] = None) -> None:
        target = name or self._name
        with translate_errors("indices.delete", index=target):
            response = self._client.ensure_client().indices.delete(index=target)
        self._require_ack(response, "indices.delete", index=target)
        self._logger.info(f"Elasticsearch 인덱스 삭제 완료: {target}")

    def put_index_template(self, name: str, body: Any) -> None:
        """인덱스 템플릿을 등록한다.

        Args:
            name: 템플릿 이름.
            body: 템플릿 본문. 사전 또는 JSON 문자열. 키를 해석하지 않고 그대로 전달한다.
        """

        document = self._mapper.load_body(body)
        with translate_errors("indices.put_index_template", template=name):
            response = self._client.ensure_client().indices.put_index_template(
                name=name, body=document
            )
        self._require_ack(response, "indices.put_index_template", template=name)
        self._logger.info(f"Elasticsearch 인덱스 템플릿 등록 완료: {name}")

    def delete_index_template(self, name: str) -> None:
        with translate_errors("indices.delete_index_template", template=name):
            response = self._client.ensure_client().indices.delete_index_template(name=name)
        self._require_ack(response, "indices.delete_index_template", template=name)
        self._logger.info(f"Elasticsearch 인덱스 템플릿 삭제 완료: {name}")

    def refresh(self) -> None:
        """검색 일관성을 위해 인덱스를 강제로 리프레시한다."""

        with translate_errors("indices.refresh", index=self._name):
            self._client.ensure_client().indices.refresh(index=self._name)

    def doc_type(self, name: str) -> "DocType":
        """이 인덱스에 대한 문서 핸들을 만든다."""

        from search_index.integrations.elasticsearch.doc_type import DocType

        return DocType(self, name)

    def _require_ack(self, response: Any, action: str, **metadata: Any) -> None:
        acknowledged = response_body(response).get("acknowledged")
        if acknowledged is not True:
            self._logger.error(
                f"Elasticsearch 요청이 승인되지 않았습니다: {action}",
                action=action,
                **metadata,
            )
            raise NotAcknowledgedError(action, **metadata)
