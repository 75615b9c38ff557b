"""
목적: 이름 -> Elasticsearch 연결 레지스트리를 제공한다.
설명: 호출자가 소유하는 레지스트리에 접속 정보를 등록하고, 이름마다 연결 하나를 만들어 재사용한다.
디자인 패턴: 레지스트리, 지연 초기화
참조: src/search_index/integrations/elasticsearch/connection.py, src/search_index/shared/config/settings.py
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional, Union

from elasticsearch import Elasticsearch

from search_index.integrations.elasticsearch.connection import ElasticConnectionManager
from search_index.integrations.elasticsearch.errors import UnknownClientError
from search_index.shared.config import ElasticClientSettings, load_client_settings
from search_index.shared.logging import Logger, create_default_logger


class ClientRegistry:
    """명명된 Elasticsearch 클라이언트 레지스트리.

    Args:
        settings: 이름별 초기 접속 설정.
        logger: 주입 가능한 로거. 생성되는 연결 관리자에도 전달된다.
        elasticsearch_cls: 클라이언트 클래스.
    """

    def __init__(
        self,
        settings: Optional[Mapping[str, ElasticClientSettings]] = None,
        logger: Optional[Logger] = None,
        elasticsearch_cls: Any = Elasticsearch,
    ) -> None:
        self._settings: Dict[str, ElasticClientSettings] = dict(settings or {})
        self._connections: Dict[str, ElasticConnectionManager] = {}
        self._logger = logger or create_default_logger("ClientRegistry")
        self._elasticsearch_cls = elasticsearch_cls
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        logger: Optional[Logger] = None,
        elasticsearch_cls: Any = Elasticsearch,
    ) -> "ClientRegistry":
        """ConfigLoader 가 만든 설정 사전으로 레지스트리를 만든다."""

        return cls(load_client_settings(config), logger=logger, elasticsearch_cls=elasticsearch_cls)

    def register(self, name: str, target: Union[str, ElasticClientSettings]) -> None:
        """이름에 접속 정보를 등록한다. 이미 열린 연결이 있으면 닫고 다음 요청 때 다시 연다."""

        if not name:
            raise ValueError("클라이언트 이름은 비어 있을 수 없습니다.")
        settings = ElasticClientSettings.from_url(target) if isinstance(target, str) else target
        with self._lock:
            self._settings[name] = settings
            stale = self._connections.pop(name, None)
        if stale is not None:
            stale.close()

    def client(self, name: str) -> ElasticConnectionManager:
        """이름에 해당하는 연결을 반환한다. 처음 요청될 때 연결을 연다."""

        with self._lock:
            connection = self._connections.get(name)
            if connection is not None:
                return connection
            settings = self._settings.get(name)
            if settings is None:
                raise UnknownClientError(name)
            connection = ElasticConnectionManager(
                name,
                settings,
                logger=self._logger,
                elasticsearch_cls=self._elasticsearch_cls,
            )
            connection.connect()
            self._connections[name] = connection
            return connection

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._settings)

    def close(self) -> None:
        """열린 연결을 모두 닫는다. 등록된 접속 정보는 유지된다."""

        with self._lock:
            connections = list(self._connections.values())
            self._connections.clear()
        for connection in connections:
            connection.close()

    def __enter__(self) -> "ClientRegistry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
