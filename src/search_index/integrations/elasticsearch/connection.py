"""
목적: 명명된 Elasticsearch 연결 하나를 관리한다.
설명: 클라이언트 생성/종료와 무시할 상태 코드를 지정한 옵션 클라이언트 반환을 담당한다.
디자인 패턴: 매니저 패턴
참조: src/search_index/integrations/elasticsearch/registry.py, src/search_index/shared/config/settings.py
"""

from __future__ import annotations

import threading
from typing import Any, Optional

from elasticsearch import Elasticsearch

from search_index.shared.config import ElasticClientSettings
from search_index.shared.logging import LogContext, Logger, create_default_logger


class ElasticConnectionManager:
    """Elasticsearch 연결 관리자.

    Args:
        name: 레지스트리에 등록된 클라이언트 이름.
        settings: 접속 설정.
        logger: 주입 가능한 로거.
        elasticsearch_cls: 클라이언트 클래스. 테스트에서 가짜 클래스를 주입한다.
    """

    def __init__(
        self,
        name: str,
        settings: ElasticClientSettings,
        logger: Optional[Logger] = None,
        elasticsearch_cls: Any = Elasticsearch,
    ) -> None:
        self._name = name
        self._settings = settings
        self._logger = (logger or create_default_logger("ElasticConnectionManager")).with_context(
            LogContext(client=name)
        )
        self._elasticsearch_cls = elasticsearch_cls
        self._client: Optional[Any] = None
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def settings(self) -> ElasticClientSettings:
        return self._settings

    @property
    def connected(self) -> bool:
        return self._client is not None

    def connect(self) -> None:
        """Elasticsearch 연결을 초기화한다. 이미 연결되어 있으면 아무 것도 하지 않는다."""

        with self._lock:
            if self._client is not None:
                return
            self._logger.info(
                f"Elasticsearch 연결을 엽니다: {', '.join(self._settings.hosts)}",
            )
            self._client = self._elasticsearch_cls(
                self._settings.hosts,
                **self._settings.client_options(),
            )

    def close(self) -> None:
        """Elasticsearch 연결을 종료한다."""

        with self._lock:
            if self._client is None:
                return
            self._client.close()
            self._client = None
            self._logger.info("Elasticsearch 연결이 종료되었습니다.")

    def ensure_client(self) -> Any:
        """초기화된 Elasticsearch 클라이언트를 반환한다."""

        if self._client is None:
            raise RuntimeError(f"Elasticsearch 연결이 초기화되지 않았습니다: {self._name}")
        return self._client

    def with_options(self, ignore_status: int | list[int] | None) -> Any:
        """지정한 상태 코드를 오류로 보지 않는 옵션 클라이언트를 반환한다."""

        client = self.ensure_client()
        if ignore_status is None:
            return client
        return client.options(ignore_status=ignore_status)
