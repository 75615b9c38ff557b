"""
목적: Elasticsearch 클라이언트 설정 모델을 정의한다.
설명: 명명된 클라이언트별 접속 정보를 Pydantic 모델로 검증하고, 병합된 설정 사전에서 추출한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_index/shared/config/loader.py, src/search_index/integrations/elasticsearch/registry.py
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from search_index.shared.const import SharedConst


class ElasticClientSettings(BaseModel):
    """명명된 Elasticsearch 클라이언트 하나의 접속 설정이다.

    Args:
        hosts: 접속 주소 목록.
        user: 기본 인증 사용자.
        password: 기본 인증 비밀번호.
        ca_certs: CA 인증서 경로.
        verify_certs: 인증서 검증 여부.
        ssl_assert_fingerprint: 인증서 지문 고정 값.
        request_timeout: 요청 타임아웃(초).
    """

    hosts: List[str] = Field(default_factory=lambda: [SharedConst.DEFAULT_ELASTIC_URL])
    user: Optional[str] = None
    password: Optional[str] = None
    ca_certs: Optional[str] = None
    verify_certs: Optional[bool] = None
    ssl_assert_fingerprint: Optional[str] = None
    request_timeout: Optional[float] = Field(default=None, gt=0)

    @field_validator("hosts", mode="before")
    @classmethod
    def _split_hosts(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("hosts")
    @classmethod
    def _require_hosts(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("hosts는 최소 하나 이상 필요합니다.")
        return value

    @classmethod
    def from_url(cls, url: str) -> "ElasticClientSettings":
        """단일 URL(쉼표 구분 허용)로 설정을 생성한다."""

        return cls(hosts=url)

    def client_options(self) -> Dict[str, Any]:
        """Elasticsearch 생성자에 전달할 옵션을 만든다."""

        options: Dict[str, Any] = {}
        if self.user is not None:
            options["basic_auth"] = (self.user, self.password or "")
        if self.ca_certs:
            options["ca_certs"] = self.ca_certs
        if self.verify_certs is not None:
            options["verify_certs"] = self.verify_certs
        if self.ssl_assert_fingerprint:
            options["ssl_assert_fingerprint"] = self.ssl_assert_fingerprint
        if self.request_timeout is not None:
            options["request_timeout"] = self.request_timeout
        return options


def load_client_settings(
    config: Mapping[str, Any],
    section: str = SharedConst.CONFIG_SECTION,
) -> Dict[str, ElasticClientSettings]:
    """병합된 설정에서 ``{section: {"clients": {...}}}`` 를 읽어 클라이언트 설정을 만든다."""

    clients = (config.get(section) or {}).get("clients") or {}
    if not isinstance(clients, Mapping):
        raise ValueError(f"{section}.clients는 객체여야 합니다.")
    return {
        str(name): ElasticClientSettings.model_validate(raw or {})
        for name, raw in clients.items()
    }
