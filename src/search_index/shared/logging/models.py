"""
목적: 로깅에 필요한 공통 모델을 정의한다.
설명: 로그 레벨, 저장소 작업 컨텍스트(클라이언트/인덱스/문서), 레코드 구조를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/search_index/shared/logging/logger.py
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """로그 레벨 열거형."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogContext(BaseModel):
    """로그 컨텍스트 모델이다.

    Args:
        request_id: 요청 식별자.
        client: 명명된 Elasticsearch 클라이언트 이름.
        index: 대상 인덱스 이름.
        doc_id: 대상 문서 식별자.
        tags: 자유형 태그.
    """

    request_id: Optional[str] = None
    client: Optional[str] = None
    index: Optional[str] = None
    doc_id: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    def merged_with(self, other: Optional["LogContext"]) -> "LogContext":
        """other 값을 우선해 두 컨텍스트를 합친다."""

        if other is None:
            return self
        return LogContext(
            request_id=other.request_id or self.request_id,
            client=other.client or self.client,
            index=other.index or self.index,
            doc_id=other.doc_id or self.doc_id,
            tags={**self.tags, **other.tags},
        )


def _utc_now() -> datetime:
    """UTC 기준의 timezone-aware 시간을 반환한다."""

    return datetime.now(timezone.utc)


class LogRecord(BaseModel):
    """로그 레코드 모델이다.

    Args:
        level: 로그 레벨.
        message: 로그 메시지.
        timestamp: 기록 시각.
        logger_name: 로거 이름.
        context: 로그 컨텍스트.
        metadata: 추가 메타데이터.
    """

    level: LogLevel
    message: str
    timestamp: datetime = Field(default_factory=_utc_now)
    logger_name: str
    context: Optional[LogContext] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
