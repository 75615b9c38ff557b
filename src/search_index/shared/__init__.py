"""
목적: shared 패키지의 공개 API를 제공한다.
설명: 예외, 로깅, 설정 등 하위 공통 모듈에 대한 접근 포인트를 제공한다.
디자인 패턴: 퍼사드
참조: src/search_index/shared/exceptions, src/search_index/shared/logging, src/search_index/shared/config
"""

from search_index.shared.config import ConfigLoader, ElasticClientSettings, load_client_settings
from search_index.shared.exceptions import BaseAppException, ExceptionDetail
from search_index.shared.logging import (
    InMemoryLogger,
    InMemoryLogRepository,
    LogContext,
    LogLevel,
    LogRecord,
    Logger,
    LogRepository,
    create_default_logger,
)

__all__ = [
    "BaseAppException",
    "ExceptionDetail",
    "ConfigLoader",
    "ElasticClientSettings",
    "load_client_settings",
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogRepository",
    "InMemoryLogger",
    "create_default_logger",
]
