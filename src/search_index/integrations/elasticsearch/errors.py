"""
목적: 문서 저장소(Elasticsearch) 예외 계층을 정의한다.
설명: 미등록 클라이언트, 미승인 관리 요청, 전송/API 오류를 에러 코드와 함께 표현한다.
디자인 패턴: 도메인 예외 객체
참조: src/search_index/shared/exceptions/base.py, src/search_index/integrations/elasticsearch/index.py
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from elasticsearch import ApiError, TransportError

from search_index.shared.exceptions import BaseAppException, ExceptionDetail


class DocumentStoreError(BaseAppException):
    """문서 저장소 예외 공통 부모 클래스이다."""


class UnknownClientError(DocumentStoreError):
    """등록되지 않은 이름으로 클라이언트를 요청했을 때 발생한다."""

    def __init__(self, name: str) -> None:
        detail = ExceptionDetail(
            code="STORE_UNKNOWN_CLIENT",
            cause=f"client={name}",
            hint="ClientRegistry.register 로 먼저 접속 정보를 등록하세요.",
            metadata={"client": name},
        )
        super().__init__(f"알 수 없는 Elasticsearch 클라이언트입니다: {name}", detail)


class NotAcknowledgedError(DocumentStoreError):
    """관리 요청(인덱스/템플릿 생성·삭제)이 승인되지 않았을 때 발생한다."""

    def __init__(self, action: str, **metadata: Any) -> None:
        detail = ExceptionDetail(
            code="STORE_NOT_ACKNOWLEDGED",
            cause=f"action={action}",
            metadata={"action": action, **metadata},
        )
        super().__init__(f"Elasticsearch가 요청을 승인하지 않았습니다: {action}", detail)


class StoreRequestError(DocumentStoreError):
    """Elasticsearch 요청이 전송 또는 API 오류로 실패했을 때 발생한다."""

    def __init__(self, action: str, original: Exception, **metadata: Any) -> None:
        status: Optional[int] = getattr(original, "status_code", None)
        if status is None:
            status = getattr(getattr(original, "meta", None), "status", None)
        detail = ExceptionDetail(
            code="STORE_REQUEST_FAILED",
            cause=str(original),
            metadata={"action": action, "status": status, **metadata},
        )
        super().__init__(f"Elasticsearch 요청에 실패했습니다: {action}", detail, original)


@contextmanager
def translate_errors(action: str, **metadata: Any) -> Iterator[None]:
    """elasticsearch 예외를 StoreRequestError 로 변환한다."""

    try:
        yield
    except (ApiError, TransportError) as exc:
        raise StoreRequestError(action, exc, **metadata) from exc


__all__ = [
    "DocumentStoreError",
    "UnknownClientError",
    "NotAcknowledgedError",
    "StoreRequestError",
    "translate_errors",
]
