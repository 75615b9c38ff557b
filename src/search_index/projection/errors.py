"""
목적: 구조 프로젝션 엔진의 예외 계층을 정의한다.
설명: 바인딩 대상 오류, 값 형태 불일치, 지원하지 않는 타입 조합을 에러 코드와 함께 표현한다.
디자인 패턴: 도메인 예외 객체
참조: src/search_index/shared/exceptions/base.py, src/search_index/projection/binder.py
"""

from __future__ import annotations

from typing import Any, Optional

from search_index.shared.exceptions import BaseAppException, ExceptionDetail


class ProjectionError(BaseAppException):
    """프로젝션 예외 공통 부모 클래스이다.

    모든 하위 예외는 로컬/동기 오류이며 재시도해도 결과가 바뀌지 않는다.
    """

    CODE = "PROJECTION_ERROR"

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        cause: Optional[str] = None,
        hint: Optional[str] = None,
        **metadata: Any,
    ) -> None:
        if path:
            metadata["path"] = path
        detail = ExceptionDetail(code=self.CODE, cause=cause, hint=hint, metadata=metadata)
        super().__init__(message, detail)

    @property
    def path(self) -> str:
        """오류가 발생한 필드 경로를 반환한다. 최상위 대상이면 빈 문자열이다."""

        return self.detail.metadata.get("path", "")


class InvalidTarget(ProjectionError):
    """바인딩 대상이 값을 받을 수 있는 가변 인스턴스가 아닐 때 발생한다."""

    CODE = "PROJECTION_INVALID_TARGET"


class ShapeMismatch(ProjectionError):
    """원본 값의 형태가 대상 필드의 선언 형태와 다를 때 발생한다."""

    CODE = "PROJECTION_SHAPE_MISMATCH"


class UnsupportedType(ProjectionError):
    """원본/대상 종류 조합에 대한 변환 규칙이 없을 때 발생한다."""

    CODE = "PROJECTION_UNSUPPORTED_TYPE"

    @property
    def value(self) -> Any:
        """문제가 된 원본 값을 반환한다."""

        return self.detail.metadata.get("value")


__all__ = ["ProjectionError", "InvalidTarget", "ShapeMismatch", "UnsupportedType"]
