"""
목적: pytest 공통 로깅 훅과 환경 변수 로딩을 제공한다.
설명: .env 가 있으면 로딩하고, 테스트 시작/종료와 결과를 로깅해 실행 흐름을 추적한다.
디자인 패턴: 테스트 훅
참조: pyproject.toml, .env.sample
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv


_LOGGER = logging.getLogger("tests")


def _load_env_files() -> None:
    """환경 변수 파일을 로딩한다. 없으면 통합 테스트만 스킵된다."""

    root = Path(__file__).resolve().parents[1]
    env_path = root / ".env"
    if not env_path.exists():
        _LOGGER.info(".env 파일이 없어 환경 변수 로딩을 건너뜁니다.")
        return
    load_dotenv(env_path, override=False)


_load_env_files()


def pytest_sessionstart(session) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 시작을 로깅한다."""

    _LOGGER.info("테스트 세션 시작")


def pytest_sessionfinish(session, exitstatus: int) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 세션 종료를 로깅한다."""

    _LOGGER.info("테스트 세션 종료 (exitstatus=%s)", exitstatus)


def pytest_runtest_logstart(nodeid: str, location) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """각 테스트 시작을 로깅한다."""

    _LOGGER.info("테스트 시작: %s", nodeid)


def pytest_runtest_logreport(report) -> None:  # noqa: D401 - pytest 훅 시그니처 유지
    """테스트 결과를 로깅한다."""

    if report.when != "call":
        return
    if report.passed:
        _LOGGER.info("테스트 완료: %s", report.nodeid)
        return
    if report.skipped:
        _LOGGER.warning("테스트 스킵: %s", report.nodeid)
        return
    _LOGGER.error("테스트 실패: %s", report.nodeid)
