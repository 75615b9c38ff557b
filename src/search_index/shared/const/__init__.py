"""
목적: 공통 상수 집합을 제공한다.
설명: 설정 로더와 Elasticsearch 클라이언트가 공유하는 기본 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/search_index/shared/config/loader.py, src/search_index/shared/config/settings.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_PREFIX: 설정 환경 변수 접두사.
        ENV_NESTED_DELIMITER: 환경 변수 키를 중첩 경로로 해석하는 구분자.
        CONFIG_SECTION: Elasticsearch 클라이언트 설정 섹션 이름.
        DEFAULT_ELASTIC_URL: 호스트가 지정되지 않았을 때 사용하는 주소.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_PREFIX = "SEARCH_INDEX__"
    ENV_NESTED_DELIMITER = "__"
    CONFIG_SECTION = "elasticsearch"
    DEFAULT_ELASTIC_URL = "http://127.0.0.1:9200"


__all__ = ["SharedConst"]
