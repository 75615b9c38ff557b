"""
목적: 설정 모듈 공개 API를 제공한다.
설명: 설정 병합 로더와 Elasticsearch 클라이언트 설정 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/search_index/shared/config/loader.py, src/search_index/shared/config/settings.py
"""

from search_index.shared.config.loader import ConfigLoader
from search_index.shared.config.settings import ElasticClientSettings, load_client_settings

__all__ = ["ConfigLoader", "ElasticClientSettings", "load_client_settings"]
