"""
목적: 외부 저장소 연동 패키지를 구성한다.
설명: Elasticsearch 문서 저장소 연동을 하위 패키지로 제공한다.
디자인 패턴: 패키지 퍼사드
참조: src/search_index/integrations/elasticsearch/__init__.py
"""
