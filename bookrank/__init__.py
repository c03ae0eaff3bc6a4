"""
BookRank
========
국가별 서점(한국/미국/일본/스페인) 베스트셀러 목록과 도서 상세 정보를
정규화된 JSON으로 제공하는 스크래핑 서비스
"""

__version__ = "1.0.0"
