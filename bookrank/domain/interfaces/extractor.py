"""
Extractor Protocols
===================
서점별 목록/상세 추출기의 추상 인터페이스

구현체:
- AladinListExtractor / AladinDetailExtractor (tools/scrapers/providers/aladin.py)
- AmazonListExtractor / AmazonDetailExtractor (tools/scrapers/providers/amazon.py)
- KinokuniyaListExtractor / KinokuniyaDetailExtractor (tools/scrapers/providers/kinokuniya.py)
- CorteInglesListExtractor / CorteInglesDetailExtractor (tools/scrapers/providers/elcorteingles.py)
"""

from typing import Protocol, runtime_checkable

from bookrank.domain.entities.book import BookDetail, BookSummary


@runtime_checkable
class ListExtractorProtocol(Protocol):
    """
    베스트셀러 목록 추출기

    렌더링이 끝난 HTML 문서를 받아 최대 20개의 BookSummary를 반환합니다.
    필드 누락은 예외가 아니라 placeholder 또는 후보 제외로 처리합니다.
    """

    def extract(self, html: str) -> list[BookSummary]:
        ...


@runtime_checkable
class DetailExtractorProtocol(Protocol):
    """
    도서 상세 추출기

    찾지 못한 필드는 빈 문자열로 채운 BookDetail을 반환하며, 예외를 던지지
    않습니다.
    """

    def extract(self, html: str) -> BookDetail:
        ...
