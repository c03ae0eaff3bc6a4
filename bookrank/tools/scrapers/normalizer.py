"""
Normalizer
==========
URL 절대화, placeholder 치환, 제목 기준 중복 제거 (I/O 없는 순수 함수)
"""

import re
from collections.abc import Iterable
from typing import Optional
from urllib.parse import urljoin

from bookrank.domain.entities.book import BookSummary

_WHITESPACE = re.compile(r"\s+")
_ABSOLUTE_SCHEMES = ("http://", "https://", "data:")


def to_absolute_url(href: Optional[str], origin: str) -> str:
    """
    서점 기준 상대 경로를 절대 URL로 변환

    - "//host/path" → "https://host/path"
    - "/a/b" → origin + "/a/b"
    - 이미 절대 URL이면 그대로 (멱등)
    - 빈 값이면 빈 문자열
    """
    if not href:
        return ""
    href = href.strip()
    if not href:
        return ""
    if href.startswith("//"):
        return "https:" + href
    if href.startswith(_ABSOLUTE_SCHEMES):
        return href
    if href.startswith("/"):
        return origin.rstrip("/") + href
    return urljoin(origin.rstrip("/") + "/", href)


def with_placeholder(value: Optional[str], placeholder: str) -> str:
    """빈 텍스트 필드를 서점별 placeholder로 치환"""
    if value is None:
        return placeholder
    value = value.strip()
    return value or placeholder


def collapse_whitespace(text: Optional[str]) -> str:
    """줄바꿈/연속 공백을 한 칸으로"""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def dedupe_by_title(
    books: Iterable[BookSummary], seen: Optional[set[str]] = None
) -> list[BookSummary]:
    """
    제목이 완전히 같은 도서는 첫 번째만 남김

    Args:
        books: 도서 목록
        seen: 요청 단위로 공유할 제목 집합 (없으면 새로 생성)

    Returns:
        중복 제거된 새 리스트 (입력 순서 유지)
    """
    seen = set() if seen is None else seen
    unique = []
    for book in books:
        if book.title in seen:
            continue
        seen.add(book.title)
        unique.append(book)
    return unique
