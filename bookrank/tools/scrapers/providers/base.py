"""
Provider Base
=============
서점별 추출기가 공유하는 HTML 헬퍼와 추출 틀

- BaseListExtractor: 후보 노드 순회 → 항목 파싱 → 제목 중복 제거 → 20개 제한
- BaseDetailExtractor: 문서 파싱 → 필드 추출 → 결과 요약 로그
- ProviderAdapter: 서점 하나의 추출기 쌍 + 렌더링 대기 설정
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup, Tag

from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode
from bookrank.domain.exceptions import ExtractionError
from bookrank.domain.interfaces.extractor import DetailExtractorProtocol, ListExtractorProtocol
from bookrank.shared.constants import LIST_LIMIT
from bookrank.tools.scrapers.normalizer import collapse_whitespace, dedupe_by_title
from bookrank.tools.scrapers.render_wait import RenderWaitStrategy
from bookrank.tools.scrapers.text_fields import contains_any

logger = logging.getLogger(__name__)

_DISPLAY_NONE = re.compile(r"display\s*:\s*none", re.IGNORECASE)


# ============= HTML helpers =============


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def text_of(node: Optional[Tag], multiline: bool = False) -> str:
    """
    요소의 보이는 텍스트 (innerText 근사)

    multiline=True면 블록 단위 줄바꿈을 유지하고, 아니면 공백 하나로 합칩니다.
    """
    if node is None:
        return ""
    if multiline:
        return node.get_text("\n", strip=True)
    return collapse_whitespace(node.get_text(" ", strip=True))


def first_text(root: Tag, selectors: Sequence[str], multiline: bool = False) -> str:
    """selector를 순서대로 시도해 처음으로 비어 있지 않은 텍스트 반환"""
    for selector in selectors:
        text = text_of(root.select_one(selector), multiline=multiline)
        if text:
            return text
    return ""


def first_attr(root: Tag, selectors: Sequence[str], attr: str) -> str:
    """selector를 순서대로 시도해 처음으로 비어 있지 않은 속성값 반환"""
    for selector in selectors:
        node = root.select_one(selector)
        if node is not None:
            value = (node.get(attr) or "").strip()
            if value:
                return value
    return ""


def image_alt_title(root: Tag) -> str:
    """제목 selector가 모두 실패했을 때 표지 이미지의 alt / title 속성"""
    img = root.find("img")
    if img is None:
        return ""
    return collapse_whitespace(img.get("alt") or img.get("title") or "")


def image_sources(img: Tag) -> list[str]:
    """lazy-load 대응: src와 data-src 모두 후보"""
    return [value.strip() for value in (img.get("src"), img.get("data-src")) if value and value.strip()]


def is_hidden(node: Optional[Tag]) -> bool:
    """인라인 style로 숨겨진 요소인지 (display: none)"""
    if node is None:
        return True
    return bool(_DISPLAY_NONE.search(node.get("style") or ""))


def read_label_table(
    rows: Iterable[Tag], fields: dict[str, Sequence[str]]
) -> dict[str, str]:
    """
    th/td 라벨 테이블에서 필드 값 읽기

    Args:
        rows: <tr> 요소들
        fields: {필드명: 라벨 키워드 목록} (라벨은 부분 문자열 매칭)

    Returns:
        {필드명: 값} (매칭되지 않은 필드는 빈 문자열, 먼저 나온 행이 우선)
    """
    values = {name: "" for name in fields}
    for row in rows:
        th = row.find("th")
        td = row.find("td")
        if th is None or td is None:
            continue
        label = text_of(th)
        value = text_of(td)
        for name, keywords in fields.items():
            if not values[name] and contains_any(label, keywords):
                values[name] = value
    return values


# ============= Extractor bases =============


class BaseListExtractor(ABC):
    """
    베스트셀러 목록 추출 틀

    서브클래스는 container_selector와 parse_item()만 정의합니다.
    parse_item()이 ExtractionError를 던지면 해당 후보는 버려집니다.
    """

    container_selector: str = ""
    limit: int = LIST_LIMIT

    def __init__(self, provider: Provider):
        self.provider = provider

    def select_root(self, soup: BeautifulSoup) -> Tag:
        """후보를 찾을 범위 (기본: 문서 전체)"""
        return soup

    @abstractmethod
    def parse_item(self, node: Tag, index: int) -> BookSummary:
        ...

    def extract(self, html: str) -> list[BookSummary]:
        soup = parse_html(html)
        root = self.select_root(soup)
        candidates = root.select(self.container_selector)

        parsed: list[BookSummary] = []
        for index, node in enumerate(candidates):
            try:
                parsed.append(self.parse_item(node, index))
            except ExtractionError as e:
                logger.debug(f"[{self.provider.code}] item {index + 1} skipped: {e}")

        books = dedupe_by_title(parsed)[: self.limit]
        logger.info(
            f"[{self.provider.code}] {len(books)} books extracted "
            f"({len(candidates)} candidates, {len(parsed)} valid)"
        )
        return books

    def _skip(self, reason: str, field: str) -> ExtractionError:
        return ExtractionError(reason, field=field, provider=self.provider.code)


class BaseDetailExtractor(ABC):
    """도서 상세 추출 틀 (필드 누락은 빈 문자열)"""

    def __init__(self, provider: Provider):
        self.provider = provider

    @abstractmethod
    def parse(self, soup: BeautifulSoup) -> BookDetail:
        ...

    def extract(self, html: str) -> BookDetail:
        detail = self.parse(parse_html(html))
        self._log_summary(detail)
        return detail

    def _log_summary(self, detail: BookDetail) -> None:
        found = []
        for name, value in detail.to_response().items():
            found.append(f"{name}={len(value)}자" if value else f"{name}=없음")
        logger.info(f"[{self.provider.code}] detail extracted: {', '.join(found)}")


# ============= Adapter =============


@dataclass(frozen=True)
class ProviderAdapter:
    """
    서점 하나를 다루는 데 필요한 모든 것

    Attributes:
        list_wait: 목록 페이지 대기 절차 (list_mode가 STATIC이면 None → HTTP fetch)
        detail_wait: 상세 페이지 대기 절차 (상세는 항상 브라우저 사용)
        list_stealth / detail_stealth: 자동화 흔적 숨김 세션 사용 여부
            (상세 페이지는 기본 사용)
        block_markers: 봇 차단 페이지 판별 문구

    Raises:
        ValueError: list_mode와 list_wait 설정이 맞지 않을 때
    """

    provider: Provider
    list_extractor: ListExtractorProtocol
    detail_extractor: DetailExtractorProtocol
    list_wait: Optional[RenderWaitStrategy]
    detail_wait: RenderWaitStrategy
    list_stealth: bool = False
    detail_stealth: bool = True
    block_markers: tuple[str, ...] = ()

    def __post_init__(self):
        if self.renders_list == (self.list_wait is None):
            raise ValueError(
                f"[{self.code}] list_mode={self.provider.list_mode.value} "
                f"does not match list_wait={self.list_wait!r}"
            )

    @property
    def code(self) -> str:
        return self.provider.code

    @property
    def renders_list(self) -> bool:
        """목록 페이지를 브라우저로 렌더링하는지 여부"""
        return self.provider.list_mode is RenderMode.DYNAMIC

    def is_blocked(self, html: str) -> bool:
        return any(marker in html for marker in self.block_markers)
