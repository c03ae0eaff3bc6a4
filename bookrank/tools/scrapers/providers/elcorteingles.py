"""
El Corte Inglés (ES)
====================
El Corte Inglés 도서 판매 순위 (브라우저 렌더링, 쿠키 동의 필요) + 도서 상세

## 목록 구조
```
.product_preview
├── .product_preview-brand      ← 저자 (사이트가 저자를 Brand 항목에 표기)
├── .product_preview-title      ← 제목
├── img                         ← 표지 (lazy-load, 스크롤 필요)
└── a.js-product-click          ← 상세 링크
```

## 상세 구조
div.product_detail ("Características") 안의 dl.block__container 블록들에
소개 문단과 "Dimensiones", "Nº de páginas", "ISBN", "Editorial" 항목이 섞여 있습니다.
"""

from bs4 import BeautifulSoup, Tag

from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode
from bookrank.tools.scrapers.normalizer import to_absolute_url, with_placeholder
from bookrank.tools.scrapers.providers.base import (
    BaseDetailExtractor,
    BaseListExtractor,
    ProviderAdapter,
    first_attr,
    image_alt_title,
    image_sources,
    text_of,
)
from bookrank.tools.scrapers.render_wait import RenderWaitStrategy, ScrollPlan
from bookrank.tools.scrapers.text_fields import contains_any, first_long_text, match_labeled_value

CORTE_INGLES = Provider(
    code="es",
    name="El Corte Inglés",
    origin="https://www.elcorteingles.es",
    list_url="https://www.elcorteingles.es/mas-vendidos/libros/skus.department::0065/",
    list_mode=RenderMode.DYNAMIC,
    locale="es-ES",
)

AUTHOR_PLACEHOLDER = "Autor desconocido"

# 저자 칸이 이보다 길면 제목이 잘못 들어간 것으로 봄
SWAPPED_TITLE_MIN_LENGTH = 20

LINK_SELECTORS = ["a.js-product-click", "a"]
PLACEHOLDER_IMAGE_MARKERS = ("data:image", "blank")

DATASHEET_MARKERS = ("ISBN", "Dimensiones", "páginas")
DESCRIPTION_KEYWORDS = ("libro", "memorias", "historia")
DESCRIPTION_MIN_LENGTH = 200
PARAGRAPH_MIN_LENGTH = 100
BLOCK_MIN_LENGTH = 150

CHARACTERISTICS_TITLE = "Características"

# (필드, 라벨 정규식, 값 정규식)
LABELED_FIELDS = (
    ("dimensions", r"Dimensiones", r"[^\n]+"),
    ("pageCount", r"N[º°]\s*de\s*páginas", r"\d+"),
    ("isbn", r"ISBN", r"[0-9]+"),
    ("publisher", r"Editorial", r"[^\n]+"),
)


class CorteInglesListExtractor(BaseListExtractor):
    container_selector = ".product_preview"

    def parse_item(self, node: Tag, index: int) -> BookSummary:
        author = text_of(node.select_one(".product_preview-brand"))
        title = text_of(node.select_one(".product_preview-title"))

        if not title and len(author) > SWAPPED_TITLE_MIN_LENGTH:
            title, author = author, ""
        title = title or image_alt_title(node)

        image = self._image(node)
        if not image:
            raise self._skip("no usable cover image", "image")
        if not title:
            raise self._skip("no title", "title")

        return BookSummary(
            title=title,
            author=with_placeholder(author, AUTHOR_PLACEHOLDER),
            image=image,
            link=to_absolute_url(first_attr(node, LINK_SELECTORS, "href"), CORTE_INGLES.origin),
        )

    def _image(self, node: Tag) -> str:
        img = node.find("img")
        if img is None:
            return ""
        for src in image_sources(img):
            if not contains_any(src, PLACEHOLDER_IMAGE_MARKERS):
                return to_absolute_url(src, CORTE_INGLES.origin)
        return ""


class CorteInglesDetailExtractor(BaseDetailExtractor):
    def parse(self, soup: BeautifulSoup) -> BookDetail:
        section = soup.select_one("div.product_detail")
        characteristics = self._characteristics(section)
        fields = {
            name: match_labeled_value(characteristics, label, value) or ""
            for name, label, value in LABELED_FIELDS
        }
        return BookDetail(
            description=self._description(soup, section),
            characteristics=characteristics,
            **fields,
        )

    def _characteristics(self, section: Tag | None) -> str:
        if section is None:
            return ""
        title = text_of(section.select_one("div.product_detail-title"))
        if CHARACTERISTICS_TITLE not in title:
            return ""
        return text_of(section, multiline=True)

    def _description(self, soup: BeautifulSoup, section: Tag | None) -> str:
        # 1. Características 안의 긴 소개 블록
        if section is not None:
            blocks = (
                text
                for text in (text_of(b, multiline=True) for b in section.select("dl.block__container"))
                if not contains_any(text, DATASHEET_MARKERS)
            )
            description = first_long_text(blocks, DESCRIPTION_MIN_LENGTH)
            if description:
                return description

        # 2. 소개 문구가 들어 있는 일반 문단
        paragraphs = (
            text
            for text in (text_of(p, multiline=True) for p in soup.find_all("p"))
            if contains_any(text, DESCRIPTION_KEYWORDS)
        )
        description = first_long_text(paragraphs, PARAGRAPH_MIN_LENGTH)
        if description:
            return description

        # 3. 문서 어디든 긴 블록
        blocks = (
            text
            for text in (text_of(b, multiline=True) for b in soup.select("dl.block__container"))
            if not contains_any(text, DATASHEET_MARKERS[:2])
        )
        return first_long_text(blocks, BLOCK_MIN_LENGTH)


ADAPTER = ProviderAdapter(
    provider=CORTE_INGLES,
    list_extractor=CorteInglesListExtractor(CORTE_INGLES),
    detail_extractor=CorteInglesDetailExtractor(CORTE_INGLES),
    list_wait=RenderWaitStrategy(
        wait_until="domcontentloaded",
        navigation_timeout_ms=60000,
        cookie_selector="#onetrust-accept-btn-handler",
        ready_selector=".product_preview",
        scrolls=(
            ScrollPlan(
                target_fraction=0.5,
                incremental=True,
                step_px=100,
                interval_ms=100,
                settle_ms=2000,
            ),
        ),
        step_timeout_ms=30000,
    ),
    detail_wait=RenderWaitStrategy(
        idle_timeout_ms=15000,
        navigation_timeout_ms=40000,
        settle_ms=3000,
        scrolls=(
            ScrollPlan(target_fraction=0.5, settle_ms=2000),
            ScrollPlan(target_fraction=1.0, settle_ms=2000),
        ),
    ),
    list_stealth=True,
)
