"""
Aladin (KR)
===========
알라딘 주간 베스트셀러 목록 (정적 HTML) + 도서 상세 (브라우저)

## 목록 구조
```
div.ss_book_box
├── img                         ← 표지 (image.aladin.co.kr/product/...)
└── .ss_book_list
    └── ul
        ├── li > a.bo3          ← 제목
        └── li                  ← "저자 (지은이), 역자 (옮긴이) | 출판사 | 2024년 1월"
```

## 상세 구조
- .Ere_prod_mconts_box: 라벨(.Ere_prod_mconts_LL) + 본문(.Ere_prod_mconts_R) 쌍
- #div_Story_All / #div_Story_Short: 줄거리 전체 / 요약 (토글)
- .introduction / .author_box: 저자 소개
- table.Ere_prod_info_table: 출판사, 출간일
"""

from bs4 import BeautifulSoup, Tag

from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode
from bookrank.tools.scrapers.normalizer import to_absolute_url, with_placeholder
from bookrank.tools.scrapers.providers.base import (
    BaseDetailExtractor,
    BaseListExtractor,
    ProviderAdapter,
    first_attr,
    first_text,
    image_alt_title,
    is_hidden,
    read_label_table,
    text_of,
)
from bookrank.tools.scrapers.render_wait import RenderWaitStrategy, ScrollPlan
from bookrank.tools.scrapers.text_fields import (
    AUTHOR_ROLE_KEYWORDS,
    find_role_line,
    publisher_from_role_parts,
    split_delimited,
)

ALADIN = Provider(
    code="kr",
    name="Aladin",
    origin="https://www.aladin.co.kr",
    list_url="https://www.aladin.co.kr/shop/common/wbest.aspx?BranchType=1&BestType=Bestseller",
    list_mode=RenderMode.STATIC,
    locale="ko-KR",
)

IMAGE_PREFIX = "https://image.aladin.co.kr/product"

AUTHOR_PLACEHOLDER = "저자 미상"
PUBLISHER_PLACEHOLDER = "출판사 미상"

TITLE_SELECTORS = ["a.bo3", ".ss_book_list a"]

DESCRIPTION_LABELS = ("책소개",)
PUBLISHER_LABELS = ("출판사",)
PUBLISH_DATE_LABELS = ("출간일", "발행일")


class AladinListExtractor(BaseListExtractor):
    container_selector = "div.ss_book_box"

    def parse_item(self, node: Tag, index: int) -> BookSummary:
        img = node.find("img")
        image = to_absolute_url(img.get("src") if img else "", ALADIN.origin)
        if not image:
            raise self._skip("no cover image", "image")
        if not image.startswith(IMAGE_PREFIX):
            # 배너/아이콘 이미지
            raise self._skip(f"image outside product path: {image}", "image")

        title = first_text(node, TITLE_SELECTORS) or image_alt_title(node)
        if not title:
            raise self._skip("no title", "title")

        lines = [text_of(li) for li in node.select(".ss_book_list ul li")]
        parts = find_role_line(lines, AUTHOR_ROLE_KEYWORDS) or []
        author = parts[0] if parts else ""

        if len(parts) > 1:
            publisher = publisher_from_role_parts(parts) or ""
        else:
            segments = split_delimited(text_of(node.select_one(".ss_book_list")))
            publisher = segments[1] if len(segments) > 1 else ""

        return BookSummary(
            title=title,
            author=with_placeholder(author, AUTHOR_PLACEHOLDER),
            publisher=with_placeholder(publisher, PUBLISHER_PLACEHOLDER),
            image=image,
            link=to_absolute_url(first_attr(node, TITLE_SELECTORS, "href"), ALADIN.origin),
        )


class AladinDetailExtractor(BaseDetailExtractor):
    def parse(self, soup: BeautifulSoup) -> BookDetail:
        table = read_label_table(
            soup.select("table.Ere_prod_info_table tr"),
            {"publisher": PUBLISHER_LABELS, "publishDate": PUBLISH_DATE_LABELS},
        )
        return BookDetail(
            description=self._description(soup),
            plot=self._plot(soup),
            authorInfo=first_text(soup, [".introduction", ".author_box"], multiline=True),
            publisher=table["publisher"],
            publishDate=table["publishDate"],
        )

    def _description(self, soup: BeautifulSoup) -> str:
        for box in soup.select(".Ere_prod_mconts_box"):
            label = text_of(box.select_one(".Ere_prod_mconts_LL"))
            content = text_of(box.select_one(".Ere_prod_mconts_R"), multiline=True)
            if label and content and any(keyword in label for keyword in DESCRIPTION_LABELS):
                return content
        return ""

    def _plot(self, soup: BeautifulSoup) -> str:
        """전체 줄거리가 펼쳐져 있으면 전체, 아니면 요약본"""
        story_all = soup.find(id="div_Story_All")
        if story_all is not None and not is_hidden(story_all):
            return text_of(story_all, multiline=True)

        story_short = soup.find(id="div_Story_Short")
        return text_of(story_short, multiline=True)


ADAPTER = ProviderAdapter(
    provider=ALADIN,
    list_extractor=AladinListExtractor(ALADIN),
    detail_extractor=AladinDetailExtractor(ALADIN),
    list_wait=None,
    detail_wait=RenderWaitStrategy(
        idle_timeout_ms=15000,
        navigation_timeout_ms=30000,
        settle_ms=3000,
        scrolls=(ScrollPlan(target_fraction=0.5, settle_ms=2000),),
    ),
)
