"""
Amazon (US)
===========
Amazon Books 베스트셀러 (브라우저 렌더링) + 도서 상세 (stealth 세션)

## 목록 구조
```
#zg-right-col                       ← 순위 컬럼 (광고 영역 제외용, 없으면 문서 전체)
└── div[data-asin]
    ├── img                         ← 표지 (m.media-amazon.com/images/I/...)
    ├── ._cDEzb_p13n-sc-css-line-clamp-1_1Fn1y   ← 제목 (클래스명은 자주 바뀜)
    └── ._cDEzb_p13n-sc-css-line-clamp-1_EWgCb   ← 저자
```

## 상세 구조
- #bookDescription_feature_div .a-expander-content: 책 설명 (expander 클릭 필요)
- #editorialReviews_feature_div: 편집자 리뷰 / 저자 정보
- #detailBullets_feature_div li: "Publisher : ...", "Publication date : ..."

## 차단
로봇 확인 페이지가 오면 BlockedError로 처리합니다.
"""

from bs4 import BeautifulSoup, Tag

from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode
from bookrank.tools.scrapers.normalizer import to_absolute_url, with_placeholder
from bookrank.tools.scrapers.providers.base import (
    BaseDetailExtractor,
    BaseListExtractor,
    ProviderAdapter,
    first_text,
    image_alt_title,
    image_sources,
    text_of,
)
from bookrank.tools.scrapers.render_wait import RenderWaitStrategy, ScrollPlan
from bookrank.tools.scrapers.text_fields import first_long_text, value_after_colon

AMAZON = Provider(
    code="us",
    name="Amazon",
    origin="https://www.amazon.com",
    list_url="https://www.amazon.com/best-sellers-books-Amazon/zgbs/books",
    list_mode=RenderMode.DYNAMIC,
    locale="en-US",
)

AUTHOR_PLACEHOLDER = "Unknown Author"

# 제목 selector (우선순위 순)
TITLE_SELECTORS = [
    "._cDEzb_p13n-sc-css-line-clamp-1_1Fn1y",
    ".p13n-sc-truncate",
    "div._cDEzb_p13n-sc-css-line-clamp-3_g3dy1",
]

AUTHOR_SELECTORS = [
    "._cDEzb_p13n-sc-css-line-clamp-1_EWgCb",
    ".a-size-small.a-link-child",
    "a.a-size-small",
    "span.a-size-small",
]

IMAGE_HOSTS = ("media-amazon.com/images/", "ssl-images-amazon.com/images/")

DETAIL_BULLET_SELECTOR = (
    "#detailBullets_feature_div li, #detailBulletsWrapper_feature_div li, .detail-bullet-list li"
)
PUBLISHER_LABELS = ("Publisher", "출판")
PUBLISH_DATE_LABELS = ("Publication date", "발행일")

DESCRIPTION_MIN_LENGTH = 50
AUTHOR_INFO_MIN_LENGTH = 100

BLOCK_MARKERS = (
    "Enter the characters you see below",
    "Sorry, we just need to make sure you're not a robot",
    "Type the characters you see in this image",
    "api-services-support@amazon.com",
)


class AmazonListExtractor(BaseListExtractor):
    container_selector = "div[data-asin]"

    def select_root(self, soup: BeautifulSoup) -> Tag:
        return soup.select_one("#zg-right-col") or soup

    def parse_item(self, node: Tag, index: int) -> BookSummary:
        if not (node.get("data-asin") or "").strip():
            raise self._skip("empty data-asin (ad slot)", "asin")

        title = first_text(node, TITLE_SELECTORS) or image_alt_title(node)
        if not title:
            raise self._skip("no title", "title")

        author = first_text(node, AUTHOR_SELECTORS)

        link_el = node.find("a", href=True)
        link = to_absolute_url(link_el["href"] if link_el else "", AMAZON.origin)

        return BookSummary(
            title=title,
            author=with_placeholder(author, AUTHOR_PLACEHOLDER),
            image=self._image(node),
            link=link,
        )

    def _image(self, node: Tag) -> str:
        for img in node.find_all("img"):
            for src in image_sources(img):
                url = to_absolute_url(src, AMAZON.origin)
                if any(host in url for host in IMAGE_HOSTS):
                    return url
        return ""


class AmazonDetailExtractor(BaseDetailExtractor):
    def parse(self, soup: BeautifulSoup) -> BookDetail:
        publisher, publish_date = self._publication(soup)
        return BookDetail(
            description=self._description(soup),
            authorInfo=self._author_info(soup),
            publisher=publisher,
            publishDate=publish_date,
        )

    def _description(self, soup: BeautifulSoup) -> str:
        container = soup.select_one("#bookDescription_feature_div")
        if container is None:
            return ""

        expander = text_of(container.select_one(".a-expander-content"), multiline=True)
        if len(expander) > DESCRIPTION_MIN_LENGTH:
            return expander

        spans = (text_of(span, multiline=True) for span in container.find_all("span"))
        return first_long_text(spans, DESCRIPTION_MIN_LENGTH)

    def _author_info(self, soup: BeautifulSoup) -> str:
        container = soup.select_one("#editorialReviews_feature_div")
        if container is None:
            return ""

        sections = container.select(".a-section.a-spacing-small.a-padding-small")
        text = first_long_text(
            (text_of(section, multiline=True) for section in sections), AUTHOR_INFO_MIN_LENGTH
        )
        if text:
            return text

        return first_long_text([text_of(container, multiline=True)], AUTHOR_INFO_MIN_LENGTH)

    def _publication(self, soup: BeautifulSoup) -> tuple[str, str]:
        publisher = ""
        publish_date = ""
        for li in soup.select(DETAIL_BULLET_SELECTOR):
            text = text_of(li)
            publisher = publisher or value_after_colon(text, PUBLISHER_LABELS) or ""
            publish_date = publish_date or value_after_colon(text, PUBLISH_DATE_LABELS) or ""
        return publisher, publish_date


ADAPTER = ProviderAdapter(
    provider=AMAZON,
    list_extractor=AmazonListExtractor(AMAZON),
    detail_extractor=AmazonDetailExtractor(AMAZON),
    list_wait=RenderWaitStrategy(
        idle_timeout_ms=15000,
        navigation_timeout_ms=30000,
        settle_ms=3000,
    ),
    detail_wait=RenderWaitStrategy(
        idle_timeout_ms=15000,
        navigation_timeout_ms=40000,
        scrolls=(
            ScrollPlan(target_fraction=0.5, settle_ms=2000),
            ScrollPlan(target_fraction=1.0, settle_ms=3000),
        ),
        expander_selectors=('[data-a-expander-name="book_description_expander"]',),
    ),
    block_markers=BLOCK_MARKERS,
)
