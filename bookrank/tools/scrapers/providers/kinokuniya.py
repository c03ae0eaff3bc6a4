"""
Kinokuniya (JP)
===============
紀伊國屋書店 주간 랭킹 (브라우저 렌더링) + 도서 상세

목록 마크업에 고정된 클래스가 적어 제목/저자/이미지 모두 여러 후보를
순서대로 시도합니다.

## 상세 구조
- p[itemprop="description"]: 책 정보
- .career_box: 내용 설명 단락 + "著者紹介" 이후 저자 소개가 한 덩어리로 들어 있음
- table: 出版社, 発行年月 / 発売日
"""

from bs4 import BeautifulSoup, Tag

from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode
from bookrank.tools.scrapers.normalizer import collapse_whitespace, to_absolute_url, with_placeholder
from bookrank.tools.scrapers.providers.base import (
    BaseDetailExtractor,
    BaseListExtractor,
    ProviderAdapter,
    first_text,
    image_alt_title,
    image_sources,
    read_label_table,
    text_of,
)
from bookrank.tools.scrapers.render_wait import RenderWaitStrategy, ScrollPlan
from bookrank.tools.scrapers.text_fields import collect_section, contains_any

KINOKUNIYA = Provider(
    code="jp",
    name="Kinokuniya",
    origin="https://www.kinokuniya.co.jp",
    list_url="https://www.kinokuniya.co.jp/disp/CKnRankingPageCList.jsp?dispNo=107002001001&vTp=w",
    list_mode=RenderMode.DYNAMIC,
    locale="ja-JP",
)

AUTHOR_PLACEHOLDER = "著者不明"
AUTHOR_MARK = "著"

TITLE_LINK_SELECTORS = ['a[href*="dsg"]', 'a[href*="product"]']
TITLE_SELECTORS = [
    ".booksname",
    '[class*="title"]',
    "h3",
    "h4",
    "strong",
    'span[class*="name"]',
]

# 랭킹 숫자, 아이콘, 배너 등 표지가 아닌 이미지
IMAGE_DENYLIST = (
    "ranking",
    "number",
    "icon",
    "logo",
    "banner",
    "service",
    "event",
    "business",
    "store-event",
    "inc/",
)
IMAGE_ALLOWLIST = ("product", "goods", "item")

AUTHOR_SECTION_START = ("저자", "著者", "作者", "저자 등 소개", "著者紹介")
AUTHOR_SECTION_STOP = ("내용 설명", "内容説明", "목차", "目次")
PLOT_PARAGRAPHS = 3

PUBLISHER_LABELS = ("出版社", "출판사")
PUBLISH_DATE_LABELS = ("発行年月", "発売日", "발행일")


def is_cover_image(src: str) -> bool:
    if contains_any(src, IMAGE_DENYLIST):
        return False
    return contains_any(src, IMAGE_ALLOWLIST)


class KinokuniyaListExtractor(BaseListExtractor):
    container_selector = ".list_area_wrap > div"

    def parse_item(self, node: Tag, index: int) -> BookSummary:
        title = collapse_whitespace(
            first_text(node, TITLE_LINK_SELECTORS)
            or first_text(node, TITLE_SELECTORS)
            or image_alt_title(node)
        )
        if not title:
            raise self._skip("no title", "title")

        link_el = node.find("a", href=True)
        link = to_absolute_url(link_el["href"] if link_el else "", KINOKUNIYA.origin)

        return BookSummary(
            title=title,
            author=with_placeholder(self._author(node), AUTHOR_PLACEHOLDER),
            image=self._image(node),
            link=link,
        )

    def _author(self, node: Tag) -> str:
        author = text_of(node.select_one(".clearfix.ml10"))
        if author:
            return author

        # "○○ 著" 형태의 텍스트를 가진 가장 가까운 요소
        mark = node.find(string=lambda s: s is not None and AUTHOR_MARK in s)
        if mark is not None and mark.parent is not None:
            return text_of(mark.parent)
        return ""

    def _image(self, node: Tag) -> str:
        for img in node.find_all("img"):
            for src in image_sources(img):
                if is_cover_image(src):
                    return to_absolute_url(src, KINOKUNIYA.origin)
        return ""


class KinokuniyaDetailExtractor(BaseDetailExtractor):
    def parse(self, soup: BeautifulSoup) -> BookDetail:
        career_box = soup.select_one(".career_box")
        table = read_label_table(
            soup.select("table tr"),
            {"publisher": PUBLISHER_LABELS, "publishDate": PUBLISH_DATE_LABELS},
        )
        return BookDetail(
            description=text_of(soup.select_one('p[itemprop="description"]'), multiline=True),
            plot=self._plot(career_box),
            authorInfo=self._author_info(career_box),
            publisher=table["publisher"],
            publishDate=table["publishDate"],
        )

    def _plot(self, career_box: Tag | None) -> str:
        """career_box 앞쪽 단락들 (itemprop 설명 단락 제외)"""
        if career_box is None:
            return ""
        paragraphs = [
            text_of(p, multiline=True)
            for p in career_box.find_all("p")
            if not p.has_attr("itemprop")
        ]
        paragraphs = [p for p in paragraphs if p]
        return "\n\n".join(paragraphs[:PLOT_PARAGRAPHS])

    def _author_info(self, career_box: Tag | None) -> str:
        if career_box is None:
            return ""
        return collect_section(
            text_of(career_box, multiline=True), AUTHOR_SECTION_START, AUTHOR_SECTION_STOP
        )


ADAPTER = ProviderAdapter(
    provider=KINOKUNIYA,
    list_extractor=KinokuniyaListExtractor(KINOKUNIYA),
    detail_extractor=KinokuniyaDetailExtractor(KINOKUNIYA),
    list_wait=RenderWaitStrategy(
        idle_timeout_ms=15000,
        navigation_timeout_ms=30000,
        settle_ms=5000,
    ),
    detail_wait=RenderWaitStrategy(
        idle_timeout_ms=15000,
        navigation_timeout_ms=30000,
        settle_ms=3000,
        scrolls=(ScrollPlan(target_fraction=0.5, settle_ms=2000),),
    ),
)
