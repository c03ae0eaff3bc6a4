"""
Book Service
============
요청 하나를 처리하는 스크래핑 흐름

## 목록
```
get_adapter(code)
  ├── STATIC  → StaticFetcher.fetch(list_url)
  └── DYNAMIC → session.open → navigate(list_wait) → content → close
→ list_extractor.extract(html)   (워커 스레드에서 파싱)
```

## 상세
```
url 검증 (세션 생성 전) → get_adapter(code)
→ session.open (stealth) → navigate(detail_wait) → content → close
→ 차단 페이지 확인 → detail_extractor.extract(html)   (워커 스레드에서 파싱)
```

세션은 어떤 경로로 끝나든 정확히 한 번 close됩니다. 실패는 BookRankError로
통일되어 API 계층으로 올라갑니다.
"""

import asyncio
import logging
from typing import Optional

from bookrank.domain.entities.book import BookDetail, BookSummary
from bookrank.domain.exceptions import (
    BlockedError,
    BookRankError,
    NavigationError,
    ProviderNotFoundError,
    ValidationError,
)
from bookrank.tools.scrapers.browser_session import BrowserSessionFactory
from bookrank.tools.scrapers.providers import PROVIDER_ADAPTERS, ProviderAdapter
from bookrank.tools.scrapers.render_wait import RenderWaitStrategy
from bookrank.tools.scrapers.static_fetcher import StaticFetcher

logger = logging.getLogger(__name__)

DETAIL_ERROR_LABEL = "상세 정보 크롤링 실패"


class BookService:
    """
    서점별 베스트셀러 목록 / 도서 상세 조회

    Usage:
        service = BookService(BrowserSessionFactory(max_sessions=3), StaticFetcher())
        books = await service.list_books("kr")
        detail = await service.book_detail("kr", "https://www.aladin.co.kr/shop/wproduct.aspx?ItemId=1")
    """

    def __init__(
        self,
        session_factory: BrowserSessionFactory,
        fetcher: StaticFetcher,
        adapters: Optional[dict[str, ProviderAdapter]] = None,
    ):
        self.session_factory = session_factory
        self.fetcher = fetcher
        self.adapters = PROVIDER_ADAPTERS if adapters is None else adapters

    @property
    def provider_codes(self) -> list[str]:
        return list(self.adapters)

    def get_adapter(self, code: str) -> ProviderAdapter:
        adapter = self.adapters.get(code)
        if adapter is None:
            raise ProviderNotFoundError(f"Unknown provider: {code}", provider=code)
        return adapter

    async def list_books(self, code: str) -> list[BookSummary]:
        """
        베스트셀러 목록 (최대 20권, 제목 중복 제거)

        Raises:
            ProviderNotFoundError: 등록되지 않은 서점
            BookRankError: 페이지 로드 / 추출 실패 (error = "{CODE} 크롤링 실패")
        """
        adapter = self.get_adapter(code)
        provider = adapter.provider
        label = f"{code.upper()} 크롤링 실패"
        logger.info(f"[{code}] list request: {provider.list_url}")

        try:
            if adapter.renders_list:
                html = await self._render(
                    adapter, provider.list_url, adapter.list_wait, adapter.list_stealth
                )
            else:
                html = await self.fetcher.fetch(provider.list_url)
            books = await asyncio.to_thread(adapter.list_extractor.extract, html)
        except BookRankError as e:
            raise self._annotate(e, code, label)
        except Exception as e:
            logger.error(f"[{code}] list request failed: {type(e).__name__}: {e}")
            error = BookRankError(str(e), provider=code)
            error.error = label
            raise error from e

        logger.info(f"[{code}] list request done: {len(books)} books")
        return books

    async def book_detail(self, code: str, url: Optional[str]) -> BookDetail:
        """
        도서 상세 (best-effort, 항상 브라우저 렌더링)

        Raises:
            ValidationError: url 누락 (브라우저를 띄우기 전에 검사)
            ProviderNotFoundError: 등록되지 않은 서점
            BookRankError: 페이지 로드 / 추출 실패 (error = "상세 정보 크롤링 실패")
        """
        if not url or not url.strip():
            raise ValidationError("Query parameter 'url' is required", field="url", provider=code)
        url = url.strip()

        adapter = self.get_adapter(code)
        logger.info(f"[{code}] detail request: {url}")

        try:
            html = await self._render(adapter, url, adapter.detail_wait, adapter.detail_stealth)
            if adapter.is_blocked(html):
                raise BlockedError("Robot check page served", url=url, stage="evaluate")
            detail = await asyncio.to_thread(adapter.detail_extractor.extract, html)
        except BookRankError as e:
            raise self._annotate(e, code, DETAIL_ERROR_LABEL)
        except Exception as e:
            logger.error(f"[{code}] detail request failed: {type(e).__name__}: {e}")
            error = BookRankError(str(e), provider=code)
            error.error = DETAIL_ERROR_LABEL
            raise error from e

        return detail

    async def _render(
        self,
        adapter: ProviderAdapter,
        url: str,
        strategy: RenderWaitStrategy,
        stealth: bool,
    ) -> str:
        """세션 하나로 페이지를 열고 렌더링된 HTML 반환 (세션은 항상 닫힘)"""
        session = self.session_factory.create(stealth=stealth, locale=adapter.provider.locale)
        try:
            await session.open()
            steps = await session.navigate(url, strategy)
            logger.debug(f"[{adapter.code}] wait steps completed: {steps}")
            return await session.content()
        finally:
            await session.close()

    @staticmethod
    def _annotate(error: BookRankError, code: str, label: str) -> BookRankError:
        """서점 코드 / 에러 요약을 채우고 로그 (검증 오류는 그대로)"""
        error.provider = error.provider or code
        if isinstance(error, ValidationError):
            return error
        error.error = label

        stage = getattr(error, "stage", None)
        if isinstance(error, NavigationError) and stage:
            logger.error(f"[{code}] {type(error).__name__} at {stage}: {error.message}")
        else:
            logger.error(f"[{code}] {type(error).__name__}: {error.message}")
        return error
