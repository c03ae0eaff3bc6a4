"""
Browser Session
===============
요청 하나가 쓰는 헤드리스 Chromium 인스턴스의 수명 관리

## 사용 예
```python
factory = BrowserSessionFactory(max_sessions=3)

session = factory.create(stealth=True, locale="en-US")
try:
    await session.open()
    await session.navigate(url, strategy)
    html = await session.content()
finally:
    await session.close()   # 성공/실패와 무관하게 항상 호출
```

세션은 요청마다 새로 만들고 재사용/공유하지 않습니다. 팩토리는 동시에 열린
세션 수만 세마포어로 제한합니다.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Optional

from fake_useragent import UserAgent
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright_stealth import Stealth

from bookrank.domain.exceptions import NavigationError
from bookrank.shared.constants import (
    BASE_LAUNCH_ARGS,
    DEFAULT_VIEWPORT,
    FALLBACK_USER_AGENTS,
    STEALTH_LAUNCH_ARGS,
)
from bookrank.tools.scrapers.render_wait import RenderWaitStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOptions:
    """
    세션 실행 옵션

    Attributes:
        stealth: 자동화 흔적 숨김 (AutomationControlled 비활성화, playwright-stealth 적용)
        user_agent: 컨텍스트 User-Agent
        locale: 브라우저 언어 (예: "ko-KR")
    """

    stealth: bool = False
    headless: bool = True
    user_agent: str = FALLBACK_USER_AGENTS[0]
    locale: Optional[str] = None

    @property
    def launch_args(self) -> list[str]:
        if self.stealth:
            return BASE_LAUNCH_ARGS + STEALTH_LAUNCH_ARGS
        return list(BASE_LAUNCH_ARGS)


class BrowserSession:
    """Playwright 브라우저 1개 + 컨텍스트 1개 + 페이지 1개"""

    def __init__(
        self,
        options: SessionOptions,
        slots: Optional[asyncio.Semaphore] = None,
        acquire_timeout: float = 60.0,
    ):
        self.options = options
        self._slots = slots
        self._acquire_timeout = acquire_timeout
        self._holds_slot = False

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self.page: Page | None = None
        self.closed = False

    async def open(self) -> "BrowserSession":
        """
        세션 슬롯 확보 후 브라우저 실행, 페이지 생성

        Raises:
            NavigationError: 슬롯 대기 초과 또는 브라우저 실행 실패
                (이미 만들어진 자원은 close()에서 정리)
        """
        if self._slots is not None:
            try:
                await asyncio.wait_for(self._slots.acquire(), timeout=self._acquire_timeout)
            except asyncio.TimeoutError as e:
                raise NavigationError(
                    f"No free browser session within {self._acquire_timeout:.0f}s",
                    stage="acquire",
                ) from e
            self._holds_slot = True

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.options.headless,
                args=self.options.launch_args,
            )
            self._context = await self._browser.new_context(
                user_agent=self.options.user_agent,
                viewport=DEFAULT_VIEWPORT,
                locale=self.options.locale,
            )
            self.page = await self._context.new_page()
        except PlaywrightError as e:
            raise NavigationError(f"Browser launch failed: {e}", stage="launch") from e

        if self.options.stealth:
            await self._apply_stealth()

        logger.debug(
            f"Browser session opened (stealth={self.options.stealth}, locale={self.options.locale})"
        )
        return self

    async def _apply_stealth(self) -> None:
        """Stealth 적용 (navigator.webdriver 제거, HeadlessChrome 숨김 등)"""
        try:
            await Stealth().apply_stealth_async(self.page)
        except PlaywrightError as e:
            logger.warning(f"Stealth application failed: {e}")

    async def navigate(self, url: str, strategy: RenderWaitStrategy) -> list[str]:
        """대기 절차를 포함한 페이지 이동"""
        if self.page is None:
            raise NavigationError("Session is not open", url=url, stage="navigate")
        return await strategy.run(self.page, url)

    async def content(self) -> str:
        """렌더링된 HTML"""
        if self.page is None:
            raise NavigationError("Session is not open", stage="evaluate")
        try:
            return await self.page.content()
        except PlaywrightError as e:
            raise NavigationError(f"Reading page content failed: {e}", stage="evaluate") from e

    async def close(self) -> None:
        """브라우저 종료 및 슬롯 반환 (여러 번 호출해도 안전)"""
        if self.closed:
            return
        self.closed = True

        for name, resource in (
            ("context", self._context),
            ("browser", self._browser),
        ):
            if resource is None:
                continue
            try:
                await resource.close()
            except PlaywrightError as e:
                logger.debug(f"Closing {name} failed: {e}")

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except PlaywrightError as e:
                logger.debug(f"Stopping playwright failed: {e}")

        self.page = None
        if self._holds_slot:
            self._slots.release()
            self._holds_slot = False

    async def __aenter__(self) -> "BrowserSession":
        try:
            return await self.open()
        except BaseException:
            await self.close()
            raise

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


class BrowserSessionFactory:
    """
    세션 생성기

    동시에 열 수 있는 세션 수를 max_sessions로 제한합니다 (요청이 몰릴 때
    Chromium 프로세스가 무한정 늘어나는 것을 방지).
    """

    def __init__(
        self,
        max_sessions: int = 3,
        acquire_timeout: float = 60.0,
        headless: bool = True,
    ):
        self.max_sessions = max_sessions
        self.acquire_timeout = acquire_timeout
        self.headless = headless
        self._slots = asyncio.Semaphore(max_sessions)

        try:
            self.ua: UserAgent | None = UserAgent(browsers=["chrome", "edge"])
        except Exception as e:
            logger.warning(f"fake_useragent unavailable, using built-in list: {e}")
            self.ua = None

    def create(self, stealth: bool = False, locale: Optional[str] = None) -> BrowserSession:
        """열리지 않은 세션 생성 (open/close는 호출자가 책임)"""
        user_agent = self._pick_user_agent() if stealth else FALLBACK_USER_AGENTS[0]
        options = SessionOptions(
            stealth=stealth,
            headless=self.headless,
            user_agent=user_agent,
            locale=locale,
        )
        return BrowserSession(options, slots=self._slots, acquire_timeout=self.acquire_timeout)

    def _pick_user_agent(self) -> str:
        """랜덤 실사용 User-Agent"""
        if self.ua is not None:
            try:
                return self.ua.random
            except Exception as e:
                logger.debug(f"User-Agent generation failed: {e}")
        return random.choice(FALLBACK_USER_AGENTS)
