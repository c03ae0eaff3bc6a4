"""
Render Wait Strategy
====================
동적 렌더링 페이지를 추출 가능한 상태로 만드는 단계별 대기 절차

## 단계 (순서 고정, 동시 실행 없음)
```
1. navigate   ← page.goto (load / domcontentloaded, 실패 시 NavigationError)
2. idle       ← network idle 대기 (상한 초과 시 경고 후 통과)
3. settle     ← 고정 대기 (idle 이후 스크립트 실행 여유)
4. cookie     ← 쿠키 동의 버튼 클릭 (없으면 통과)
5. ready      ← 목록 컨테이너 selector 대기 (없으면 경고 후 통과)
6. scroll     ← lazy 이미지 로드용 스크롤 (점진 / 점프) + settle
7. expand     ← "더 보기" 류 expander 클릭
```

navigate를 제외한 모든 단계는 개별 타임아웃을 가지며, 실패해도 로그만 남기고
다음 단계로 넘어갑니다.
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

from bookrank.domain.exceptions import NavigationError

logger = logging.getLogger(__name__)

CLICK_ALL_SCRIPT = "els => els.forEach(el => { if (el.click) el.click(); })"

NAVIGATION_EVENTS = ("load", "domcontentloaded")


@dataclass(frozen=True)
class ScrollPlan:
    """
    스크롤 한 번의 계획

    Attributes:
        target_fraction: 문서 높이 대비 목표 위치 (0.5 = 절반)
        incremental: True면 step_px씩 interval_ms 간격으로 내려감, False면 한 번에 이동
        settle_ms: 스크롤 후 대기 시간
    """

    target_fraction: float = 0.5
    incremental: bool = False
    step_px: int = 100
    interval_ms: int = 100
    settle_ms: int = 2000


@dataclass(frozen=True)
class RenderWaitStrategy:
    """
    페이지 하나에 대한 대기 절차 설정

    Attributes:
        wait_until: page.goto 완료 조건 ("load" 또는 "domcontentloaded")
        navigation_timeout_ms: 페이지 이동 타임아웃
        idle_timeout_ms: 이동 후 network idle 대기 상한 (0이면 생략)
        settle_ms: idle 이후 고정 대기
        cookie_selector: 쿠키 동의 버튼 selector (None이면 생략)
        ready_selector: 추출 전 기다릴 컨테이너 selector (None이면 생략)
        scrolls: 순서대로 실행할 스크롤 계획
        expander_selectors: 클릭할 expander selector 목록
        step_timeout_ms: scroll / expand 단계 각각의 상한
    """

    wait_until: str = "load"
    navigation_timeout_ms: int = 30000
    idle_timeout_ms: int = 0
    settle_ms: int = 0
    cookie_selector: str | None = None
    cookie_timeout_ms: int = 5000
    cookie_settle_ms: int = 1000
    ready_selector: str | None = None
    ready_timeout_ms: int = 10000
    scrolls: tuple[ScrollPlan, ...] = field(default_factory=tuple)
    expander_selectors: tuple[str, ...] = field(default_factory=tuple)
    step_timeout_ms: int = 15000

    def __post_init__(self):
        # networkidle은 idle 단계 전용
        if self.wait_until not in NAVIGATION_EVENTS:
            raise ValueError(
                f"wait_until must be one of {NAVIGATION_EVENTS}, got {self.wait_until!r}"
            )

    async def run(self, page: Page, url: str) -> list[str]:
        """
        대기 절차 실행

        Returns:
            완료된 단계 이름 목록 (실패한 단계는 제외)

        Raises:
            NavigationError: 페이지 이동 실패 / 타임아웃
        """
        completed: list[str] = []

        await self._navigate(page, url)
        completed.append("navigate")

        if self.idle_timeout_ms and await self._wait_network_idle(page):
            completed.append("idle")

        if self.settle_ms:
            await asyncio.sleep(self.settle_ms / 1000)
            completed.append("settle")

        if self.cookie_selector and await self._dismiss_cookie_banner(page):
            completed.append("cookie")

        if self.ready_selector and await self._wait_ready(page):
            completed.append("ready")

        for i, plan in enumerate(self.scrolls):
            if await self._bounded(f"scroll[{i}]", self._scroll(page, plan)):
                completed.append(f"scroll[{i}]")

        if self.expander_selectors and await self._bounded("expand", self._expand(page)):
            completed.append("expand")

        logger.debug(f"Render wait finished for {url}: {completed}")
        return completed

    async def _navigate(self, page: Page, url: str) -> None:
        try:
            await page.goto(url, wait_until=self.wait_until, timeout=self.navigation_timeout_ms)
        except PlaywrightTimeout as e:
            raise NavigationError(
                f"Navigation timed out after {self.navigation_timeout_ms}ms",
                url=url,
                stage="navigate",
            ) from e
        except PlaywrightError as e:
            raise NavigationError(f"Navigation failed: {e}", url=url, stage="navigate") from e

    async def _wait_network_idle(self, page: Page) -> bool:
        """광고/비콘 요청이 끊이지 않는 페이지는 상한까지만 기다림"""
        try:
            await page.wait_for_load_state("networkidle", timeout=self.idle_timeout_ms)
            return True
        except PlaywrightError:
            logger.warning(f"Network not idle within {self.idle_timeout_ms}ms, continuing")
            return False

    async def _dismiss_cookie_banner(self, page: Page) -> bool:
        """쿠키 동의 오버레이 닫기 (없는 것은 정상)"""
        try:
            await page.wait_for_selector(self.cookie_selector, timeout=self.cookie_timeout_ms)
            await page.click(self.cookie_selector)
        except PlaywrightError:
            # TimeoutError도 playwright Error의 하위 클래스
            logger.info("Cookie banner not found or already dismissed")
            return False

        logger.info("Cookie banner dismissed")
        await asyncio.sleep(self.cookie_settle_ms / 1000)
        return True

    async def _wait_ready(self, page: Page) -> bool:
        try:
            await page.wait_for_selector(self.ready_selector, timeout=self.ready_timeout_ms)
            return True
        except PlaywrightError:
            logger.warning(
                f"Ready selector '{self.ready_selector}' not found (slow load or blocked)"
            )
            return False

    async def _scroll(self, page: Page, plan: ScrollPlan) -> None:
        if plan.incremental:
            scrolled = 0
            while True:
                height = await page.evaluate("document.body.scrollHeight")
                await page.evaluate(f"window.scrollBy(0, {plan.step_px})")
                scrolled += plan.step_px
                if scrolled >= height * plan.target_fraction:
                    break
                await asyncio.sleep(plan.interval_ms / 1000)
        else:
            await page.evaluate(
                f"window.scrollTo(0, document.body.scrollHeight * {plan.target_fraction})"
            )

        if plan.settle_ms:
            await asyncio.sleep(plan.settle_ms / 1000)

    async def _expand(self, page: Page) -> None:
        for selector in self.expander_selectors:
            await page.eval_on_selector_all(selector, CLICK_ALL_SCRIPT)

    async def _bounded(self, name: str, step: Awaitable[None]) -> bool:
        """단계 하나를 타임아웃 안에서 실행 (실패는 로그 후 계속)"""
        try:
            await asyncio.wait_for(step, timeout=self.step_timeout_ms / 1000)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"Render step '{name}' exceeded {self.step_timeout_ms}ms, continuing")
        except PlaywrightError as e:
            logger.warning(f"Render step '{name}' failed: {e}")
        return False
