"""
Static Fetcher
==============
스크립트 실행 없이 초기 HTML만으로 충분한 페이지 요청 (aiohttp)
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from bookrank.domain.exceptions import UpstreamError
from bookrank.shared.constants import DEFAULT_HEADERS, FALLBACK_USER_AGENTS

logger = logging.getLogger(__name__)


class StaticFetcher:
    """단순 GET 요청으로 HTML 문자열을 가져옴 (요청마다 새 ClientSession)"""

    def __init__(self, timeout_seconds: float = 20.0, headers: Optional[dict[str, str]] = None):
        self.timeout_seconds = timeout_seconds
        self.headers = {**DEFAULT_HEADERS, "User-Agent": FALLBACK_USER_AGENTS[0]}
        if headers:
            self.headers.update(headers)

    async def fetch(self, url: str) -> str:
        """
        HTML 가져오기

        Raises:
            UpstreamError: non-2xx 응답, 연결 실패, 타임아웃
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=self.headers) as session:
                async with session.get(url) as response:
                    if not 200 <= response.status < 300:
                        raise UpstreamError(
                            f"Upstream responded with HTTP {response.status}",
                            url=url,
                            status_code=response.status,
                        )
                    html = await response.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise UpstreamError(
                f"Upstream timed out after {self.timeout_seconds:.0f}s", url=url
            ) from e
        except aiohttp.ClientError as e:
            raise UpstreamError(f"Upstream request failed: {e}", url=url) from e

        logger.debug(f"Fetched {url} ({len(html)} chars)")
        return html
