"""
Unit tests for StaticFetcher (aiohttp mocked)
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from bookrank.domain.exceptions import UpstreamError
from bookrank.tools.scrapers.static_fetcher import StaticFetcher

URL = "https://www.aladin.co.kr/shop/common/wbest.aspx?BranchType=1&BestType=Bestseller"


def _mock_session(status: int = 200, body: str = "<html></html>", get_error=None):
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.text = AsyncMock(return_value=body)

    mock_session = AsyncMock()
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    if get_error is not None:
        mock_session.get = MagicMock(side_effect=get_error)
    else:
        mock_session.get = MagicMock(
            return_value=AsyncMock(
                __aenter__=AsyncMock(return_value=mock_response),
                __aexit__=AsyncMock(return_value=None),
            )
        )
    return mock_session


class TestStaticFetcher:
    def test_default_headers(self):
        fetcher = StaticFetcher(headers={"Accept-Language": "ko-KR"})
        assert "User-Agent" in fetcher.headers
        assert fetcher.headers["Accept-Language"] == "ko-KR"

    @pytest.mark.asyncio
    async def test_fetch_success(self):
        mock_session = _mock_session(body="<div class='ss_book_box'></div>")

        with patch("aiohttp.ClientSession", return_value=mock_session) as mock_cls:
            html = await StaticFetcher(timeout_seconds=5).fetch(URL)

        assert html == "<div class='ss_book_box'></div>"
        mock_session.get.assert_called_once_with(URL)
        assert mock_cls.call_args.kwargs["timeout"].total == 5

    @pytest.mark.asyncio
    async def test_non_2xx_raises_upstream_error(self):
        with patch("aiohttp.ClientSession", return_value=_mock_session(status=503)):
            with pytest.raises(UpstreamError) as exc_info:
                await StaticFetcher().fetch(URL)

        assert exc_info.value.status_code_upstream == 503
        assert exc_info.value.url == URL
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_connection_error(self):
        mock_session = _mock_session(get_error=aiohttp.ClientConnectionError("refused"))

        with patch("aiohttp.ClientSession", return_value=mock_session):
            with pytest.raises(UpstreamError, match="refused") as exc_info:
                await StaticFetcher().fetch(URL)

        assert exc_info.value.status_code_upstream is None

    @pytest.mark.asyncio
    async def test_timeout(self):
        mock_session = _mock_session(get_error=asyncio.TimeoutError())

        with patch("aiohttp.ClientSession", return_value=mock_session):
            with pytest.raises(UpstreamError, match="timed out"):
                await StaticFetcher(timeout_seconds=1).fetch(URL)
