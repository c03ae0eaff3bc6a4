"""
BookRank
메인 진입점

서점별 베스트셀러 스크래핑 API 서버 실행 (기본) 또는 단발성 스크래핑
"""

import argparse
import asyncio
import json
import sys

import uvicorn
from dotenv import load_dotenv

from bookrank.api.app_factory import create_app
from bookrank.application.services.book_service import BookService
from bookrank.domain.exceptions import BookRankError
from bookrank.infrastructure.config import AppConfig
from bookrank.shared.logging_config import setup_logging
from bookrank.tools.scrapers.browser_session import BrowserSessionFactory
from bookrank.tools.scrapers.static_fetcher import StaticFetcher

# 환경 변수 로드
load_dotenv()


def run_server(config: AppConfig) -> None:
    """API 서버 실행 (리스너는 한 번만 시작)"""
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


async def run_scrape(config: AppConfig, provider: str, url: str | None = None) -> int:
    """
    서버 없이 한 번 스크래핑하고 JSON 출력

    Returns:
        종료 코드 (0 성공, 1 실패)
    """
    service = BookService(
        BrowserSessionFactory(
            max_sessions=config.max_browser_sessions,
            acquire_timeout=config.session_acquire_timeout,
            headless=config.browser_headless,
        ),
        StaticFetcher(timeout_seconds=config.fetch_timeout_seconds),
    )

    try:
        if url:
            result = (await service.book_detail(provider, url)).to_response()
        else:
            books = await service.list_books(provider)
            result = {"books": [book.model_dump(exclude_none=True) for book in books]}
    except BookRankError as e:
        print(json.dumps({"error": e.error, "message": e.message}, ensure_ascii=False))
        return 1

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


def main():
    """메인 함수"""
    parser = argparse.ArgumentParser(
        description="BookRank - bestseller scraping API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start API server (HOST/PORT from .env, default 0.0.0.0:4000)
  python main.py

  # Scrape one list without the server
  python main.py --scrape kr

  # Scrape one detail page
  python main.py --scrape us --url https://www.amazon.com/dp/0593593804
        """,
    )

    parser.add_argument("--host", type=str, help="Bind host (overrides HOST)")
    parser.add_argument("--port", type=int, help="Bind port (overrides PORT)")
    parser.add_argument("--scrape", metavar="PROVIDER", help="Scrape once and print JSON")
    parser.add_argument("--url", type=str, help="Detail page URL (with --scrape)")

    args = parser.parse_args()

    config = AppConfig.from_env_validated()
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    setup_logging(config.log_level)

    if args.scrape:
        sys.exit(asyncio.run(run_scrape(config, args.scrape, args.url)))

    run_server(config)


if __name__ == "__main__":
    main()
