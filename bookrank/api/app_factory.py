"""
App Factory
===========
FastAPI 앱 생성 팩토리 (미들웨어, 예외 핸들러, 라우터 등록)

## 에러 응답 형식
- 400: {"error": "URL이 필요합니다"}
- 404 / 500: {"error": "<요약>", "message": "<원인>"}
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from bookrank import __version__
from bookrank.api.dependencies import configure_limiter
from bookrank.api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from bookrank.application.services.book_service import BookService
from bookrank.domain.exceptions import BookRankError
from bookrank.infrastructure.config import AppConfig
from bookrank.tools.scrapers.browser_session import BrowserSessionFactory
from bookrank.tools.scrapers.static_fetcher import StaticFetcher

logger = logging.getLogger(__name__)


def build_lifespan(config: AppConfig) -> Callable[[FastAPI], Any]:
    """BookService를 만들어 app.state에 올리는 기본 lifespan"""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        session_factory = BrowserSessionFactory(
            max_sessions=config.max_browser_sessions,
            acquire_timeout=config.session_acquire_timeout,
            headless=config.browser_headless,
        )
        fetcher = StaticFetcher(timeout_seconds=config.fetch_timeout_seconds)
        app.state.book_service = BookService(session_factory, fetcher)
        logger.info(
            f"BookRank ready (providers={app.state.book_service.provider_codes}, "
            f"max_browser_sessions={config.max_browser_sessions})"
        )
        yield
        logger.info("BookRank shutting down")

    return lifespan


def create_app(
    config: Optional[AppConfig] = None,
    lifespan: Callable[..., Any] | None = None,
) -> FastAPI:
    """
    FastAPI 앱 생성 및 설정

    Args:
        config: 애플리케이션 설정 (None이면 환경변수에서 로드)
        lifespan: startup/shutdown lifespan (None이면 BookService를 만드는 기본 lifespan)

    Returns:
        설정 완료된 FastAPI 인스턴스
    """
    config = config or AppConfig.from_env()

    app = FastAPI(
        title="BookRank API",
        description="서점별 베스트셀러 목록 / 도서 상세 스크래핑 API (KR, US, JP, ES)",
        version=__version__,
        lifespan=lifespan or build_lifespan(config),
    )
    app.state.config = config

    # Rate Limiter
    app.state.limiter = configure_limiter(config)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Security Headers / Request log
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    _register_exception_handlers(app)
    _register_routers(app)

    return app


def _error_body(error: BookRankError) -> dict[str, str]:
    if error.status_code == 400:
        return {"error": error.error}
    return {"error": error.error, "message": error.message}


def _register_exception_handlers(app: FastAPI) -> None:
    """도메인 예외 → JSON 에러 응답"""

    @app.exception_handler(BookRankError)
    async def bookrank_error_handler(request: Request, exc: BookRankError):
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {type(exc).__name__}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": BookRankError.error, "message": str(exc)},
        )


def _register_routers(app: FastAPI) -> None:
    """라우터 등록"""
    from bookrank.api.routes.books import router as books_router
    from bookrank.api.routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(books_router)
