"""
API Dependencies
================
공통 의존성 모듈 (레이트리밋, 서비스 주입)
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from bookrank.application.services.book_service import BookService
from bookrank.infrastructure.config import AppConfig

# ============= Rate Limiter =============

limiter = Limiter(key_func=get_remote_address)

_rate_limit = AppConfig.rate_limit


def configure_limiter(config: AppConfig) -> Limiter:
    """AppConfig의 레이트리밋 설정을 공유 Limiter에 반영"""
    global _rate_limit
    _rate_limit = config.rate_limit
    limiter.enabled = config.rate_limit_enabled
    return limiter


def current_rate_limit() -> str:
    """요청마다 평가되는 레이트리밋 (예: "30/minute")"""
    return _rate_limit


# ============= Services =============


def get_book_service(request: Request) -> BookService:
    """lifespan에서 만든 BookService (테스트는 dependency_overrides로 교체)"""
    return request.app.state.book_service
