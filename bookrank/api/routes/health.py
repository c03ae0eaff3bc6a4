"""
Health Check Routes
===================
헬스체크 및 루트 엔드포인트 (/, /api/health)
"""

from datetime import datetime

from fastapi import APIRouter, Request

from bookrank import __version__

router = APIRouter(tags=["Health"])


@router.get("/")
async def root(request: Request):
    """서비스 정보 + 지원 서점 목록"""
    service = getattr(request.app.state, "book_service", None)
    providers = service.provider_codes if service is not None else []
    return {
        "status": "ok",
        "message": f"BookRank API v{__version__}",
        "providers": providers,
        "endpoints": [f"/{code}-books" for code in providers]
        + [f"/{code}-book-detail?url=" for code in providers],
    }


@router.get("/api/health")
async def health_check(request: Request):
    """기본 헬스 체크 엔드포인트"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
