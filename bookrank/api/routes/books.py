"""
Book Routes
===========
서점별 베스트셀러 목록 / 도서 상세 (/{provider}-books, /{provider}-book-detail)

provider: kr (Aladin), us (Amazon), jp (Kinokuniya), es (El Corte Inglés)
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request

from bookrank.api.dependencies import current_rate_limit, get_book_service, limiter
from bookrank.api.models import BooksResponse, ErrorResponse
from bookrank.application.services.book_service import BookService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Books"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "url 파라미터 누락"},
    404: {"model": ErrorResponse, "description": "지원하지 않는 서점"},
    500: {"model": ErrorResponse, "description": "크롤링 실패"},
}


@router.get(
    "/{provider}-books",
    response_model=BooksResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
@limiter.limit(current_rate_limit)
async def list_books(
    request: Request,
    provider: str,
    service: BookService = Depends(get_book_service),
):
    """베스트셀러 목록 (최대 20권)"""
    books = await service.list_books(provider)
    return BooksResponse(books=books)


@router.get("/{provider}-book-detail", responses=ERROR_RESPONSES)
@limiter.limit(current_rate_limit)
async def book_detail(
    request: Request,
    provider: str,
    url: Optional[str] = None,
    service: BookService = Depends(get_book_service),
):
    """도서 상세 (url: 목록 응답의 link)"""
    detail = await service.book_detail(provider, url)
    return detail.to_response()
