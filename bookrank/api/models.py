"""
API Pydantic Models
===================
응답 스키마 (OpenAPI 문서용)
"""

from typing import Optional

from pydantic import BaseModel, Field

from bookrank.domain.entities.book import BookSummary


class BooksResponse(BaseModel):
    """베스트셀러 목록 응답"""

    books: list[BookSummary] = Field(default_factory=list, description="최대 20권, 순위 순")


class ErrorResponse(BaseModel):
    """
    에러 응답

    400 응답은 error만, 그 외는 error + message를 포함합니다.
    """

    error: str
    message: Optional[str] = None
