"""Application Services"""

from .book_service import BookService

__all__ = ["BookService"]
