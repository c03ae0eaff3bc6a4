"""
Domain Layer
============
프레임워크 의존성 없는 도메인 모델

구조:
- entities/: BookSummary, BookDetail, Provider
- interfaces/: 추출기 Protocol
- exceptions.py: 에러 분류
"""

from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode

__all__ = ["BookDetail", "BookSummary", "Provider", "RenderMode"]
