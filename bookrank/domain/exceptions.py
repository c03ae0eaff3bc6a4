"""
BookRank 커스텀 예외 타입

요청 처리 중 발생하는 에러를 분류합니다. API 계층(app_factory)이
이 예외들을 HTTP 에러 응답으로 변환합니다.

분류:
- ValidationError: 필수 파라미터 누락 → 400
- ProviderNotFoundError: 등록되지 않은 서점 코드 → 404
- NavigationError: 브라우저 실행/페이지 이동 실패, 타임아웃 → 500
- UpstreamError: 정적 페이지 요청의 non-2xx 응답, 연결 실패 → 500
- ExtractionError: 필드 추출 실패 (soft-miss). 추출기 내부에서만 사용하며
  HTTP 에러로 전파되지 않습니다.

사용 예:
    from bookrank.domain.exceptions import NavigationError

    try:
        await page.goto(url, timeout=30000)
    except PlaywrightTimeout as e:
        raise NavigationError("Navigation timed out", url=url, stage="navigate") from e
"""

from typing import Optional


class BookRankError(Exception):
    """
    Base exception for all BookRank errors.

    Attributes:
        error: 클라이언트에 노출할 짧은 에러 요약
    """

    status_code = 500
    error = "요청 처리 실패"

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider


class ValidationError(BookRankError):
    """
    Required request parameter is missing or empty.

    Attributes:
        field: 누락된 파라미터명 (예: "url")
    """

    status_code = 400
    error = "URL이 필요합니다"

    def __init__(self, message: str, field: Optional[str] = None, provider: Optional[str] = None):
        super().__init__(message, provider=provider)
        self.field = field


class ProviderNotFoundError(BookRankError):
    """Unknown provider code in the request path."""

    status_code = 404
    error = "지원하지 않는 서점"


class NavigationError(BookRankError):
    """
    Browser launch / page navigation failure.

    Attributes:
        url: 이동하려던 URL
        stage: 실패한 단계 (acquire, launch, navigate, evaluate)
    """

    error = "크롤링 실패"

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        stage: Optional[str] = None,
        provider: Optional[str] = None,
    ):
        super().__init__(message, provider=provider)
        self.url = url
        self.stage = stage


class BlockedError(NavigationError):
    """Target site served a robot-check page instead of content."""


class UpstreamError(BookRankError):
    """
    Static fetch returned non-2xx or the connection failed.

    Attributes:
        url: 요청한 URL
        status_code_upstream: 원격 서버 HTTP 상태 코드 (연결 실패 시 None)
    """

    error = "크롤링 실패"

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        provider: Optional[str] = None,
    ):
        super().__init__(message, provider=provider)
        self.url = url
        self.status_code_upstream = status_code


class ExtractionError(BookRankError):
    """
    A field could not be extracted (soft-miss).

    추출기 내부의 selector 체인에서만 사용되며, 잡히지 않은 채 API 계층까지
    올라오는 일은 없습니다.

    Attributes:
        field: 추출 실패한 필드명
    """

    def __init__(self, message: str, field: Optional[str] = None, provider: Optional[str] = None):
        super().__init__(message, provider=provider)
        self.field = field
