"""
도서 엔티티 / 예외 테스트
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode
from bookrank.domain.exceptions import (
    BlockedError,
    BookRankError,
    ExtractionError,
    NavigationError,
    ProviderNotFoundError,
    UpstreamError,
    ValidationError,
)


class TestBookSummary:
    def test_requires_title_and_author(self):
        with pytest.raises(PydanticValidationError):
            BookSummary(author="a")

    def test_defaults(self):
        book = BookSummary(title="t", author="a")
        assert book.image == ""
        assert book.link == ""
        assert book.publisher is None


class TestBookDetail:
    def test_to_response_omits_unset_optional_fields(self):
        detail = BookDetail(description="d", publisher="")
        assert detail.to_response() == {"description": "d", "publisher": ""}


class TestProvider:
    def test_frozen(self):
        provider = Provider(
            code="kr", name="n", origin="https://x", list_url="https://x/l", list_mode=RenderMode.STATIC
        )
        with pytest.raises(PydanticValidationError):
            provider.code = "us"


class TestExceptions:
    def test_status_codes(self):
        assert ValidationError("m").status_code == 400
        assert ProviderNotFoundError("m").status_code == 404
        assert NavigationError("m").status_code == 500
        assert UpstreamError("m", status_code=502).status_code == 500

    def test_hierarchy(self):
        assert issubclass(BlockedError, NavigationError)
        for cls in (ValidationError, NavigationError, UpstreamError, ExtractionError):
            assert issubclass(cls, BookRankError)

    def test_attributes(self):
        error = NavigationError("timeout", url="https://x", stage="navigate", provider="jp")
        assert error.message == "timeout"
        assert error.url == "https://x"
        assert error.stage == "navigate"
        assert error.provider == "jp"
        assert str(error) == "timeout"

    def test_upstream_status(self):
        assert UpstreamError("m", status_code=503).status_code_upstream == 503


class TestExtractorProtocols:
    """등록된 모든 서점 추출기가 Protocol을 만족하는지"""

    def test_registered_adapters(self):
        from bookrank.domain.interfaces import DetailExtractorProtocol, ListExtractorProtocol
        from bookrank.tools.scrapers.providers import PROVIDER_ADAPTERS

        assert set(PROVIDER_ADAPTERS) == {"kr", "us", "jp", "es"}
        for adapter in PROVIDER_ADAPTERS.values():
            assert isinstance(adapter.list_extractor, ListExtractorProtocol)
            assert isinstance(adapter.detail_extractor, DetailExtractorProtocol)
