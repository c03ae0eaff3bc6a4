from bookrank.domain.interfaces.extractor import DetailExtractorProtocol, ListExtractorProtocol

__all__ = ["DetailExtractorProtocol", "ListExtractorProtocol"]
