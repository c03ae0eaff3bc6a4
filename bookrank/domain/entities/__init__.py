from bookrank.domain.entities.book import BookDetail, BookSummary, Provider, RenderMode

__all__ = ["BookDetail", "BookSummary", "Provider", "RenderMode"]
