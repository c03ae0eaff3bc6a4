"""Web scraping tools"""

from .browser_session import BrowserSession, BrowserSessionFactory, SessionOptions
from .render_wait import RenderWaitStrategy, ScrollPlan
from .static_fetcher import StaticFetcher

__all__ = [
    "BrowserSession",
    "BrowserSessionFactory",
    "SessionOptions",
    "RenderWaitStrategy",
    "ScrollPlan",
    "StaticFetcher",
]
