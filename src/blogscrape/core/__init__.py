"""Core models and interfaces for blogscrape."""

from blogscrape.core.errors import (
    BlogScrapeError,
    EmptyResultError,
    FeedFormatError,
    FetchError,
    InvalidUrlError,
    ScrapeCancelled,
)
from blogscrape.core.interfaces import (
    CancellationToken,
    ExportSink,
    ProgressCallback,
)
from blogscrape.core.models import (
    FeedPage,
    FetchResult,
    PostEntry,
    ScrapeConfig,
    ScrapeProgress,
    ScrapeResult,
    ScrapeSession,
    ScrapeState,
    YearSummary,
)

__all__ = [
    "BlogScrapeError",
    "EmptyResultError",
    "FeedFormatError",
    "FetchError",
    "InvalidUrlError",
    "ScrapeCancelled",
    "CancellationToken",
    "ExportSink",
    "ProgressCallback",
    "FeedPage",
    "FetchResult",
    "PostEntry",
    "ScrapeConfig",
    "ScrapeProgress",
    "ScrapeResult",
    "ScrapeSession",
    "ScrapeState",
    "YearSummary",
]
