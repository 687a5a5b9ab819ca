"""
blogscrape - Export a Blogger blog to one XML file per year.

Reads every post through the blog's public JSON feed, groups the posts by
the year they were published and writes ``<blog id>_<year>.xml`` files.

Usage:
    blogscrape https://myblog.blogspot.com
    blogscrape https://myblog.blogspot.com -o ./archive
"""

__version__ = "0.1.0"

from blogscrape.core.errors import (
    BlogScrapeError,
    EmptyResultError,
    FetchError,
    InvalidUrlError,
    ScrapeCancelled,
)
from blogscrape.core.interfaces import CancellationToken, ExportSink
from blogscrape.core.models import (
    PostEntry,
    ScrapeConfig,
    ScrapeProgress,
    ScrapeResult,
    ScrapeState,
    YearSummary,
)

__all__ = [
    "__version__",
    # Models
    "PostEntry",
    "ScrapeConfig",
    "ScrapeProgress",
    "ScrapeResult",
    "ScrapeState",
    "YearSummary",
    # Interfaces
    "CancellationToken",
    "ExportSink",
    # Errors
    "BlogScrapeError",
    "EmptyResultError",
    "FetchError",
    "InvalidUrlError",
    "ScrapeCancelled",
]
