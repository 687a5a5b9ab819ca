"""Data models for blogscrape."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from blogscrape import __version__
from blogscrape.core.interfaces import CancellationToken

DEFAULT_PAGE_SIZE = 500
DEFAULT_USER_AGENT = f"blogscrape/{__version__}"


class ScrapeState(Enum):
    """State of the scrape state machine."""

    IDLE = "idle"
    FETCHING = "fetching"
    GROUPING = "grouping"
    SERIALIZING = "serializing"
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_active(self) -> bool:
        return self in (
            ScrapeState.FETCHING,
            ScrapeState.GROUPING,
            ScrapeState.SERIALIZING,
        )


@dataclass
class ScrapeConfig:
    """Configuration for a scrape operation."""

    output_dir: Path
    blog_url: str
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: float = 30.0
    request_delay: float = 0.0
    user_agent: str = DEFAULT_USER_AGENT
    quiet: bool = False  # Suppress progress bar


@dataclass(frozen=True)
class PostEntry:
    """A single blog post as published in the feed."""

    title: str
    published: str
    updated: str
    author: Optional[str] = None
    content: Optional[str] = None
    categories: tuple[str, ...] = ()
    url: Optional[str] = None

    @property
    def year(self) -> int:
        """Year of publication, as written in the timestamp's own offset."""
        published = self.published.strip()
        if published.endswith(("Z", "z")):
            published = published[:-1] + "+00:00"
        return datetime.fromisoformat(published).year


@dataclass
class FeedPage:
    """One page of the feed."""

    entries: list[PostEntry] = field(default_factory=list)
    total_results: Optional[int] = None
    # Reasons for entries that could not be read
    skipped: list[str] = field(default_factory=list)


@dataclass
class FetchResult:
    """Everything the paginator collected for one run."""

    entries: list[PostEntry] = field(default_factory=list)
    # Set when entries were skipped or pagination ended on an unreadable page
    warning: Optional[str] = None

    @property
    def truncated(self) -> bool:
        return self.warning is not None


@dataclass(frozen=True)
class YearSummary:
    """Number of posts exported for a single year."""

    year: int
    count: int


@dataclass(frozen=True)
class ScrapeProgress:
    """Progress update emitted to the caller."""

    percentage: float
    message: str


@dataclass
class ScrapeResult:
    """Outcome of a scrape run."""

    state: ScrapeState
    message: str
    years: list[YearSummary] = field(default_factory=list)
    total_posts: int = 0
    file_count: int = 0
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == ScrapeState.DONE


@dataclass
class ScrapeSession:
    """Transient state of a single run."""

    entries: list[PostEntry] = field(default_factory=list)
    progress: float = 0.0
    status: str = ""
    token: CancellationToken = field(default_factory=CancellationToken)
