"""Orchestration of a complete blog export.

The scraper owns the session of the current run and drives it through
``Idle -> Fetching -> Grouping -> Serializing -> Done``. Failures end in
``Error`` and cancellation in ``Cancelled``; neither escapes ``run()``.
"""

import logging
from pathlib import Path
from typing import Optional

import httpx

from blogscrape.core.errors import EmptyResultError, InvalidUrlError, ScrapeCancelled
from blogscrape.core.interfaces import ExportSink, ProgressCallback
from blogscrape.core.models import (
    FetchResult,
    ScrapeConfig,
    ScrapeProgress,
    ScrapeResult,
    ScrapeSession,
    ScrapeState,
    YearSummary,
)
from blogscrape.export.grouping import group_by_year, summarize
from blogscrape.export.xml_document import render_year_document
from blogscrape.feed.identifier import build_feed_url, extract_blog_id, output_filename
from blogscrape.feed.paginator import FeedPaginator

logger = logging.getLogger(__name__)

NO_FEED_URL_MESSAGE = "Please generate RSS URL first"
CANCELLED_MESSAGE = "Scraping cancelled by user"
GROUPING_PROGRESS = 95.0


class BlogScraper:
    """Export every post of a Blogger blog as one XML document per year."""

    def __init__(
        self,
        sink: ExportSink,
        config: Optional[ScrapeConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the scraper.

        Args:
            sink: Receives each finished year document.
            config: Scrape configuration. ``blog_url`` is loaded if set.
            on_progress: Receives every progress update.
            client: HTTP client to use. One is opened per run if omitted.
        """
        self._sink = sink
        self._config = config or ScrapeConfig(output_dir=Path("."), blog_url="")
        self._on_progress = on_progress
        self._client = client

        self._state = ScrapeState.IDLE
        self._session = ScrapeSession()
        self._blog_url = ""
        self._blog_id: Optional[str] = None
        self._feed_url: Optional[str] = None
        self._error: Optional[str] = None
        self._years: list[YearSummary] = []

        if self._config.blog_url:
            self.load_blog(self._config.blog_url)

    @property
    def state(self) -> ScrapeState:
        return self._state

    @property
    def progress(self) -> float:
        return self._session.progress

    @property
    def status(self) -> str:
        return self._session.status

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def blog_url(self) -> str:
        return self._blog_url

    @property
    def blog_id(self) -> Optional[str]:
        return self._blog_id

    @property
    def feed_url(self) -> Optional[str]:
        return self._feed_url

    @property
    def years(self) -> list[YearSummary]:
        return list(self._years)

    def load_blog(self, url: str) -> Optional[str]:
        """Derive the feed URL for a blog.

        Args:
            url: Blog URL as typed by the user.

        Returns:
            The feed URL, or None if ``url`` is not a Blogger URL. In that
            case the scraper moves to ``ERROR`` with a message for the user.
        """
        if self._state.is_active:
            logger.warning("Ignoring new blog URL while a scrape is running")
            return None

        self._blog_url = url
        self._blog_id = None
        self._feed_url = None
        self._error = None

        try:
            blog_id = extract_blog_id(url)
        except InvalidUrlError as e:
            self._error = str(e)
            self._state = ScrapeState.ERROR
            return None

        self._blog_id = blog_id
        self._feed_url = build_feed_url(blog_id)
        self._state = ScrapeState.IDLE
        logger.debug("Feed URL for %s: %s", blog_id, self._feed_url)
        return self._feed_url

    async def scrape(self, url: str) -> ScrapeResult:
        """Load ``url`` and run a full export."""
        if not self._state.is_active and self.load_blog(url) is None:
            return ScrapeResult(state=ScrapeState.ERROR, message=self._error or "")
        return await self.run()

    async def run(self) -> ScrapeResult:
        """Run a full export of the loaded blog.

        Returns:
            The outcome of the run. Errors and cancellation are reported
            here rather than raised.
        """
        if self._state.is_active:
            logger.warning("A scrape is already running; start request ignored")
            return ScrapeResult(state=self._state, message="A scrape is already running")

        if not self._feed_url or not self._blog_id:
            self._error = NO_FEED_URL_MESSAGE
            self._state = ScrapeState.ERROR
            return ScrapeResult(state=ScrapeState.ERROR, message=NO_FEED_URL_MESSAGE)

        session = self._session = ScrapeSession()
        blog_id = self._blog_id
        self._error = None
        self._years = []
        self._state = ScrapeState.FETCHING

        self._report(session, 0.0, "Starting scrape...")
        self._report(session, 0.0, "Fetching all posts...")

        try:
            fetched = await self._fetch(session, self._feed_url)
            if not fetched.entries:
                raise EmptyResultError(warning=fetched.warning)
            session.entries = fetched.entries

            self._state = ScrapeState.GROUPING
            self._report(session, GROUPING_PROGRESS, "Organizing posts by year...")
            buckets = group_by_year(session.entries)

            self._state = ScrapeState.SERIALIZING
            self._report(session, GROUPING_PROGRESS, "Generating XML files...")
            for year in sorted(buckets):
                document = render_year_document(year, buckets[year])
                self._sink.save(output_filename(blog_id, year), document)
                logger.info("Exported %d posts from %d", len(buckets[year]), year)

            self._years = summarize(buckets)
            total_posts = len(session.entries)
            message = (
                f"Complete! Downloaded {len(self._years)} XML files "
                f"with {total_posts} total posts."
            )
            self._state = ScrapeState.DONE
            self._report(session, 100.0, message)

            if fetched.truncated:
                logger.warning("Export may be incomplete: %s", fetched.warning)

            return ScrapeResult(
                state=ScrapeState.DONE,
                message=message,
                years=self.years,
                total_posts=total_posts,
                file_count=len(self._years),
                warning=fetched.warning,
            )

        except ScrapeCancelled:
            session.entries = []
            logger.info("Scrape of %s cancelled", blog_id)
            if session is self._session:
                self._state = ScrapeState.CANCELLED
                self._report(session, session.progress, CANCELLED_MESSAGE)
            return ScrapeResult(state=ScrapeState.CANCELLED, message=CANCELLED_MESSAGE)

        except EmptyResultError as e:
            return self._fail(session, str(e), warning=e.warning)

        except Exception as e:
            logger.debug("Scrape of %s failed", blog_id, exc_info=True)
            return self._fail(session, f"Error: {e}")

    def cancel(self) -> None:
        """Ask the running fetch to stop at its next page boundary."""
        self._session.token.cancel()

    def reset(self) -> None:
        """Cancel any running fetch and return to ``IDLE`` with nothing loaded."""
        self._session.token.cancel()
        self._session = ScrapeSession()
        self._state = ScrapeState.IDLE
        self._blog_url = ""
        self._blog_id = None
        self._feed_url = None
        self._error = None
        self._years = []

    async def _fetch(self, session: ScrapeSession, feed_url: str) -> FetchResult:
        def on_page(update: ScrapeProgress) -> None:
            self._report(session, update.percentage, update.message)

        if self._client is not None:
            return await self._paginator(self._client).fetch_all(
                feed_url, session.token, on_page
            )

        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            follow_redirects=True,
            headers={"User-Agent": self._config.user_agent},
        ) as client:
            return await self._paginator(client).fetch_all(feed_url, session.token, on_page)

    def _paginator(self, client: httpx.AsyncClient) -> FeedPaginator:
        return FeedPaginator(
            client,
            page_size=self._config.page_size,
            request_delay=self._config.request_delay,
        )

    def _report(self, session: ScrapeSession, percentage: float, message: str) -> None:
        """Record progress on ``session``; it never moves backwards within a run."""
        if session is not self._session:
            return
        session.progress = max(session.progress, min(percentage, 100.0))
        session.status = message
        if self._on_progress is not None:
            self._on_progress(ScrapeProgress(session.progress, message))

    def _fail(
        self, session: ScrapeSession, message: str, warning: Optional[str] = None
    ) -> ScrapeResult:
        session.entries = []
        logger.error(message)
        if session is self._session:
            self._error = message
            self._state = ScrapeState.ERROR
            session.progress = 0.0
            session.status = message
            if self._on_progress is not None:
                self._on_progress(ScrapeProgress(0.0, message))
        return ScrapeResult(state=ScrapeState.ERROR, message=message, warning=warning)
