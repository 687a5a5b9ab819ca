"""Paginated fetching of a Blogger posts feed.

Pages are requested strictly one after another with httpx; each page's
``start-index`` depends on how many entries came before it.
"""

import asyncio
import json
import logging
from typing import Optional

import httpx

from blogscrape.core.errors import FeedFormatError, FetchError
from blogscrape.core.interfaces import CancellationToken, ProgressCallback
from blogscrape.core.models import (
    DEFAULT_PAGE_SIZE,
    FeedPage,
    FetchResult,
    PostEntry,
    ScrapeProgress,
)
from blogscrape.feed.parser import parse_page

logger = logging.getLogger(__name__)

# 100 is reserved for the end of post-processing
MAX_FETCH_PROGRESS = 99.0


class FeedPaginator:
    """Fetch every entry of a feed, page by page."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        request_delay: float = 0.0,
    ) -> None:
        """Initialize the paginator.

        Args:
            client: HTTP client used for every page request.
            page_size: Entries requested per page (``max-results``).
            request_delay: Pause between page requests in seconds.
        """
        self._client = client
        self._page_size = page_size
        self._request_delay = request_delay

    def page_params(self, start_index: int) -> dict[str, str | int]:
        """Query parameters for the page starting at ``start_index``."""
        return {
            "start-index": start_index,
            "max-results": self._page_size,
            "alt": "json",
        }

    async def fetch_all(
        self,
        feed_url: str,
        token: CancellationToken,
        on_progress: Optional[ProgressCallback] = None,
    ) -> FetchResult:
        """Fetch all pages of ``feed_url``.

        Args:
            feed_url: Base feed URL, without query parameters.
            token: Polled before each request and after each response.
            on_progress: Receives a progress update after every page.

        Returns:
            The accumulated entries, in feed order.

        Raises:
            ScrapeCancelled: If the token was cancelled.
            FetchError: If a page request returned a non-success status.
        """
        entries: list[PostEntry] = []
        skipped = 0
        start_index = 1
        stop_reason: Optional[str] = None

        while True:
            token.raise_if_cancelled()

            try:
                page = await self._fetch_page(feed_url, start_index)
            except (httpx.RequestError, FeedFormatError) as e:
                token.raise_if_cancelled()
                stop_reason = (
                    f"Stopped after {len(entries)} posts: "
                    f"page at start-index {start_index} could not be read ({e})"
                )
                logger.warning(stop_reason)
                break

            # A response that lands after cancellation is dropped
            token.raise_if_cancelled()

            if not page.entries and not page.skipped:
                logger.debug("Empty page at start-index %d, feed complete", start_index)
                break

            entries.extend(page.entries)
            skipped += len(page.skipped)
            start_index += self._page_size

            estimated_total = page.total_results or len(entries) or 1
            percentage = min(len(entries) / estimated_total * 100, MAX_FETCH_PROGRESS)
            logger.debug(
                "Fetched %d/%d posts (%.1f%%)", len(entries), estimated_total, percentage
            )
            if on_progress is not None:
                on_progress(ScrapeProgress(percentage, f"Fetched {len(entries)} posts..."))

            if self._request_delay:
                await asyncio.sleep(self._request_delay)

        return FetchResult(entries=entries, warning=self._warning(skipped, stop_reason))

    @staticmethod
    def _warning(skipped: int, stop_reason: Optional[str]) -> Optional[str]:
        """Combine skipped entries and an early stop into one message."""
        parts = []
        if skipped:
            parts.append(f"Skipped {skipped} unreadable posts")
        if stop_reason:
            parts.append(stop_reason)
        return "; ".join(parts) or None

    async def _fetch_page(self, feed_url: str, start_index: int) -> FeedPage:
        """Request and parse a single page.

        Raises:
            FetchError: On a non-success status.
            FeedFormatError: If the body is not a Blogger JSON feed.
        """
        response = await self._client.get(feed_url, params=self.page_params(start_index))

        if not response.is_success:
            raise FetchError(response.status_code, str(response.url))

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FeedFormatError(f"Invalid JSON: {e}") from e

        return parse_page(payload)
