"""Map Blogger's JSON feed format onto blogscrape models.

Blogger wraps text values in objects of the form ``{"$t": "..."}``; a page
looks like::

    {"feed": {"openSearch$totalResults": {"$t": "1234"},
              "entry": [{"title": {"$t": "..."}, "published": {"$t": "..."},
                         "author": [{"name": {"$t": "..."}}],
                         "category": [{"term": "..."}],
                         "link": [{"rel": "alternate", "href": "..."}]}]}}
"""

import logging
from typing import Any, Optional

from blogscrape.core.errors import FeedFormatError
from blogscrape.core.models import FeedPage, PostEntry

logger = logging.getLogger(__name__)

TOTAL_RESULTS_KEY = "openSearch$totalResults"


def _text(value: Any) -> Optional[str]:
    """Unwrap a ``{"$t": ...}`` text node."""
    if isinstance(value, dict):
        text = value.get("$t")
        return text if isinstance(text, str) else None
    if isinstance(value, str):
        return value
    return None


def _author(raw: dict[str, Any]) -> Optional[str]:
    authors = raw.get("author")
    if not isinstance(authors, list) or not authors:
        return None
    first = authors[0]
    if not isinstance(first, dict):
        return None
    return _text(first.get("name"))


def _categories(raw: dict[str, Any]) -> tuple[str, ...]:
    categories = raw.get("category")
    if not isinstance(categories, list):
        return ()
    return tuple(
        cat["term"]
        for cat in categories
        if isinstance(cat, dict) and isinstance(cat.get("term"), str)
    )


def _permalink(raw: dict[str, Any]) -> Optional[str]:
    links = raw.get("link")
    if not isinstance(links, list):
        return None
    for link in links:
        if isinstance(link, dict) and link.get("rel") == "alternate":
            href = link.get("href")
            if isinstance(href, str):
                return href
    return None


def parse_entry(raw: Any) -> PostEntry:
    """Convert one feed entry to a PostEntry.

    Raises:
        FeedFormatError: If the entry lacks its timestamps.
    """
    if not isinstance(raw, dict):
        raise FeedFormatError(f"Feed entry is not an object: {raw!r}")

    published = _text(raw.get("published"))
    updated = _text(raw.get("updated"))
    if published is None or updated is None:
        raise FeedFormatError("Feed entry is missing its published/updated timestamps")

    entry = PostEntry(
        title=_text(raw.get("title")) or "",
        published=published,
        updated=updated,
        author=_author(raw),
        content=_text(raw.get("content")),
        categories=_categories(raw),
        url=_permalink(raw),
    )

    try:
        entry.year
    except ValueError as e:
        raise FeedFormatError(f"Unparseable published timestamp {published!r}") from e

    return entry


def parse_total_results(feed: dict[str, Any]) -> Optional[int]:
    """Read the total result count reported by the feed, if usable."""
    total = _text(feed.get(TOTAL_RESULTS_KEY))
    if total is None:
        return None
    try:
        return int(total)
    except ValueError:
        return None


def parse_page(payload: Any) -> FeedPage:
    """Convert a decoded JSON page to a FeedPage.

    Entries that cannot be read are left out of ``entries`` and described
    in ``skipped``; the rest of the page is kept.

    Raises:
        FeedFormatError: If the payload has no feed object or entry list.
    """
    feed = payload.get("feed") if isinstance(payload, dict) else None
    if not isinstance(feed, dict):
        raise FeedFormatError("Response does not contain a feed object")

    raw_entries = feed.get("entry") or []
    if not isinstance(raw_entries, list):
        raise FeedFormatError("Feed entry list is not a list")

    page = FeedPage(total_results=parse_total_results(feed))
    for raw in raw_entries:
        try:
            page.entries.append(parse_entry(raw))
        except FeedFormatError as e:
            logger.warning("Skipping unreadable feed entry: %s", e)
            page.skipped.append(str(e))

    return page
