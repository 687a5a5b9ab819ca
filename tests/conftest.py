"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from blogscrape.core.models import PostEntry

FEED_URL = "https://myblog.blogspot.com/feeds/posts/default"


def raw_entry(
    title: str = "Hello world",
    published: str = "2020-05-01T10:00:00.000-07:00",
    updated: Optional[str] = None,
    author: Optional[str] = "Jane Doe",
    content: Optional[str] = "<p>Body</p>",
    labels: tuple[str, ...] = ("news",),
    url: Optional[str] = "https://myblog.blogspot.com/2020/05/hello-world.html",
) -> dict[str, Any]:
    """Build one entry in Blogger's JSON feed format."""
    entry: dict[str, Any] = {
        "id": {"$t": f"tag:blogger.com,1999:blog-1.post-{abs(hash(title))}"},
        "title": {"type": "text", "$t": title},
        "published": {"$t": published},
        "updated": {"$t": updated or published},
        "link": [
            {"rel": "replies", "type": "text/html", "href": "https://myblog.blogspot.com/c"},
            {"rel": "self", "type": "application/atom+xml", "href": "https://www.blogger.com/x"},
        ],
    }
    if author is not None:
        entry["author"] = [{"name": {"$t": author}, "uri": {"$t": "https://example.com"}}]
    if content is not None:
        entry["content"] = {"type": "html", "$t": content}
    if labels:
        entry["category"] = [
            {"scheme": "http://www.blogger.com/atom/ns#", "term": label} for label in labels
        ]
    if url is not None:
        entry["link"].append({"rel": "alternate", "type": "text/html", "href": url})
    return entry


def feed_payload(entries: list[dict[str, Any]], total: Optional[int] = None) -> dict[str, Any]:
    """Wrap entries in a feed page."""
    feed: dict[str, Any] = {"title": {"$t": "My Blog"}}
    if entries:
        feed["entry"] = entries
    if total is not None:
        feed["openSearch$totalResults"] = {"$t": str(total)}
    return {"version": "1.0", "encoding": "UTF-8", "feed": feed}


class FakeFeed:
    """Serve a fixed list of pages through httpx.MockTransport."""

    def __init__(
        self,
        pages: list[list[dict[str, Any]]],
        total: Optional[int] = None,
        page_size: int = 500,
    ) -> None:
        self.pages = pages
        self.total = total
        self.page_size = page_size
        self.requests: list[httpx.Request] = []
        # start-index -> callable returning a custom response
        self.overrides: dict[int, Callable[[httpx.Request], httpx.Response]] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        start_index = int(request.url.params["start-index"])

        if start_index in self.overrides:
            return self.overrides[start_index](request)

        page_number = (start_index - 1) // self.page_size
        entries = self.pages[page_number] if page_number < len(self.pages) else []
        return httpx.Response(200, json=feed_payload(entries, self.total))

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_entry():
    """Factory for PostEntry objects."""

    def _make(
        title: str = "Post",
        published: str = "2020-01-01T00:00:00.000Z",
        **kwargs: Any,
    ) -> PostEntry:
        return PostEntry(
            title=title,
            published=published,
            updated=kwargs.pop("updated", published),
            **kwargs,
        )

    return _make


@pytest.fixture
def entries_for_years():
    """Build raw feed entries, one per given year."""

    def _build(*years: int) -> list[dict[str, Any]]:
        return [
            raw_entry(title=f"Post {i}", published=f"{year}-06-15T12:00:00.000+02:00")
            for i, year in enumerate(years)
        ]

    return _build
