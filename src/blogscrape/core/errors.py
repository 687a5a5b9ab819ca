"""Exceptions raised by blogscrape."""

from typing import Optional

INVALID_URL_MESSAGE = (
    "Please enter a valid Blogger URL (e.g., https://yourblog.blogspot.com)"
)


class BlogScrapeError(Exception):
    """Base class for all blogscrape errors."""


class InvalidUrlError(BlogScrapeError):
    """The text entered is not a Blogger blog URL."""

    def __init__(self, message: str = INVALID_URL_MESSAGE) -> None:
        super().__init__(message)


class FetchError(BlogScrapeError):
    """A feed page request returned a non-success status."""

    def __init__(self, status_code: int, url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error! status: {status_code}")


class EmptyResultError(BlogScrapeError):
    """The feed did not contain a single post."""

    def __init__(
        self,
        message: str = "No posts found in the blog",
        warning: Optional[str] = None,
    ) -> None:
        self.warning = warning
        if warning:
            message = f"{message}. {warning}"
        super().__init__(message)


class FeedFormatError(BlogScrapeError, ValueError):
    """The feed payload does not have the expected shape."""


class ScrapeCancelled(BlogScrapeError):
    """The run was cancelled by its owner. Not a failure."""
