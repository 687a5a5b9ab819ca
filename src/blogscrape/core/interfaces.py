"""Abstract interfaces for blogscrape."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from blogscrape.core.errors import ScrapeCancelled

if TYPE_CHECKING:
    from blogscrape.core.models import ScrapeProgress

ProgressCallback = Callable[["ScrapeProgress"], None]


class ExportSink(ABC):
    """Abstract base class for places that receive finished documents."""

    @abstractmethod
    def save(self, filename: str, content: str) -> None:
        """Persist a named document.

        Args:
            filename: Target filename, e.g. ``myblog_2020.xml``.
            content: Full document text.
        """
        ...


class CancellationToken:
    """Cooperative cancellation flag shared between a run and its owner."""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise ScrapeCancelled("Scraping cancelled by user")
