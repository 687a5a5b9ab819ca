"""Partition posts by publication year."""

from typing import Iterable

from blogscrape.core.models import PostEntry, YearSummary


def group_by_year(entries: Iterable[PostEntry]) -> dict[int, list[PostEntry]]:
    """Group entries by the year they were published.

    Years appear in the order they are first seen and entries keep their
    feed order inside each year.
    """
    buckets: dict[int, list[PostEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry.year, []).append(entry)
    return buckets


def summarize(buckets: dict[int, list[PostEntry]]) -> list[YearSummary]:
    """Per-year post counts, newest year first."""
    return sorted(
        (YearSummary(year=year, count=len(posts)) for year, posts in buckets.items()),
        key=lambda summary: summary.year,
        reverse=True,
    )
