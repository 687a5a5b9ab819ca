"""Grouping and serialization of fetched posts."""

from blogscrape.export.grouping import group_by_year, summarize
from blogscrape.export.xml_document import render_year_document

__all__ = [
    "group_by_year",
    "render_year_document",
    "summarize",
]
