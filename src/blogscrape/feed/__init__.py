"""Access to Blogger's posts feed."""

from blogscrape.feed.identifier import build_feed_url, extract_blog_id, output_filename
from blogscrape.feed.paginator import FeedPaginator
from blogscrape.feed.parser import parse_entry, parse_page

__all__ = [
    "FeedPaginator",
    "build_feed_url",
    "extract_blog_id",
    "output_filename",
    "parse_entry",
    "parse_page",
]
