"""Derive the blog identifier and feed URL from a Blogger URL."""

from blogscrape.core.errors import InvalidUrlError

HOSTING_DOMAIN = "blogspot.com"
FEED_PATH = "/feeds/posts/default"

_DOMAIN_MARKER = f".{HOSTING_DOMAIN}"


def extract_blog_id(url: str) -> str:
    """Extract the blog identifier from a Blogger URL.

    Examples:
        https://myblog.blogspot.com -> myblog
        http://myblog.blogspot.com/2020/05/post.html -> myblog
        myblog.blogspot.com -> myblog

    Raises:
        InvalidUrlError: If the text is not a Blogger URL.
    """
    clean_url = url.strip()

    if _DOMAIN_MARKER not in clean_url:
        raise InvalidUrlError()

    blog_id = clean_url.split(_DOMAIN_MARKER)[0].split("//")[-1]

    if not blog_id or "/" in blog_id or "\\" in blog_id:
        raise InvalidUrlError()

    return blog_id


def build_feed_url(blog_id: str) -> str:
    """Return the posts feed URL for a blog."""
    return f"https://{blog_id}.{HOSTING_DOMAIN}{FEED_PATH}"


def output_filename(blog_id: str, year: int) -> str:
    """Return the filename used for a year's document."""
    return f"{blog_id}_{year}.xml"
