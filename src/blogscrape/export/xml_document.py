"""Render a year's posts as an XML document.

Every piece of feed text goes through one of two escapers: free text
(titles, authors, HTML content, labels) is wrapped in CDATA sections, and
short structured values (timestamps, permalinks, the year attribute) are
entity-escaped. The output is well-formed whatever the posts contain.
"""

import re
from typing import Iterable
from xml.sax.saxutils import escape, quoteattr

from blogscrape.core.models import PostEntry

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = "  "

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    "[^\u0009\u000a\u000d\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010ffff]"
)


def _clean(text: str) -> str:
    return _INVALID_XML_CHARS.sub("", text)


def cdata(text: str) -> str:
    """Wrap text in a CDATA section.

    A literal ``]]>`` would close the section early, so it is split across
    two adjacent sections; parsers join them back into the original text.
    """
    return "<![CDATA[" + _clean(text).replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _element(depth: int, tag: str, body: str) -> str:
    return f"{INDENT * depth}<{tag}>{body}</{tag}>"


def _post_lines(post: PostEntry) -> list[str]:
    lines = [
        f"{INDENT}<post>",
        _element(2, "title", cdata(post.title)),
        _element(2, "published", escape(_clean(post.published))),
        _element(2, "updated", escape(_clean(post.updated))),
    ]

    if post.author:
        lines.append(_element(2, "author", cdata(post.author)))

    if post.content:
        lines.append(_element(2, "content", cdata(post.content)))

    if post.categories:
        lines.append(f"{INDENT * 2}<categories>")
        lines.extend(_element(3, "category", cdata(term)) for term in post.categories)
        lines.append(f"{INDENT * 2}</categories>")

    if post.url:
        lines.append(_element(2, "url", escape(_clean(post.url))))

    lines.append(f"{INDENT}</post>")
    return lines


def render_year_document(year: int, posts: Iterable[PostEntry]) -> str:
    """Build the XML document for one year.

    Args:
        year: Year stored on the ``<blog>`` root element.
        posts: Posts of that year, rendered in the order given.

    Returns:
        The document text. Identical input always yields identical output.
    """
    lines = [XML_DECLARATION, f"<blog year={quoteattr(str(year))}>"]
    for post in posts:
        lines.extend(_post_lines(post))
    lines.append("</blog>")
    return "\n".join(lines)
