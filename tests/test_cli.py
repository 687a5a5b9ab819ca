"""Tests for the CLI module."""

from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from blogscrape import __version__
from blogscrape.cli import _derive_output_from_url, app
from blogscrape.core.errors import InvalidUrlError

from conftest import FakeFeed, raw_entry

runner = CliRunner()


@pytest.fixture
def fake_feed(monkeypatch):
    """Route every AsyncClient the CLI opens to a fake feed."""
    feed = FakeFeed(
        [
            [
                raw_entry(title="New", published="2021-02-03T04:05:06.000Z"),
                raw_entry(title="Old", published="2019-02-03T04:05:06.000Z"),
            ],
            [],
        ],
        total=2,
    )
    real_client = httpx.AsyncClient

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(feed.handler), **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)
    return feed


class TestDeriveOutputFromUrl:
    """Tests for URL to output directory derivation."""

    def test_blog_root(self):
        """Test a blog root maps to a directory named after the blog."""
        assert _derive_output_from_url("https://myblog.blogspot.com") == Path("./myblog/")

    def test_post_url(self):
        """Test a post URL maps to the same blog directory."""
        result = _derive_output_from_url("https://my-blog.blogspot.com/2020/01/post.html")
        assert result == Path("./my-blog/")

    def test_invalid(self):
        """Test a non-Blogger URL is rejected."""
        with pytest.raises(InvalidUrlError):
            _derive_output_from_url("https://example.com")


class TestFeedUrlCommand:
    """Tests for the feed-url command."""

    def test_prints_feed_url(self):
        """Test the derived feed URL is printed."""
        result = runner.invoke(app, ["feed-url", "https://myblog.blogspot.com"])
        assert result.exit_code == 0
        assert "https://myblog.blogspot.com/feeds/posts/default" in result.output

    def test_invalid_url(self):
        """Test an invalid URL exits with an error message."""
        result = runner.invoke(app, ["feed-url", "https://example.com"])
        assert result.exit_code == 1
        assert "valid Blogger URL" in result.output


class TestScrapeCommand:
    """Tests for the scrape command."""

    def test_writes_one_file_per_year(self, fake_feed, temp_dir):
        """Test a scrape writes one XML file per year to the output directory."""
        result = runner.invoke(
            app,
            ["scrape", "https://myblog.blogspot.com", "-o", str(temp_dir), "-q"],
        )

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in temp_dir.iterdir()) == [
            "myblog_2019.xml",
            "myblog_2021.xml",
        ]
        assert "Scrape Complete!" in result.output
        assert "2021" in result.output
        assert fake_feed.requests[0].headers["User-Agent"] == f"blogscrape/{__version__}"

    def test_empty_blog_fails(self, fake_feed, temp_dir):
        """Test a blog without posts exits with an error and writes nothing."""
        fake_feed.pages = [[]]

        result = runner.invoke(
            app,
            ["scrape", "https://myblog.blogspot.com", "-o", str(temp_dir), "-q"],
        )

        assert result.exit_code == 1
        assert "No posts found in the blog" in result.output
        assert list(temp_dir.iterdir()) == []

    def test_invalid_url(self, temp_dir):
        """Test an invalid URL fails before any request is made."""
        result = runner.invoke(app, ["scrape", "https://example.com", "-o", str(temp_dir)])
        assert result.exit_code == 1
        assert "valid Blogger URL" in result.output


def test_version():
    """Test --version prints the package version."""
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
