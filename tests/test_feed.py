"""Tests for presswork.export.feed — RSS feed compilation."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock
from xml.etree.ElementTree import fromstring

import pytest

from presswork.app import run_feed
from presswork.config import PressworkConfig
from presswork.content.item import ContentItem
from presswork.export.feed import compile_feed, generate_feed, select_entries
from tests.conftest import (
    StubDiscovery,
    StubError,
    StubFileSystem,
    output_files,
    write_item,
)


def _post(n: int, date: str, **extra: str) -> dict[str, str]:
    return {
        "slug": f"test-post{n}",
        "title": f"Test post {n}",
        "template": "post.hbs",
        "date": date,
        "body": "<p>Test post content</p>",
        **extra,
    }


def _run(root: Path, **collaborators: object) -> tuple[MagicMock, MagicMock]:
    on_done = MagicMock()
    on_error = MagicMock()
    run_feed(root, on_done, on_error, **collaborators)
    return on_done, on_error


@pytest.fixture
def feed_site(empty_site: Path) -> Path:
    """A site with one page and two dated posts."""
    write_item(
        empty_site, "pages", "test-page",
        slug="test-page", title="Test page", template="page.hbs",
        body="<p>Test page content</p>",
    )
    write_item(empty_site, "posts", "test-post1", **_post(1, "2015-01-10"))
    write_item(empty_site, "posts", "test-post2", **_post(2, "2015-01-20"))
    return empty_site


def _rss(root: Path) -> str:
    return (root / "build" / "rss.xml").read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Entry selection
# ---------------------------------------------------------------------------


class TestSelectEntries:
    """select_entries — dated, non-draft, newest first."""

    def test_newest_first(self) -> None:
        items = [
            ContentItem(slug="a", date="2015-01-10"),
            ContentItem(slug="b", date="2015-01-20"),
            ContentItem(slug="c", date="2014-12-31"),
        ]
        assert [i.slug for i in select_entries(items)] == ["b", "a", "c"]

    def test_undated_and_drafts_excluded(self) -> None:
        items = [
            ContentItem(slug="page"),
            ContentItem(slug="draft", date="2015-01-30", status="draft"),
            ContentItem(slug="post", date="2015-01-10"),
            ContentItem(slug="published", date="2015-01-05", status="published"),
        ]
        assert [i.slug for i in select_entries(items)] == ["post", "published"]

    def test_ties_ordered_by_slug(self) -> None:
        items = [
            ContentItem(slug="a", date="2015-01-10"),
            ContentItem(slug="b", date="2015-01-10"),
        ]
        assert [i.slug for i in select_entries(items)] == ["b", "a"]
        assert [i.slug for i in select_entries(reversed(items))] == ["b", "a"]

    def test_offsets_compared_in_utc(self) -> None:
        items = [
            ContentItem(slug="earlier", date="2015-01-21T01:00:00+00:00"),
            # 04:00 UTC on the 21st
            ContentItem(slug="later", date="2015-01-20T23:00:00-05:00"),
        ]
        assert [i.slug for i in select_entries(items)] == ["later", "earlier"]

    def test_date_and_datetime_mixed(self) -> None:
        items = [
            ContentItem(slug="midnight", date="2015-01-20"),
            ContentItem(slug="noon", date="2015-01-20T12:00:00Z"),
            ContentItem(slug="older", date="2015-01-19T23:59:59+00:00"),
        ]
        assert [i.slug for i in select_entries(items)] == ["noon", "midnight", "older"]

    def test_unparseable_dates_sort_last(self) -> None:
        items = [
            ContentItem(slug="vague", date="sometime"),
            ContentItem(slug="old", date="2001-01-01"),
        ]
        assert [i.slug for i in select_entries(items)] == ["old", "vague"]

    def test_limit(self) -> None:
        items = [ContentItem(slug=str(d), date=f"2015-01-{d:02d}") for d in range(1, 10)]
        assert [i.slug for i in select_entries(items, limit=2)] == ["9", "8"]

    def test_empty(self) -> None:
        assert select_entries([]) == []


# ---------------------------------------------------------------------------
# Built-in RSS generator
# ---------------------------------------------------------------------------


class TestGenerateFeed:
    """generate_feed — RSS 2.0 XML string generation."""

    def test_valid_xml(self) -> None:
        entries = [ContentItem(slug="a", title="A", date="2015-01-10", body="<p>x</p>")]
        xml = generate_feed(entries, {"title": "Test site"}, "https://example.com")

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
        root = fromstring(xml.split("\n", 1)[1])
        assert root.tag == "rss"
        assert root.get("version") == "2.0"
        assert root.findtext("channel/title") == "Test site"
        assert root.findtext("channel/link") == "https://example.com/"

    def test_item_fields(self) -> None:
        entries = [ContentItem(slug="a", title="A", date="2015-01-10", body="<p>x</p>")]
        xml = generate_feed(entries, {}, "https://example.com/")
        item = fromstring(xml.split("\n", 1)[1]).find("channel/item")

        assert item.findtext("title") == "A"
        assert item.findtext("link") == "https://example.com/a/"
        assert item.findtext("guid") == "https://example.com/a/"
        assert item.find("guid").get("isPermaLink") == "true"
        assert item.findtext("pubDate") == "Sat, 10 Jan 2015 00:00:00 GMT"
        assert item.findtext("description") == "<p>x</p>"

    def test_body_is_escaped_in_xml(self) -> None:
        entries = [ContentItem(slug="a", title="A & B", date="2015-01-10", body="<p>x</p>")]
        xml = generate_feed(entries, {}, "")

        assert "A &amp; B" in xml
        assert "&lt;p&gt;x&lt;/p&gt;" in xml

    def test_relative_links_without_base_url(self) -> None:
        entries = [ContentItem(slug="a", date="2015-01-10")]
        item = fromstring(generate_feed(entries, {}).split("\n", 1)[1]).find("channel/item")

        assert item.findtext("link") == "/a/"
        assert item.find("guid").get("isPermaLink") == "false"

    def test_last_build_date_is_newest_entry(self) -> None:
        entries = [
            ContentItem(slug="b", date="2015-01-20"),
            ContentItem(slug="a", date="2015-01-10"),
        ]
        root = fromstring(generate_feed(entries, {}).split("\n", 1)[1])
        assert root.findtext("channel/lastBuildDate") == "Tue, 20 Jan 2015 00:00:00 GMT"

    def test_unparseable_date_has_no_pub_date(self) -> None:
        entries = [ContentItem(slug="a", date="sometime")]
        item = fromstring(generate_feed(entries, {}).split("\n", 1)[1]).find("channel/item")
        assert item.find("pubDate") is None

    def test_entry_without_slug_has_no_link(self) -> None:
        entries = [ContentItem(title="A", date="2015-01-10")]
        item = fromstring(generate_feed(entries, {}).split("\n", 1)[1]).find("channel/item")
        assert item.findtext("title") == "A"
        assert item.find("link") is None
        assert item.find("guid") is None

    def test_keeps_entry_order(self) -> None:
        entries = [ContentItem(slug="z", title="Z"), ContentItem(slug="a", title="A")]
        xml = generate_feed(entries, {})
        assert xml.index("<title>Z</title>") < xml.index("<title>A</title>")


# ---------------------------------------------------------------------------
# Compiling a real site
# ---------------------------------------------------------------------------


class TestCompileFeed:
    """run_feed / compile_feed over a site on disk."""

    def test_creates_feed_file(self, feed_site: Path) -> None:
        on_done, on_error = _run(feed_site)

        on_done.assert_called_once_with()
        on_error.assert_not_called()
        assert (feed_site / "build" / "rss.xml").is_file()

    def test_newest_post_first(self, feed_site: Path) -> None:
        _run(feed_site)
        rss = _rss(feed_site)

        assert "Test post 2" in rss
        assert rss.index("Test post 2") < rss.index("Test post 1")

    def test_pages_not_in_feed(self, feed_site: Path) -> None:
        _run(feed_site)
        assert "Test page" not in _rss(feed_site)

    def test_undated_page_without_slug_is_ignored(self, feed_site: Path) -> None:
        write_item(feed_site, "pages", "about", title="About", template="page.hbs")
        on_done, on_error = _run(feed_site)

        on_done.assert_called_once_with()
        on_error.assert_not_called()
        assert "About" not in _rss(feed_site)

    def test_draft_excluded(self, feed_site: Path) -> None:
        write_item(feed_site, "posts", "test-post3", **_post(3, "2015-01-30", status="draft"))
        _run(feed_site)

        assert "Test post 3" not in _rss(feed_site)

    def test_no_posts_is_success_without_file(self, empty_site: Path) -> None:
        on_done, on_error = _run(empty_site)

        on_done.assert_called_once_with()
        on_error.assert_not_called()
        assert not (empty_site / "build" / "rss.xml").exists()

    def test_only_drafts_is_success(self, empty_site: Path) -> None:
        write_item(empty_site, "posts", "test-post3", **_post(3, "2015-01-30", status="draft"))
        on_done, _ = _run(empty_site)

        on_done.assert_called_once_with()
        assert not (empty_site / "build" / "rss.xml").exists()

    def test_rebuild_is_byte_identical(self, feed_site: Path) -> None:
        _run(feed_site)
        first = (feed_site / "build" / "rss.xml").read_bytes()
        _run(feed_site)
        assert (feed_site / "build" / "rss.xml").read_bytes() == first

    def test_site_url_used_for_links(self, feed_site: Path) -> None:
        (feed_site / "site.json").write_text(
            '{"title":"Test site","url":"https://example.com"}', encoding="utf-8",
        )
        _run(feed_site)
        assert "<link>https://example.com/test-post2/</link>" in _rss(feed_site)

    @pytest.mark.asyncio
    async def test_config_base_url_wins(self, feed_site: Path) -> None:
        (feed_site / "site.json").write_text(
            '{"title":"Test site","url":"https://site.example"}', encoding="utf-8",
        )
        config = PressworkConfig(root=feed_site, base_url="https://cdn.example")
        await compile_feed(config=config)
        assert "<link>https://cdn.example/test-post2/</link>" in _rss(feed_site)

    @pytest.mark.asyncio
    async def test_feed_limit(self, feed_site: Path) -> None:
        config = PressworkConfig(root=feed_site, feed_limit=1)
        await compile_feed(config=config)

        rss = _rss(feed_site)
        assert "Test post 2" in rss
        assert "Test post 1" not in rss

    @pytest.mark.asyncio
    async def test_feed_template(self, feed_site: Path) -> None:
        templates = feed_site / "src" / "templates"
        templates.mkdir(parents=True)
        (templates / "rss.hbs").write_text(
            "<feed>{{site.title}}{{#posts}}<e>{{title}}</e>{{/posts}}</feed>",
            encoding="utf-8",
        )
        config = PressworkConfig(root=feed_site, feed_template="rss.hbs")

        await compile_feed(config=config)

        assert _rss(feed_site) == (
            "<feed>Test site<e>Test post 2</e><e>Test post 1</e></feed>"
        )

    @pytest.mark.asyncio
    async def test_result(self, feed_site: Path) -> None:
        write_item(feed_site, "posts", "test-post3", **_post(3, "2015-01-30", status="draft"))

        result = await compile_feed(feed_site)

        assert result.total_pages == 0
        assert result.skipped == 1
        (feed_file,) = result.files
        assert feed_file.source_type == "feed"
        assert feed_file.output_path == feed_site / "build" / "rss.xml"
        assert output_files(feed_site) == [feed_site / "build" / "rss.xml"]


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestCompileFeedErrors:
    """Failures reach on_error once, as the identical object."""

    def test_write_error_passed_through(self, tmp_path: Path) -> None:
        error = StubError("I threw an error")
        fs = StubFileSystem(default=json.dumps(_post(1, "2015-01-10")), write_error=error)
        discover = StubDiscovery([Path("./file1"), Path("./file2"), Path("/file3")])
        on_done, on_error = _run(tmp_path, fs=fs, discover=discover)

        on_error.assert_called_once_with(error)
        assert on_error.call_args.args[0] is error
        on_done.assert_not_called()

    def test_discovery_error_passed_through(self, empty_site: Path) -> None:
        error = StubError("I threw an error")
        on_done, on_error = _run(empty_site, discover=StubDiscovery(error=error))

        on_error.assert_called_once_with(error)
        on_done.assert_not_called()
        assert output_files(empty_site) == []

    def test_read_error_passed_through(self, tmp_path: Path) -> None:
        fs = StubFileSystem({tmp_path / "site.json": "{}"})
        on_done, on_error = _run(
            tmp_path, fs=fs, discover=StubDiscovery([tmp_path / "missing.json"]),
        )

        on_done.assert_not_called()
        assert isinstance(on_error.call_args.args[0], FileNotFoundError)
