import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from wapuu_feed.core.types import Entry, SiteMetadata
from wapuu_feed.output.renderer import build_feed, write_feed
from wapuu_feed.storage import PersistenceError


def _entry(entry_id: str, created_at: str, **overrides) -> Entry:
    values = {
        "id": entry_id,
        "title": f"Title {entry_id}",
        "link": f"https://example.com/{entry_id}",
        "content": f"Content {entry_id}",
        "created_at": created_at,
    }
    values.update(overrides)
    return Entry(**values)


def _items(document: str) -> list[ET.Element]:
    root = ET.fromstring(document.encode("utf-8"))
    return root.findall("./channel/item")


def test_build_feed_orders_newest_first():
    entries = [
        _entry("t2", "2024-02-01T00:00:00Z"),
        _entry("t1", "2024-01-01T00:00:00Z"),
        _entry("t3", "2024-03-01T00:00:00Z"),
    ]

    document = build_feed(SiteMetadata(), entries)

    assert [item.findtext("id") for item in _items(document)] == ["t3", "t2", "t1"]
    # the caller's list keeps its order
    assert [entry.id for entry in entries] == ["t2", "t1", "t3"]


def test_build_feed_channel_and_item_fields():
    site = SiteMetadata(title="Wapuu", link="https://example.com", description="News")
    entries = [
        _entry(
            "a",
            "2024-01-02T03:04:05Z",
            content='<iframe src="x" width="100%" height="auto"></iframe>',
            categories=["Releases", "Security"],
        )
    ]

    document = build_feed(site, entries)
    root = ET.fromstring(document.encode("utf-8"))

    assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<rss version="2.0">')
    assert root.get("version") == "2.0"
    channel = root.find("channel")
    assert channel.findtext("title") == "Wapuu"
    assert channel.findtext("link") == "https://example.com"
    assert channel.findtext("description") == "News"
    assert channel.findtext("lastBuildDate") == "Tue, 02 Jan 2024 03:04:05 +0000"

    item = channel.find("item")
    assert [child.tag for child in item] == ["id", "title", "link", "pubDate", "description", "category", "category"]
    assert item.findtext("pubDate") == "Tue, 02 Jan 2024 03:04:05 +0000"
    assert item.findtext("description") == '<iframe src="x" width="100%" height="auto"></iframe>'
    assert [c.text for c in item.findall("category")] == ["Releases", "Security"]
    assert "&lt;iframe" in document


def test_build_feed_converts_offsets_to_utc():
    document = build_feed(SiteMetadata(), [_entry("a", "2024-01-02T05:04:05+02:00")])

    assert _items(document)[0].findtext("pubDate") == "Tue, 02 Jan 2024 03:04:05 +0000"


def test_build_feed_skips_unparseable_timestamps():
    entries = [
        _entry("bad", "not-a-date"),
        _entry("good", "2024-01-01T00:00:00Z"),
        _entry("naive", "2024-05-01T00:00:00"),
    ]

    document = build_feed(SiteMetadata(), entries)

    assert [item.findtext("id") for item in _items(document)] == ["good"]
    assert "<lastBuildDate>Mon, 01 Jan 2024 00:00:00 +0000</lastBuildDate>" in document


def test_build_feed_without_entries_omits_last_build_date():
    document = build_feed(SiteMetadata(), [_entry("bad", "")])

    assert "lastBuildDate" not in document
    assert _items(document) == []
    assert "<title>Wapuugotchi RSS</title>" in document


def test_write_feed_replaces_file(tmp_path: Path):
    output = tmp_path / "feed.xml"
    output.write_text("old", encoding="utf-8")

    count = write_feed(SiteMetadata(), [_entry("a", "2024-01-01T00:00:00Z")], output)

    assert count == 1
    assert "<id>a</id>" in output.read_text(encoding="utf-8")
    assert list(tmp_path.iterdir()) == [output]


def test_write_feed_raises_when_target_is_unwritable(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")

    with pytest.raises(PersistenceError):
        write_feed(SiteMetadata(), [], blocker / "feed.xml")


def test_build_feed_replaces_characters_invalid_in_xml():
    site = SiteMetadata(title="Wapuu\x0c News")
    entry = _entry(
        "a",
        "2024-01-01T00:00:00Z",
        title="Release\x08 notes",
        content="Text\x1b\tend",
        categories=["Core\x00"],
    )

    document = build_feed(site, [entry])

    root = ET.fromstring(document.encode("utf-8"))
    assert root.findtext("./channel/title") == "Wapuu\ufffd News"
    item = root.find("./channel/item")
    assert item.findtext("title") == "Release\ufffd notes"
    assert item.findtext("description") == "Text\ufffd\tend"
    assert item.findtext("category") == "Core\ufffd"


def test_write_feed_counts_items_not_markup(tmp_path: Path):
    entries = [
        _entry("a", "2024-01-01T00:00:00Z", content="<item>inline</item>"),
        _entry("b", "garbage"),
    ]

    assert write_feed(SiteMetadata(), entries, tmp_path / "feed.xml") == 1
