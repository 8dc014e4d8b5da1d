"""
Outbound feed rendering.

The RSS 2.0 document is regenerated from the full entry list on every run
using a Jinja2 template, newest entry first. Entries whose creation time
cannot be parsed are left out of the document but stay persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
import logging
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.reconcile import parse_rfc3339
from ..core.types import Entry, SiteMetadata
from ..logging_utils import log_event
from ..storage import atomic_write_text


logger = logging.getLogger("wapuu_feed.output")

_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


@dataclass
class FeedItem:
    """One <item> of the outbound feed."""
    id: str
    title: str
    link: str
    pub_date: str
    description: str
    categories: list[str] = field(default_factory=list)


def format_rfc1123z(value: datetime) -> str:
    """Format an instant as RFC 1123 with a numeric zone, in UTC.

    Examples:
        >>> format_rfc1123z(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
        'Tue, 02 Jan 2024 03:04:05 +0000'
    """
    return format_datetime(value.astimezone(timezone.utc))


def sort_entries(entries: list[Entry]) -> list[tuple[datetime, Entry]]:
    """Pair entries with their parsed creation time, newest first.

    Entries with an unparseable creation time are dropped. The input list
    is not reordered.
    """
    dated = []
    for entry in entries:
        created_at = parse_rfc3339(entry.created_at)
        if created_at is None:
            log_event(
                logger,
                "Skipping entry with invalid created_at",
                level=logging.DEBUG,
                id=entry.id,
                created_at=entry.created_at,
            )
            continue
        dated.append((created_at, entry))
    return sorted(dated, key=lambda pair: pair[0], reverse=True)



def _xml_safe(value):
    """Replace characters XML 1.0 does not allow with U+FFFD."""
    if isinstance(value, str):
        return _INVALID_XML_CHARS.sub("\ufffd", value)
    return value


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["xml"]),
        keep_trailing_newline=True,
        finalize=_xml_safe,
    )


def feed_items(entries: list[Entry]) -> tuple[list[FeedItem], str | None]:
    """Build the outbound items and the lastBuildDate value.

    Returns:
        (items newest first, RFC 1123Z time of the newest item or None)
    """
    dated = sort_entries(entries)
    items = [
        FeedItem(
            id=entry.id,
            title=entry.title,
            link=entry.link,
            pub_date=format_rfc1123z(created_at),
            description=entry.content,
            categories=entry.categories,
        )
        for created_at, entry in dated
    ]
    last_build_date = format_rfc1123z(dated[0][0]) if dated else None
    return items, last_build_date


def _render(site: SiteMetadata, items: list[FeedItem], last_build_date: str | None) -> str:
    template = _environment().get_template("feed.xml")
    return template.render(site=site, items=items, last_build_date=last_build_date)


def build_feed(site: SiteMetadata, entries: list[Entry]) -> str:
    """Render the outbound RSS document for the given entries."""
    items, last_build_date = feed_items(entries)
    return _render(site, items, last_build_date)


def write_feed(site: SiteMetadata, entries: list[Entry], output_path: Path) -> int:
    """Render the feed and replace output_path atomically.

    Returns:
        Number of items written

    Raises:
        PersistenceError: If the file cannot be written
    """
    items, last_build_date = feed_items(entries)
    document = _render(site, items, last_build_date)
    atomic_write_text(output_path, document)
    log_event(logger, "Feed written", event="feed_written", path=str(output_path), items=len(items))
    return len(items)
