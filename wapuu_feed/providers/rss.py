"""
RSS 2.0 parsing for upstream feeds.

Only the first item of the channel is of interest: the upstream feeds
list their items newest-first.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from ..core.types import Item


class FeedParseError(Exception):
    """Raised when a feed document is not well-formed XML."""


def parse_latest_item(body: bytes, source: str = "feed") -> Item:
    """Return the newest item of an RSS document.

    Args:
        body: Raw RSS document
        source: Source label used in error messages

    Returns:
        The first <item> of the channel, or an empty Item when there is none

    Raises:
        FeedParseError: If the document cannot be parsed
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise FeedParseError(f"{source}: invalid feed XML: {exc}") from exc

    channel = root.find("channel")
    if channel is None:
        return Item()
    node = channel.find("item")
    if node is None:
        return Item()

    return Item(
        title=_text(node, "title"),
        link=_text(node, "link"),
        guid=_text(node, "guid"),
        pub_date=_text(node, "pubDate"),
        description=_text(node, "description"),
        # content:encoded, whatever prefix the feed binds the namespace to
        content_encoded=_text(node, "{*}encoded"),
        categories=[el.text or "" for el in node.findall("category")],
    )


def _text(node: ET.Element, path: str) -> str:
    child = node.find(path)
    if child is None or child.text is None:
        return ""
    return child.text
