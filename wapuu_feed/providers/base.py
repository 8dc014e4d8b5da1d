"""
Provider descriptors.

A provider is a plain descriptor (name, feed URL, content rules) with a
single fetch operation; all providers share the same RSS parsing and
differ only in their data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from ..core.normalize import ContentRules
from ..core.types import Item
from .rss import parse_latest_item


FetchFunc = Callable[[str, str], bytes]


@dataclass(frozen=True)
class FeedProvider:
    """One upstream syndication source.

    Attributes:
        name: Stable provider key, used in state and identities
        url: Feed URL
        source: Human readable label used in error messages
        rules: How item content becomes entry content
    """

    name: str
    url: str
    source: str
    rules: ContentRules = field(default_factory=ContentRules)

    def fetch_latest(self, fetch: FetchFunc) -> Item:
        """Fetch the feed and return its newest item.

        Args:
            fetch: Callable taking (url, source) and returning the body

        Returns:
            The newest Item, or an empty Item when the feed has none
        """
        body = fetch(self.url, self.source)
        return parse_latest_item(body, self.source)
