"""
Core data types for the feed updater.

This module defines the data structures shared across the pipeline:
- Item: The newest item of one upstream feed, as parsed by a provider
- Entry: A persisted, deduplicated unit of the outbound feed
- ReconciliationState: Per-provider marker of the last identity observed
- SiteMetadata: Channel metadata for the outbound feed
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


DEFAULT_SITE_TITLE = "Wapuugotchi RSS"


@dataclass
class Item:
    """The newest item of an upstream feed.

    An empty Item (blank title) means the feed had nothing usable.

    Attributes:
        title: The item headline
        link: URL of the item
        guid: Globally unique identifier hint from the feed
        pub_date: Raw publish date string (RFC 1123 in practice)
        description: Short description or excerpt
        content_encoded: Full body from content:encoded, when the feed has one
        categories: Category labels in feed order
    """
    title: str = ""
    link: str = ""
    guid: str = ""
    pub_date: str = ""
    description: str = ""
    content_encoded: str = ""
    categories: list[str] = field(default_factory=list)


@dataclass
class Entry:
    """A persisted entry of the outbound feed.

    Entries are created once and never modified afterwards.

    Attributes:
        id: Stable identity derived from provider name and item
        title: The item headline
        link: URL of the item
        content: Normalized (and possibly translated) content
        created_at: RFC 3339 UTC timestamp, e.g. "2024-01-02T03:04:05Z"
        categories: Cleaned category labels
    """
    id: str
    title: str
    link: str
    content: str
    created_at: str
    categories: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "link": self.link,
            "content": self.content,
            "created_at": self.created_at,
        }
        if self.categories:
            data["categories"] = list(self.categories)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            link=str(data.get("link") or ""),
            content=str(data.get("content") or ""),
            created_at=str(data.get("created_at") or ""),
            categories=[str(c) for c in data.get("categories") or []],
        )


@dataclass
class ReconciliationState:
    """Last identity seen per provider."""
    latest: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        if not self.latest:
            return {}
        return {"latest": dict(self.latest)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReconciliationState":
        latest = data.get("latest") or {}
        if not isinstance(latest, dict):
            latest = {}
        return cls(latest={str(k): str(v) for k, v in latest.items()})


@dataclass
class SiteMetadata:
    """Channel metadata of the outbound feed."""
    title: str = DEFAULT_SITE_TITLE
    link: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "link": self.link, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SiteMetadata":
        return cls(
            title=str(data.get("title", DEFAULT_SITE_TITLE) or ""),
            link=str(data.get("link") or ""),
            description=str(data.get("description") or ""),
        )
