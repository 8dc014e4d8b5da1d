"""
Upstream feed providers.

Providers are polled in the order returned by default_providers().

To add a new provider:
1. Add a FeedProvider descriptor to default_providers()
2. Pick its ContentRules (encoded body, embed-only, translation)
"""

from __future__ import annotations

from ..core.normalize import ContentRules
from .base import FeedProvider, FetchFunc
from .rss import FeedParseError, parse_latest_item


RELEASES_FEED_URL = "https://wordpress.org/news/category/releases/feed/"
WORDPRESS_TV_FEED_URL = "https://wordpress.tv/feed/"
WORDPRESS_COM_FEED_URL = "https://wordpress.com/blog/feed/"


def default_providers() -> list[FeedProvider]:
    """Return all known providers in polling order."""
    return [
        FeedProvider(
            name="wordpress-releases",
            url=RELEASES_FEED_URL,
            source="wordpress releases",
            rules=ContentRules(translate=True),
        ),
        FeedProvider(
            name="wordpress-tv",
            url=WORDPRESS_TV_FEED_URL,
            source="wordpress tv",
            rules=ContentRules(embed_only=True),
        ),
        FeedProvider(
            name="wordpress-com",
            url=WORDPRESS_COM_FEED_URL,
            source="wordpress com",
            rules=ContentRules(use_encoded=True),
        ),
    ]


def select_providers(enabled: list[str] | None) -> list[FeedProvider]:
    """Filter the default providers by name, keeping polling order.

    Raises:
        ValueError: If a name does not match any provider
    """
    providers = default_providers()
    if enabled is None:
        return providers
    known = {provider.name for provider in providers}
    unknown = [name for name in enabled if name not in known]
    if unknown:
        supported = ", ".join(sorted(known))
        raise ValueError(f"Unknown providers: {', '.join(unknown)}. Supported: {supported}")
    return [provider for provider in providers if provider.name in enabled]


__all__ = [
    "FeedProvider",
    "FetchFunc",
    "FeedParseError",
    "parse_latest_item",
    "default_providers",
    "select_providers",
]
