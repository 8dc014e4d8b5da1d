"""Outbound feed rendering and writing."""

from .renderer import FeedItem, build_feed, feed_items, format_rfc1123z, sort_entries, write_feed

__all__ = ["FeedItem", "build_feed", "feed_items", "format_rfc1123z", "sort_entries", "write_feed"]
