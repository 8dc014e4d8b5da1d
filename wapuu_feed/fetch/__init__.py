"""
Feed fetching.

This package handles HTTP retrieval of the upstream feed documents.
"""

from .fetcher import FetchError, fetch_feed

__all__ = [
    "FetchError",
    "fetch_feed",
]
