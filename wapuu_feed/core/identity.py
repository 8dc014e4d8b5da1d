"""Stable entry identities.

An identity is the MD5 hex digest of ``provider + "|" + basis`` where the
basis is the item's publish date, or its link when the date is missing.
Mixing the provider name into the digest keeps two providers that publish
at the same second (or share a link) from colliding.
"""

from __future__ import annotations

import hashlib
import time

from .types import Item


def hash_string(value: str) -> str:
    """Return the MD5 hex digest of a trimmed string.

    Args:
        value: The string to hash

    Returns:
        32 hexadecimal characters, or a time-based fallback for blank input
    """
    value = value.strip()
    if not value:
        return f"hash-{time.time_ns()}"
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def assign_identity(provider_name: str, item: Item) -> str:
    """Derive the identity of an item polled from a provider.

    Args:
        provider_name: Name of the provider the item came from
        item: The fetched item

    Returns:
        Hex digest that is equal for equal (provider, basis) pairs
    """
    base = item.pub_date.strip()
    if not base:
        base = item.link.strip()
    if not base:
        # Only malformed items end up here; uniqueness beats determinism.
        base = f"{provider_name}-{time.time_ns()}"
    return hash_string(f"{provider_name}|{base}")
