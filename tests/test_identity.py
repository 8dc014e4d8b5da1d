"""Tests for entry identity assignment."""

import hashlib

from wapuu_feed.core.identity import assign_identity, hash_string
from wapuu_feed.core.types import Item


def test_identity_is_stable_across_calls():
    item = Item(title="WordPress 6.5", link="https://wordpress.org/news/6-5", pub_date="Tue, 02 Apr 2024 17:00:00 +0000")

    assert assign_identity("p", item) == assign_identity("p", item)


def test_identity_differs_between_providers():
    item = Item(title="Same", link="https://example.com/a", pub_date="Tue, 02 Apr 2024 17:00:00 +0000")

    assert assign_identity("p", item) != assign_identity("q", item)


def test_identity_hashes_provider_and_trimmed_pub_date():
    item = Item(title="T", link="https://example.com/a", pub_date="  Tue, 02 Apr 2024 17:00:00 +0000 ")
    expected = hashlib.md5(b"p|Tue, 02 Apr 2024 17:00:00 +0000").hexdigest()

    assert assign_identity("p", item) == expected


def test_identity_falls_back_to_link():
    item = Item(title="T", link=" https://example.com/a ", pub_date="   ")
    expected = hashlib.md5(b"p|https://example.com/a").hexdigest()

    assert assign_identity("p", item) == expected


def test_identity_without_date_or_link_is_unique():
    item = Item(title="T")

    first = assign_identity("p", item)
    second = assign_identity("p", item)

    assert len(first) == 32
    assert first != second


def test_hash_string_blank_input_uses_time_fallback():
    assert hash_string("   ").startswith("hash-")
    assert hash_string("abc") == hashlib.md5(b"abc").hexdigest()
