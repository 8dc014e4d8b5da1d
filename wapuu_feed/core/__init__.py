"""
Core domain models and business logic.

This package contains the data types, identity assignment, item
normalization and reconciliation, independent of fetching and output.
"""

from .types import Entry, Item, ReconciliationState, SiteMetadata
from .identity import assign_identity, hash_string
from .normalize import ContentRules, NormalizedItem, clean_categories, extract_first_iframe, normalize, normalize_iframe
from .reconcile import parse_pub_date, parse_rfc3339, pick_entry_time, reconcile

__all__ = [
    "Entry",
    "Item",
    "ReconciliationState",
    "SiteMetadata",
    "assign_identity",
    "hash_string",
    "ContentRules",
    "NormalizedItem",
    "clean_categories",
    "extract_first_iframe",
    "normalize",
    "normalize_iframe",
    "parse_pub_date",
    "parse_rfc3339",
    "pick_entry_time",
    "reconcile",
]
