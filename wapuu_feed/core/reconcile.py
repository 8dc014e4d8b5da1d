"""
Reconciliation of fetched items against the persisted entry list.

For each provider the newest item is either recognized as already known
(the per-provider marker is refreshed) or appended as a new entry. Entries
are only ever appended; existing entries are left untouched.
"""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import logging
from typing import Callable

from ..logging_utils import log_event
from .identity import assign_identity
from .normalize import ContentRules, normalize, translate_content
from .types import Entry, Item, ReconciliationState


logger = logging.getLogger("wapuu_feed.reconcile")

RFC1123Z = "%a, %d %b %Y %H:%M:%S %z"
RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"


def reconcile(
    provider_name: str,
    item: Item,
    entries: list[Entry],
    state: ReconciliationState,
    rules: ContentRules | None = None,
    translate: Callable[[str], str] | None = None,
) -> bool:
    """Record a provider's newest item if it has not been seen before.

    Args:
        provider_name: Name of the provider the item came from
        item: The provider's newest item
        entries: Persisted entry list, appended to in place
        state: Reconciliation state, updated in place
        rules: Content rules of the provider
        translate: Optional translation callable for translatable providers

    Returns:
        True when a new entry was appended, False otherwise
    """
    rules = rules or ContentRules()
    if not item.title.strip():
        log_event(logger, "Provider returned no item", event="provider_empty", provider=provider_name)
        return False

    normalized = normalize(item, rules)
    if rules.embed_only and not normalized.content:
        log_event(
            logger,
            "Item has no embeddable player, skipping",
            event="provider_empty",
            provider=provider_name,
            title=item.title,
        )
        return False

    entry_id = assign_identity(provider_name, item)
    if id_exists(entries, entry_id):
        state.latest[provider_name] = entry_id
        log_event(
            logger,
            "Item already recorded",
            level=logging.DEBUG,
            event="entry_duplicate",
            provider=provider_name,
            id=entry_id,
        )
        return False

    content = translate_content(normalized.content, rules.translate, translate)
    entries.append(
        Entry(
            id=entry_id,
            title=normalized.title,
            link=normalized.link,
            content=content,
            created_at=pick_entry_time(normalized.pub_date),
            categories=normalized.categories,
        )
    )
    state.latest[provider_name] = entry_id
    log_event(
        logger,
        "New entry added",
        event="entry_added",
        provider=provider_name,
        id=entry_id,
        title=normalized.title,
    )
    return True


def id_exists(entries: list[Entry], entry_id: str) -> bool:
    return any(entry.id == entry_id for entry in entries)


def pick_entry_time(pub_date: str, now: datetime | None = None) -> str:
    """Return the RFC 3339 UTC creation time for a publish date string.

    Falls back to the current time when the date does not parse.
    """
    parsed = parse_pub_date(pub_date)
    if parsed is None:
        parsed = now or datetime.now(timezone.utc)
    return format_rfc3339(parsed)


def parse_pub_date(value: str) -> datetime | None:
    """Parse an RFC 1123 date with either a numeric or a named zone.

    Examples:
        >>> parse_pub_date("Tue, 02 Jan 2024 03:04:05 +0200").isoformat()
        '2024-01-02T03:04:05+02:00'
        >>> parse_pub_date("Tue, 02 Jan 2024 03:04:05 GMT").isoformat()
        '2024-01-02T03:04:05+00:00'
    """
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.strptime(value, RFC1123Z)
    except ValueError:
        pass
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        # Unknown zone names are taken as UTC.
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_rfc3339(value: str) -> datetime | None:
    """Parse a stored ``created_at`` value into an aware datetime."""
    timestamp = value.strip()
    if not timestamp:
        return None
    if timestamp.endswith("Z") or timestamp.endswith("z"):
        timestamp = timestamp[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(timestamp)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def format_rfc3339(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime(RFC3339_UTC)
