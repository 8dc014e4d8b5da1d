"""
Item normalization before reconciliation.

This module cleans category lists, picks the content of an item according
to per-provider rules, rewrites embedded video players to a responsive
size, and wraps the optional translation step so that a failing translator
never costs the run an entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re
from typing import Callable

from ..logging_utils import log_event
from .types import Item


logger = logging.getLogger("wapuu_feed.normalize")

IFRAME_RE = re.compile(r"<iframe\b[^>]*>.*?</iframe>", re.IGNORECASE | re.DOTALL)
IFRAME_WIDTH_RE = re.compile(r"""\swidth\s*=\s*(['"]?)[^'"\s>]*\1""", re.IGNORECASE)
IFRAME_HEIGHT_RE = re.compile(r"""\sheight\s*=\s*(['"]?)[^'"\s>]*\1""", re.IGNORECASE)

RESPONSIVE_SIZE = ' width="100%" height="auto"'


@dataclass(frozen=True)
class ContentRules:
    """How a provider's item content is turned into entry content.

    Attributes:
        use_encoded: Prefer content:encoded over the description when non-empty
        embed_only: Keep only the first embedded iframe of the content
        translate: Run the content through the translator for new entries
    """
    use_encoded: bool = False
    embed_only: bool = False
    translate: bool = False


@dataclass
class NormalizedItem:
    """An item after category cleaning and content selection."""
    title: str
    link: str
    pub_date: str
    content: str
    categories: list[str] = field(default_factory=list)


def clean_categories(values: list[str]) -> list[str]:
    """Trim labels and drop blank ones; order and duplicates are kept."""
    result = []
    for value in values:
        value = value.strip()
        if not value:
            continue
        result.append(value)
    return result


def pick_encoded_or_description(encoded: str, description: str) -> str:
    encoded = encoded.strip()
    if encoded:
        return encoded
    return description.strip()


def extract_first_iframe(value: str) -> str:
    """Return the first iframe element of an HTML fragment, resized.

    Args:
        value: HTML content that may contain an embedded player

    Returns:
        The normalized iframe markup, or "" when there is no iframe
    """
    value = value.strip()
    if not value:
        return ""
    match = IFRAME_RE.search(value)
    if match is None:
        return ""
    return normalize_iframe(match.group(0).strip())


def normalize_iframe(value: str) -> str:
    """Replace the width/height attributes of an iframe with a responsive size.

    Everything after the opening tag is kept verbatim. Fragments without a
    recognizable opening tag are returned unchanged.

    Examples:
        >>> normalize_iframe('<iframe src="x" width="320" height="180"></iframe>')
        '<iframe src="x" width="100%" height="auto"></iframe>'
    """
    if not value:
        return ""
    tag_end = value.find(">")
    if tag_end == -1:
        return value
    open_tag = value[:tag_end]
    rest = value[tag_end:]

    open_tag = IFRAME_WIDTH_RE.sub("", open_tag)
    open_tag = IFRAME_HEIGHT_RE.sub("", open_tag)
    open_tag = open_tag.strip()
    if "<iframe" not in open_tag.lower():
        return value
    return open_tag + RESPONSIVE_SIZE + rest


def contains_iframe(text: str) -> bool:
    return "<iframe" in text.lower()


def normalize(item: Item, rules: ContentRules) -> NormalizedItem:
    """Clean categories and select the content of an item.

    Args:
        item: The item returned by a provider
        rules: Content rules of that provider

    Returns:
        NormalizedItem; its content is empty when an embed-only provider
        delivered no iframe
    """
    if rules.embed_only:
        content = extract_first_iframe(item.content_encoded.strip() or item.description)
    elif rules.use_encoded:
        content = pick_encoded_or_description(item.content_encoded, item.description)
    else:
        content = item.description.strip()

    return NormalizedItem(
        title=item.title,
        link=item.link,
        pub_date=item.pub_date,
        content=content,
        categories=clean_categories(item.categories),
    )


def translate_content(
    text: str,
    allow: bool,
    translate: Callable[[str], str] | None,
) -> str:
    """Translate content when allowed, falling back to the original on failure.

    Markup with an embedded player is never translated.
    """
    text = text.strip()
    if not text or not allow or translate is None or contains_iframe(text):
        return text

    try:
        translated = translate(text)
    except Exception as exc:  # noqa: BLE001
        log_event(
            logger,
            "Translation failed, keeping original content",
            level=logging.WARNING,
            event="translation_failed",
            error=f"{type(exc).__name__}: {exc}",
        )
        return text

    translated = translated.strip()
    return translated or text
