"""
Main update orchestration.

This module coordinates one update run:
1. Load site metadata, reconciliation state and entries
2. Poll each provider in turn and reconcile its newest item
3. Persist state and entries and rebuild the outbound feed

Providers are polled sequentially. A provider that fails to fetch or
parse is logged and skipped; the run only fails when every provider
failed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
import logging
from pathlib import Path
from typing import Callable

from .config import AppConfig
from .core.reconcile import reconcile
from .fetch.fetcher import FetchError, fetch_feed
from .llm.providers.factory import create_translator
from .logging_utils import log_event, setup_logging
from .output.renderer import write_feed
from .providers import FeedParseError, FeedProvider, FetchFunc, select_providers
from .storage import FeedPaths, load_entries, load_site, load_state, save_entries, save_state


class AllProvidersFailedError(Exception):
    """Raised when no provider could be polled.

    Attributes:
        errors: Failures in polling order; the first one is the message
    """

    def __init__(self, errors: list["ProviderFailure"]):
        super().__init__(str(errors[0].error))
        self.errors = errors


@dataclass
class ProviderFailure:
    provider: str
    error: Exception


@dataclass
class RunResult:
    """Outcome of one update run.

    Attributes:
        updated: True when at least one new entry was added
        added: Number of new entries
        polled: Number of providers that were fetched successfully
        failures: Providers that failed, in polling order
        feed_path: Location of the rebuilt feed, None when nothing was written
    """
    updated: bool = False
    added: int = 0
    polled: int = 0
    failures: list[ProviderFailure] = field(default_factory=list)
    feed_path: Path | None = None


def run_update(
    root: Path,
    cfg: AppConfig,
    providers: list[FeedProvider] | None = None,
    fetch: FetchFunc | None = None,
    translate: Callable[[str], str] | None = None,
) -> RunResult:
    """Run one update against the files under root.

    Args:
        root: Directory holding the data directory and the output feed
        cfg: Application configuration
        providers: Providers to poll; defaults to the configured ones
        fetch: Fetch callable (url, source) -> bytes; defaults to HTTP
        translate: Translation callable; defaults to the configured LLM

    Returns:
        RunResult describing what changed

    Raises:
        AllProvidersFailedError: If every provider failed
        PersistenceError: If state, entries or the feed cannot be written
    """
    paths = FeedPaths.from_root(root, cfg.paths)
    logger = setup_logging(cfg.logging, paths.state.parent)

    if providers is None:
        providers = select_providers(cfg.providers.enabled)
    if fetch is None:
        fetch = partial(fetch_feed, cfg=cfg.fetch)
    if translate is None:
        translate = create_translator(cfg.provider, cfg.translation)

    site = load_site(paths.site)
    state = load_state(paths.state)
    entries = load_entries(paths.entries)

    log_event(
        logger,
        "Update start",
        event="run_start",
        root=str(root),
        providers=[p.name for p in providers],
        entries=len(entries),
        translation=translate is not None,
    )

    result = RunResult()
    for provider in providers:
        try:
            item = provider.fetch_latest(fetch)
        except (FetchError, FeedParseError) as exc:
            result.failures.append(ProviderFailure(provider=provider.name, error=exc))
            log_event(
                logger,
                f"Provider {provider.name} failed: {exc}",
                level=logging.ERROR,
                event="provider_error",
                provider=provider.name,
                error=str(exc),
            )
            continue

        result.polled += 1
        if reconcile(provider.name, item, entries, state, provider.rules, translate):
            result.added += 1

    result.updated = result.added > 0

    if result.polled == 0:
        if result.failures:
            raise AllProvidersFailedError(result.failures)
        return result

    save_state(paths.state, state)
    save_entries(paths.entries, entries)
    write_feed(site, entries, paths.feed)
    result.feed_path = paths.feed

    log_event(
        logger,
        "Update finished",
        event="run_end",
        updated=result.updated,
        added=result.added,
        polled=result.polled,
        failed=len(result.failures),
    )
    return result
