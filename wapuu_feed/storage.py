"""
Persistence of site metadata, reconciliation state and the entry list.

Loading is best effort: a missing file or a file that does not contain
valid JSON yields the default value. Saving is strict: any failure to
write raises PersistenceError, since losing state would produce duplicate
or missing entries on the next run.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
from typing import Any

from .config import PathsConfig
from .core.types import Entry, ReconciliationState, SiteMetadata
from .logging_utils import log_event


logger = logging.getLogger("wapuu_feed.storage")


class PersistenceError(Exception):
    """Raised when a durable artifact cannot be written."""


@dataclass
class FeedPaths:
    """Absolute locations of the persisted artifacts and the output feed."""
    site: Path
    state: Path
    entries: Path
    feed: Path

    @classmethod
    def from_root(cls, root: Path, cfg: PathsConfig | None = None) -> "FeedPaths":
        cfg = cfg or PathsConfig()
        data_dir = root / cfg.data_dir
        return cls(
            site=data_dir / cfg.site_file,
            state=data_dir / cfg.state_file,
            entries=data_dir / cfg.entries_file,
            feed=root / cfg.feed_file,
        )


def load_json(path: Path, default: Any) -> Any:
    """Load JSON from path, returning default when missing or corrupt."""
    if not path.exists():
        log_event(logger, "File not found, using defaults", level=logging.DEBUG, path=str(path))
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        log_event(
            logger,
            "Unreadable JSON file, using defaults",
            level=logging.WARNING,
            event="load_failed",
            path=str(path),
            error=f"{type(exc).__name__}: {exc}",
        )
        return default


def save_json(path: Path, value: Any) -> None:
    """Write value as indented JSON, replacing the file atomically."""
    text = json.dumps(value, indent=2, ensure_ascii=False) + "\n"
    atomic_write_text(path, text)


def atomic_write_text(path: Path, text: str) -> None:
    tmp = path.parent / f".{path.name}.{os.getpid()}.tmp"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(text, encoding="utf-8")
        tmp.replace(path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp.unlink(missing_ok=True)
        raise PersistenceError(f"cannot write {path}: {exc}") from exc


def load_site(path: Path) -> SiteMetadata:
    data = load_json(path, {})
    if not isinstance(data, dict):
        return SiteMetadata()
    return SiteMetadata.from_dict(data)


def load_state(path: Path) -> ReconciliationState:
    data = load_json(path, {})
    if not isinstance(data, dict):
        return ReconciliationState()
    return ReconciliationState.from_dict(data)


def load_entries(path: Path) -> list[Entry]:
    data = load_json(path, [])
    if not isinstance(data, list):
        log_event(logger, "Entry file is not a list, starting empty", level=logging.WARNING, path=str(path))
        return []
    return [Entry.from_dict(item) for item in data if isinstance(item, dict)]


def save_state(path: Path, state: ReconciliationState) -> None:
    save_json(path, state.to_dict())


def save_entries(path: Path, entries: list[Entry]) -> None:
    save_json(path, [entry.to_dict() for entry in entries])
