"""
Wapuu Feed - merged WordPress news feed.

This package polls the WordPress release announcements, WordPress.tv and
the WordPress.com blog, keeps the newest item of each as a deduplicated
entry, and republishes all entries as a single RSS 2.0 feed.

Main entry point is the CLI via `wapuu-feed update` command.

Example:
    $ wapuu-feed update --root site/
"""

__all__ = ["__version__", "run_update", "reconcile", "assign_identity", "build_feed"]
__version__ = "0.1.0"

from .core.identity import assign_identity
from .core.reconcile import reconcile
from .output.renderer import build_feed
from .runner import run_update
