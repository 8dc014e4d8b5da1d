"""
Command-line interface for the feed updater.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for API key configuration.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import load_config
from .runner import AllProvidersFailedError, run_update
from .storage import PersistenceError

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main() -> None:
    """Merge the newest WordPress releases, videos and posts into one feed."""


@app.command()
def update(
    root: Path = typer.Option(Path("."), "--root", "-r", file_okay=False, help="Directory holding data/ and feed.xml."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
    translate: bool | None = typer.Option(
        None, "--translate/--no-translate", help="Enable or disable translation of release notes."
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar="GOOGLE_API_KEY",
        help="Override translation provider API key (or set GOOGLE_API_KEY / .env).",
    ),
):
    """Poll all providers and rebuild the feed.

    Prints whether an update was detected. Exits with status 1 when every
    provider failed, when the configuration names an unknown provider or
    backend, or when state or the feed cannot be written.

    Args:
        root: Working directory of the feed (data/ and feed.xml)
        config: Optional path to YAML config file
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
        translate: Enable/disable translation
        api_key: Override LLM provider API key
    """
    # Load environment variables from .env if available
    if load_dotenv is not None:
        load_dotenv()

    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if api_key:
        cfg.provider.api_key = api_key
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file
    if translate is not None:
        cfg.translation.enabled = translate

    try:
        result = run_update(root, cfg)
    except AllProvidersFailedError as exc:
        err_console.print(str(exc), markup=False)
        raise typer.Exit(code=1) from exc
    except (PersistenceError, ValueError) as exc:
        err_console.print(str(exc), markup=False)
        raise typer.Exit(code=1) from exc

    for failure in result.failures:
        err_console.print(f"{failure.provider}: {failure.error}", markup=False)

    if result.updated:
        console.print("update detected")
    else:
        console.print("no update detected")


if __name__ == "__main__":
    app()
