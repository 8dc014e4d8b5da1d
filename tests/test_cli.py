"""Tests for the command-line entry point."""

from pathlib import Path

from typer.testing import CliRunner

from wapuu_feed import cli
from wapuu_feed.fetch.fetcher import FetchError
from wapuu_feed.runner import AllProvidersFailedError, ProviderFailure, RunResult
from wapuu_feed.storage import PersistenceError


runner = CliRunner()


def _patch_run(monkeypatch, outcome):
    captured = {}

    def fake_run_update(root, cfg):
        captured["root"] = root
        captured["cfg"] = cfg
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(cli, "run_update", fake_run_update)
    monkeypatch.setattr(cli, "load_dotenv", None)
    return captured


def test_update_reports_detected_update(monkeypatch, tmp_path: Path):
    captured = _patch_run(monkeypatch, RunResult(updated=True, added=1, polled=3))

    result = runner.invoke(cli.app, ["update", "--root", str(tmp_path), "--no-translate", "--log-level", "DEBUG"])

    assert result.exit_code == 0
    assert "update detected" in result.output
    assert "no update" not in result.output
    assert captured["root"] == tmp_path
    assert captured["cfg"].translation.enabled is False
    assert captured["cfg"].logging.level == "DEBUG"


def test_update_reports_no_update(monkeypatch, tmp_path: Path):
    failure = ProviderFailure(provider="wordpress-tv", error=FetchError("wordpress tv api status: 500", "u"))
    _patch_run(monkeypatch, RunResult(updated=False, polled=2, failures=[failure]))

    result = runner.invoke(cli.app, ["update", "--root", str(tmp_path)])

    assert result.exit_code == 0
    assert "no update detected" in result.output


def test_update_exits_nonzero_when_all_providers_fail(monkeypatch, tmp_path: Path):
    error = AllProvidersFailedError([ProviderFailure(provider="a", error=FetchError("a is down", "u"))])
    _patch_run(monkeypatch, error)

    result = runner.invoke(cli.app, ["update", "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "a is down" in result.output


def test_update_exits_nonzero_on_persistence_error(monkeypatch, tmp_path: Path):
    _patch_run(monkeypatch, PersistenceError("cannot write feed.xml"))

    result = runner.invoke(cli.app, ["update", "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "cannot write feed.xml" in result.output


def test_update_passes_api_key(monkeypatch, tmp_path: Path):
    captured = _patch_run(monkeypatch, RunResult())

    runner.invoke(cli.app, ["update", "--root", str(tmp_path), "--api-key", "secret"])

    assert captured["cfg"].provider.api_key == "secret"


def test_update_exits_nonzero_on_unknown_provider(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "load_dotenv", None)
    config = tmp_path / "config.yaml"
    config.write_text("providers:\n  enabled: [wordpress-nope]\nlogging:\n  console: false\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["update", "--root", str(tmp_path), "--config", str(config)])

    assert result.exit_code == 1
    assert "Unknown providers: wordpress-nope" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
