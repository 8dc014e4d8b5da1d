from pathlib import Path

from wapuu_feed.config import AppConfig, ProviderConfig, get_api_key, load_config


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.fetch.timeout_seconds == 15.0
    assert cfg.fetch.retry_delay_seconds == 2.0
    assert cfg.paths.feed_file == "feed.xml"


def test_load_config_merges_sections(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "fetch:\n"
        "  timeout_seconds: 5\n"
        "providers:\n"
        "  enabled: [wordpress-tv]\n"
        "translation:\n"
        "  target_language: French\n"
        "unknown_section:\n"
        "  ignored: true\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.fetch.timeout_seconds == 5
    assert cfg.fetch.retry_delay_seconds == 2.0
    assert cfg.providers.enabled == ["wordpress-tv"]
    assert cfg.translation.target_language == "French"
    assert cfg.translation.enabled is True


def test_load_config_empty_file(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_load_config_does_not_share_state_between_calls():
    first = load_config(None)
    first.logging.level = "DEBUG"

    assert load_config(None).logging.level == "INFO"


def test_get_api_key_prefers_inline_value(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "from-env")

    assert get_api_key(ProviderConfig(api_key="inline")) == "inline"
    assert get_api_key(ProviderConfig()) == "from-env"
