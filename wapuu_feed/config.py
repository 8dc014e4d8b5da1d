"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP fetching settings
- PathsConfig: Locations of the persisted artifacts and the output feed
- ProvidersConfig: Which upstream feeds are polled
- TranslationConfig: Translation of release notes
- ProviderConfig: LLM provider settings (used for translation)
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for HTTP feed fetching.

    Attributes:
        timeout_seconds: HTTP request timeout
        retry_delay_seconds: Delay before the single retry on HTTP 429
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
        accept: HTTP Accept header string
    """

    timeout_seconds: float = 15.0
    retry_delay_seconds: float = 2.0
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    accept: str = "application/rss+xml, application/xml;q=0.9, text/xml;q=0.8, */*;q=0.7"


@dataclass
class PathsConfig:
    """Configuration for persisted files, relative to the run root.

    Attributes:
        data_dir: Directory holding the JSON artifacts
        site_file: Site metadata file name inside data_dir
        state_file: Reconciliation state file name inside data_dir
        entries_file: Entry list file name inside data_dir
        feed_file: Output feed path relative to the root
    """

    data_dir: str = "data"
    site_file: str = "site.json"
    state_file: str = "state.json"
    entries_file: str = "entries.json"
    feed_file: str = "feed.xml"


@dataclass
class ProvidersConfig:
    """Configuration for upstream feed providers.

    Attributes:
        enabled: Provider names to poll, or None for all of them
    """

    enabled: list[str] | None = None


@dataclass
class TranslationConfig:
    """Configuration for content translation.

    Attributes:
        enabled: Whether translatable providers get their content translated
        target_language: Language the content is translated into
    """

    enabled: bool = True
    target_language: str = "German"


@dataclass
class ProviderConfig:
    """Configuration for LLM provider.

    Attributes:
        name: Provider name ("gemini" currently supported)
        model: Model identifier (e.g., "gemini-2.0-flash")
        google_api_key_env: Environment variable name containing the API key
        base_url: Base URL for the provider API
        api_key: Optional inline API key (overrides env var)
        trust_env: Whether to respect system proxy settings for API requests
        timeout_seconds: Request timeout for provider calls
    """

    name: str = "gemini"
    model: str = "gemini-2.0-flash"
    google_api_key_env: str = "GOOGLE_API_KEY"
    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: str | None = None
    trust_env: bool = True
    timeout_seconds: float = 30.0


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file, placed in the data directory
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    providers: ProvidersConfig = field(default_factory=ProvidersConfig)
    translation: TranslationConfig = field(default_factory=TranslationConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "retry_delay_seconds": cfg.fetch.retry_delay_seconds,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
            "accept": cfg.fetch.accept,
        },
        "paths": {
            "data_dir": cfg.paths.data_dir,
            "site_file": cfg.paths.site_file,
            "state_file": cfg.paths.state_file,
            "entries_file": cfg.paths.entries_file,
            "feed_file": cfg.paths.feed_file,
        },
        "providers": {
            "enabled": cfg.providers.enabled,
        },
        "translation": {
            "enabled": cfg.translation.enabled,
            "target_language": cfg.translation.target_language,
        },
        "provider": {
            "name": cfg.provider.name,
            "model": cfg.provider.model,
            "google_api_key_env": cfg.provider.google_api_key_env,
            "base_url": cfg.provider.base_url,
            "api_key": cfg.provider.api_key,
            "trust_env": cfg.provider.trust_env,
            "timeout_seconds": cfg.provider.timeout_seconds,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        fetch=FetchConfig(**data["fetch"]),
        paths=PathsConfig(**data["paths"]),
        providers=ProvidersConfig(**data["providers"]),
        translation=TranslationConfig(**data["translation"]),
        provider=ProviderConfig(**data["provider"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.google_api_key_env)
