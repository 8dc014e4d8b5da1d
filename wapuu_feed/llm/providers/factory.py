"""Translator factory and registry for LLM backends."""

from __future__ import annotations

from ...config import ProviderConfig, TranslationConfig, get_api_key
from .base import Translator
from .gemini import GeminiTranslator


TranslatorBuilder = type[Translator]

_TRANSLATOR_REGISTRY: dict[str, TranslatorBuilder] = {
    "gemini": GeminiTranslator,
}


def available_translators() -> list[str]:
    """Return the set of registered backend names."""
    return sorted(_TRANSLATOR_REGISTRY.keys())


def create_translator(
    provider_cfg: ProviderConfig,
    translation_cfg: TranslationConfig,
) -> Translator | None:
    """Build a translator from runtime config.

    Returns None when translation is disabled or no API key is available,
    in which case content is published untranslated.
    """
    if not translation_cfg.enabled:
        return None
    name = provider_cfg.name.lower().strip()
    builder = _TRANSLATOR_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_translators())
        raise ValueError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    api_key = get_api_key(provider_cfg)
    if not api_key:
        return None
    return builder(provider_cfg, translation_cfg, api_key)
