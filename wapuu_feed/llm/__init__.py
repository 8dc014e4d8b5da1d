"""LLM-backed translation."""

from .providers import (
    GeminiTranslator,
    TranslationError,
    Translator,
    available_translators,
    create_translator,
)

__all__ = [
    "Translator",
    "TranslationError",
    "GeminiTranslator",
    "available_translators",
    "create_translator",
]
