"""
LLM provider implementations.

To add a new backend:
1. Inherit from the Translator base class and implement translate()
2. Register the class in factory._TRANSLATOR_REGISTRY
"""

from .base import TranslationError, Translator
from .factory import available_translators, create_translator
from .gemini import GeminiTranslator

__all__ = [
    "TranslationError",
    "Translator",
    "GeminiTranslator",
    "available_translators",
    "create_translator",
]
