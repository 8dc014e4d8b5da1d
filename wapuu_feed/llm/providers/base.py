"""Abstract interface for LLM-backed translation."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TranslationError(Exception):
    """Raised when a translation request fails or returns nothing."""


class Translator(ABC):
    """Provider interface for translating entry content."""

    @abstractmethod
    def translate(self, text: str) -> str:
        """Return the translated text, keeping any HTML markup intact."""
        raise NotImplementedError

    def __call__(self, text: str) -> str:
        return self.translate(text)
