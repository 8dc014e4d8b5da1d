"""Google Gemini provider for content translation."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import ProviderConfig, TranslationConfig
from ...logging_utils import log_event
from .base import TranslationError, Translator


logger = logging.getLogger("wapuu_feed.llm")


class GeminiTranslator(Translator):
    """Gemini-backed translator using the generateContent endpoint."""

    def __init__(
        self,
        cfg: ProviderConfig,
        translation_cfg: TranslationConfig,
        api_key: str | None,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key:
            raise ValueError("Missing Google API key")
        self.cfg = cfg
        self.translation_cfg = translation_cfg
        self.api_key = api_key
        self.transport = transport

    def translate(self, text: str) -> str:
        prompt = _translation_prompt(text, self.translation_cfg.target_language)
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.1},
        }
        try:
            data = self._post(payload)
        except httpx.HTTPError as exc:
            log_event(
                logger,
                "LLM response",
                level=logging.WARNING,
                event="llm_translation_response",
                status="provider_error",
                model=self.cfg.model,
                error=str(exc),
            )
            raise TranslationError(f"gemini request failed: {type(exc).__name__}: {exc}") from exc

        content = _extract_text(data).strip()
        if not content:
            log_event(
                logger,
                "LLM response",
                level=logging.WARNING,
                event="llm_translation_response",
                status="empty",
                model=self.cfg.model,
            )
            raise TranslationError("gemini returned an empty translation")

        log_event(
            logger,
            "LLM response",
            level=logging.DEBUG,
            event="llm_translation_response",
            status="ok",
            model=self.cfg.model,
            chars=len(content),
        )
        return _strip_code_fence(content)

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.cfg.base_url}/v1beta/models/{self.cfg.model}:generateContent"
        params = {"key": self.api_key}
        with httpx.Client(
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self.transport,
        ) as client:
            resp = client.post(url, params=params, json=payload)
            resp.raise_for_status()
            return resp.json()


def _translation_prompt(text: str, language: str) -> str:
    return (
        f"Translate the following content into {language}. "
        "Keep all HTML tags, attributes and links unchanged and translate only "
        "the human readable text. Reply with the translation only, without "
        "explanations or code fences.\n\n"
        f"{text}"
    )


def _extract_text(data: dict[str, Any]) -> str:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""


def _strip_code_fence(content: str) -> str:
    if not content.startswith("```"):
        return content
    lines = content.splitlines()[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()
