"""
Gemini translation provider.

Calls the Gemini ``generateContent`` REST endpoint with a prompt asking for
a JSON array of translations, using fixed low-randomness generation
settings so output stays close to literal.

Usage:
    translator = GeminiTranslator(api_key="AIza...")
    translator.translate_batch(["Save", "Cancel"], "es")
    # ['Guardar', 'Cancelar']
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from i18n_adapt.config import (
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    GENERATION_CONFIG,
    REQUEST_TIMEOUT,
)
from i18n_adapt.credentials import KeyManager, env_var_for
from i18n_adapt.errors import ProviderError
from i18n_adapt.translate.base import Translator
from i18n_adapt.translate.prompting import build_prompt, parse_json_array

logger = logging.getLogger(__name__)


class GeminiTranslator(Translator):
    """Google Gemini generative-text translator."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or KeyManager().get_key("gemini")
        self.model = model or GEMINI_MODEL
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def name(self) -> str:
        return f"gemini-{self.model}"

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, phrases: list[str], target_lang: str) -> dict:
        return {
            "contents": [{"parts": [{"text": build_prompt(phrases, target_lang)}]}],
            "generation_config": dict(GENERATION_CONFIG),
        }

    def translate_batch(self, phrases: list[str], target_lang: str) -> list[str]:
        if not phrases:
            return []

        if not self.api_key:
            raise ProviderError(
                f"Gemini API key required. Pass --key, set {env_var_for('gemini')} "
                f"or run: i18n-adapt keys set gemini"
            )

        try:
            response = self.session.post(
                self.endpoint,
                params={"key": self.api_key},
                json=self.build_payload(phrases, target_lang),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Gemini API request failed: {e}") from e

        if not response.ok:
            raise ProviderError(
                f"Gemini API error: {_error_message(response)}",
                status=response.status_code,
            )

        text = self.response_text(response)
        logger.debug("Gemini returned %d chars for %d phrases", len(text), len(phrases))
        return parse_json_array(text, expected=len(phrases))

    @staticmethod
    def response_text(response: requests.Response) -> str:
        """Pull the first candidate's text out of a generateContent response."""
        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                "Unexpected response format from Gemini API: body is not JSON",
                status=response.status_code,
            ) from e

        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            raise ProviderError(
                "Unexpected response format from Gemini API: no candidates",
                status=response.status_code,
            )

        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
        if not text.strip():
            raise ProviderError(
                "Unexpected response format from Gemini API: empty candidate",
                status=response.status_code,
            )
        return text


def _error_message(response: requests.Response) -> str:
    try:
        error = response.json().get("error")
    except (ValueError, AttributeError):
        error = None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    if isinstance(error, str) and error:
        return error
    return response.reason or "request failed"
