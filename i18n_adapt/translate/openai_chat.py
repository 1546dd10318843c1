"""
OpenAI chat-completions translation provider.

Sends the same JSON-array prompt as the Gemini provider through the OpenAI
SDK and parses the reply with the same strict parser.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from i18n_adapt.config import GENERATION_CONFIG, OPENAI_MODEL, REQUEST_TIMEOUT
from i18n_adapt.credentials import KeyManager, env_var_for
from i18n_adapt.errors import ProviderError
from i18n_adapt.translate.base import Translator
from i18n_adapt.translate.prompting import build_prompt, parse_json_array

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You translate user interface strings. "
    "Answer with a JSON array of strings and nothing else."
)


class OpenAITranslator(Translator):
    """OpenAI GPT-based translator.

    Usage:
        translator = OpenAITranslator(model="gpt-4o-mini")
        translator.translate_batch(["Home", "About"], "fr")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
        client: Any = None,
    ):
        self.api_key = api_key or KeyManager().get_key("openai")
        self.model = model or OPENAI_MODEL
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    @property
    def name(self) -> str:
        return f"openai-{self.model}"

    def _get_client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            try:
                from openai import OpenAI
            except ImportError:
                raise ImportError(
                    "OpenAI library required. Install with: pip install openai"
                )

            if not self.api_key:
                raise ProviderError(
                    f"OpenAI API key required. Pass --key, set {env_var_for('openai')} "
                    f"or run: i18n-adapt keys set openai"
                )

            kwargs = {"api_key": self.api_key, "timeout": self.timeout}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            self._client = OpenAI(**kwargs)

        return self._client

    def translate_batch(self, phrases: list[str], target_lang: str) -> list[str]:
        if not phrases:
            return []

        client = self._get_client()
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(phrases, target_lang)},
        ]

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=GENERATION_CONFIG["temperature"],
                top_p=GENERATION_CONFIG["top_p"],
                max_tokens=GENERATION_CONFIG["max_output_tokens"],
            )
        except Exception as e:
            status = getattr(e, "status_code", None)
            raise ProviderError(f"OpenAI translation failed: {e}", status=status) from e

        if not response.choices:
            raise ProviderError("OpenAI returned no choices")
        text = response.choices[0].message.content or ""
        if not text.strip():
            raise ProviderError("OpenAI returned an empty message")

        logger.debug("OpenAI returned %d chars for %d phrases", len(text), len(phrases))
        return parse_json_array(text, expected=len(phrases))
