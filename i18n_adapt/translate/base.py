"""
Base translator interface and the provider factory.

This module defines:
- Abstract Translator interface that all providers implement
- DummyTranslator for offline runs and tests
- create_translator() to build a provider by service name

Design Philosophy:
- Translators are stateless between calls: credentials and model are bound
  at construction, phrases and target language arrive with each call
- translate_batch() returns exactly one string per input phrase, in order;
  anything else is an error, never a partial result
- Adding a provider means subclassing Translator and registering it in
  create_translator()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from i18n_adapt.errors import UnsupportedProviderError


LANGUAGE_NAMES = {
    "es": "Spanish",
    "zh": "Chinese (Simplified)",
    "hi": "Hindi",
    "fr": "French",
    "de": "German",
    "ja": "Japanese",
    "ko": "Korean",
    "pt": "Portuguese",
    "ru": "Russian",
    "ar": "Arabic",
}

DEFAULT_LANGUAGE_NAME = "Spanish"


def language_name(code: str) -> str:
    """Human-readable name for a language code.

    Unknown codes map to DEFAULT_LANGUAGE_NAME instead of failing.
    """
    return LANGUAGE_NAMES.get(code.lower(), DEFAULT_LANGUAGE_NAME)


class Translator(ABC):
    """Abstract base class for all translation providers.

    Subclasses implement translate_batch(), which sends one batch of
    source phrases to the provider and returns the translations
    index-for-index.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name (e.g., 'gemini', 'openai', 'dummy')."""

    @abstractmethod
    def translate_batch(self, phrases: list[str], target_lang: str) -> list[str]:
        """Translate a batch of phrases.

        Args:
            phrases: Source-language phrases, in send order
            target_lang: Target language code (e.g. 'es')

        Returns:
            Translations, one per phrase, in the same order

        Raises:
            ProviderError: The remote call failed or returned nothing usable
            ProviderFormatError: The response could not be parsed into
                exactly len(phrases) strings
        """


class DummyTranslator(Translator):
    """Offline translator for dry runs and tests.

    Modes:
    - 'prefix': Add a [lang] prefix
    - 'echo': Return the input unchanged
    - 'upper': Return uppercase version
    """

    def __init__(self, mode: str = "prefix"):
        self.mode = mode
        self.calls: list[list[str]] = []

    @property
    def name(self) -> str:
        return f"dummy-{self.mode}"

    def translate_batch(self, phrases: list[str], target_lang: str) -> list[str]:
        self.calls.append(list(phrases))
        if self.mode == "echo":
            return list(phrases)
        if self.mode == "upper":
            return [p.upper() for p in phrases]
        return [f"[{target_lang}] {p}" for p in phrases]


# Services the CLI accepts but which have no implementation yet
UNIMPLEMENTED_SERVICES = ("google", "azure")


def create_translator(
    service: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    **kwargs,
) -> Translator:
    """Factory function to create a translator by service name.

    Supported services and aliases:
        - gemini: Google Gemini generative-text API (default)
        - openai, gpt: OpenAI chat completions
        - dummy, echo, test: Offline translator, no network

    ``google`` and ``azure`` are recognised but not implemented; selecting
    them (or any unknown name) raises UnsupportedProviderError rather than
    falling back to another provider.
    """
    service_lower = service.lower().replace("_", "-")

    if service_lower == "gemini":
        from i18n_adapt.translate.gemini import GeminiTranslator
        return GeminiTranslator(api_key=api_key, model=model, **kwargs)

    elif service_lower in ("openai", "gpt"):
        from i18n_adapt.translate.openai_chat import OpenAITranslator
        return OpenAITranslator(api_key=api_key, model=model, **kwargs)

    elif service_lower in ("dummy", "echo", "test"):
        mode = kwargs.get("mode", "echo" if service_lower == "echo" else "prefix")
        return DummyTranslator(mode=mode)

    elif service_lower in UNIMPLEMENTED_SERVICES:
        raise UnsupportedProviderError(
            f"Translation service '{service}' is not implemented yet. "
            f"Use 'gemini' or 'openai'."
        )

    raise UnsupportedProviderError(
        f"Unknown translation service: {service}. "
        f"Available services: gemini, openai, dummy"
    )
