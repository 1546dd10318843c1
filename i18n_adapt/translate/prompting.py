"""
Prompt construction and response parsing for prompted providers.

Generative-text providers are asked for a bare JSON array of translations
in input order. Models still wrap the array in prose or code fences now and
then, so the parser looks for the array inside the text before giving up.
"""

from __future__ import annotations

import json
from typing import Optional

from i18n_adapt.errors import ProviderFormatError
from i18n_adapt.translate.base import language_name


def build_prompt(phrases: list[str], target_lang: str) -> str:
    """Build the translation instruction for one batch."""
    lang = language_name(target_lang)
    return (
        f"Translate the following English phrases to {lang}. \n"
        "Return only the translations as a JSON array in the exact same order, "
        "with no additional text or explanation.\n"
        'Example: ["translation1", "translation2", ...]\n'
        "\n"
        "Phrases to translate:\n"
        f"{json.dumps(phrases, ensure_ascii=False)}"
    )


def find_first_array(text: str) -> Optional[list]:
    """Decode the first JSON array embedded in a response.

    Each '[' is tried in order and the first position that decodes to a
    list wins, so prose before or after the array (brackets included) is
    ignored. Returns None when no position decodes to a list.
    """
    decoder = json.JSONDecoder()
    index = text.find("[")
    while index != -1:
        try:
            value, _ = decoder.raw_decode(text, index)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list):
            return value
        index = text.find("[", index + 1)
    return None


def parse_json_array(text: str, expected: int) -> list[str]:
    """Parse a provider response into exactly ``expected`` translations.

    Raises:
        ProviderFormatError: The text is not a JSON array of strings of
            the expected length
    """
    data = find_first_array(text)
    if data is None:
        try:
            data = json.loads(text.strip())
        except json.JSONDecodeError as e:
            raise ProviderFormatError(f"Provider response is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ProviderFormatError(
            f"Provider response is a {type(data).__name__}, expected a JSON array"
        )
    if not all(isinstance(item, str) for item in data):
        raise ProviderFormatError("Provider response array contains non-string items")
    if len(data) != expected:
        raise ProviderFormatError(
            f"Provider returned {len(data)} translations for {expected} phrases"
        )
    return data
