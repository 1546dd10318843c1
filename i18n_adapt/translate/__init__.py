"""Translation providers."""

from i18n_adapt.translate.base import (
    DEFAULT_LANGUAGE_NAME,
    LANGUAGE_NAMES,
    DummyTranslator,
    Translator,
    create_translator,
    language_name,
)
from i18n_adapt.translate.prompting import build_prompt, parse_json_array

__all__ = [
    "DEFAULT_LANGUAGE_NAME",
    "LANGUAGE_NAMES",
    "DummyTranslator",
    "Translator",
    "create_translator",
    "language_name",
    "build_prompt",
    "parse_json_array",
]
