"""
Project-wide configuration and defaults.

This module defines the constants used throughout i18n-adapt: batching and
pacing defaults, translation provider endpoints and generation parameters,
and the default locations of generated project files.

Module Contents:
    APP_NAME: Application name for display purposes
    SOURCE_LANG: Language the scanned projects are written in
    DEFAULT_BATCH_SIZE: Phrases sent to a provider per request
    DEFAULT_BATCH_DELAY: Pause (seconds) between consecutive batches
    GEMINI_BASE_URL / GEMINI_MODEL: Gemini endpoint configuration
    GENERATION_CONFIG: Low-randomness generation parameters
    RESOURCE_FILENAME: Name of the JSON localization resource

Batch size and delay can be overridden with the environment variables
``I18N_ADAPT_BATCH_SIZE`` and ``I18N_ADAPT_BATCH_DELAY``.

Example:
    >>> from i18n_adapt.config import DEFAULT_BATCH_SIZE, GEMINI_MODEL
    >>> print(f"{GEMINI_MODEL}, {DEFAULT_BATCH_SIZE} phrases per call")
"""

import os
from pathlib import Path

# Application name for display and identification
APP_NAME = "i18n-adapt"

# Scanned projects are assumed to be authored in English
SOURCE_LANG = "en"

# Batching and pacing against rate-limited providers
DEFAULT_BATCH_SIZE = int(os.getenv("I18N_ADAPT_BATCH_SIZE", "15"))
DEFAULT_BATCH_DELAY = float(os.getenv("I18N_ADAPT_BATCH_DELAY", "2.0"))

# Gemini generative-text endpoint
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL = "gemini-2.0-flash"

# OpenAI chat model used by the alternative provider
OPENAI_MODEL = "gpt-4o-mini"

# Fixed low-randomness settings so output stays literal
GENERATION_CONFIG = {
    "temperature": 0.2,
    "top_k": 1,
    "top_p": 0.8,
    "max_output_tokens": 1024,
}

# Per-request timeout in seconds
REQUEST_TIMEOUT = 60.0

# Generated project files (relative to the project root)
RESOURCE_FILENAME = "translations.json"
RESPONSIVE_CSS_FILE = Path("src") / "ResponsiveLanguage.css"

# Phrases longer than this many characters feed only this prefix to key derivation
KEY_PREFIX_LENGTH = 30

# Local credentials store (fallback when no keyring backend is available)
CONFIG_DIR = Path.home() / ".i18n-adapt"
