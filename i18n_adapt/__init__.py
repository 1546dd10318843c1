"""
i18n-adapt: Internationalization automation for React, Vue and Angular projects.

Extracts user-facing strings from UI source files, sorts them into
namespaces, translates them with an LLM in batches, and merges the result
into a JSON localization resource without losing earlier work.
"""

__version__ = "0.1.0"

from i18n_adapt.models import Framework, Namespace, Phrase
from i18n_adapt.pipeline import PipelineConfig, TranslationPipeline

__all__ = [
    "Framework",
    "Namespace",
    "Phrase",
    "PipelineConfig",
    "TranslationPipeline",
]
