"""
Translation pipeline for i18n-adapt.

This module turns a set of extracted phrases into a namespaced mapping of
translations:
1. Deduplicate phrases and classify them into namespace buckets
2. Flatten the buckets into one ordered list, remembering each index's
   namespace, key and source text
3. Translate the list in sequential batches
4. Check that exactly one translation came back per phrase
5. Regroup translations into ``namespace -> key -> text``

Design Philosophy:
- Pipeline is configurable via PipelineConfig
- Any failure propagates; there are no partial results
- Progress callbacks for CLI integration
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from i18n_adapt.batching import process_in_batches
from i18n_adapt.classify import NamespaceClassifier
from i18n_adapt.config import DEFAULT_BATCH_DELAY, DEFAULT_BATCH_SIZE, SOURCE_LANG
from i18n_adapt.errors import AlignmentError
from i18n_adapt.expansion import analyze_expansion
from i18n_adapt.keygen import derive_key
from i18n_adapt.models import ExpansionReport, Namespace, NamespacedEntries, Phrase
from i18n_adapt.translate.base import Translator, create_translator

logger = logging.getLogger(__name__)

# Type alias for progress callbacks
ProgressCallback = Callable[[str, float], None]

PhraseLike = Union[str, Phrase]


@dataclass
class PipelineConfig:
    """Configuration for the translation pipeline."""
    target_lang: str = "es"
    source_lang: str = SOURCE_LANG
    service: str = "gemini"
    model: Optional[str] = None
    api_key: Optional[str] = None
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay: float = DEFAULT_BATCH_DELAY
    translator_kwargs: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize config for logging/debugging (credentials omitted)."""
        return {
            "target_lang": self.target_lang,
            "source_lang": self.source_lang,
            "service": self.service,
            "model": self.model,
            "batch_size": self.batch_size,
            "batch_delay": self.batch_delay,
        }


@dataclass(frozen=True)
class PlannedEntry:
    """Where one flattened phrase goes once translated."""
    namespace: Namespace
    key: str
    source: str


@dataclass
class PipelineResult:
    """Result of running the translation pipeline.

    Attributes:
        translations: namespace -> key -> translated text
        source_entries: namespace -> key -> source text, same layout
        pairs: (source, translation) in send order
        stats: Counters for display
    """
    target_lang: str
    translations: NamespacedEntries = field(default_factory=dict)
    source_entries: NamespacedEntries = field(default_factory=dict)
    pairs: list[tuple[str, str]] = field(default_factory=list)
    stats: dict = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.pairs

    def expansion(self) -> ExpansionReport:
        sources = [s for s, _ in self.pairs]
        translated = [t for _, t in self.pairs]
        return analyze_expansion(sources, translated, self.target_lang)


def _text(phrase: PhraseLike) -> str:
    return phrase.text if isinstance(phrase, Phrase) else phrase


def plan_entries(
    phrases: Iterable[PhraseLike],
    classifier: Optional[NamespaceClassifier] = None,
) -> list[PlannedEntry]:
    """Classify and flatten phrases into send order.

    Buckets are visited in Namespace declaration order; within a bucket
    phrases are sorted, so the same input always yields the same order.
    """
    classifier = classifier or NamespaceClassifier()
    buckets = classifier.bucket(_text(p) for p in phrases)
    return [
        PlannedEntry(namespace=namespace, key=derive_key(text), source=text)
        for namespace, texts in buckets.items()
        for text in texts
    ]


def group_entries(
    plan: list[PlannedEntry],
    values: list[str],
) -> NamespacedEntries:
    """Regroup flat values into ``namespace -> key -> value`` using the plan.

    Raises:
        AlignmentError: values and plan differ in length
    """
    if len(values) != len(plan):
        raise AlignmentError(expected=len(plan), actual=len(values))

    grouped: NamespacedEntries = {}
    for entry, value in zip(plan, values):
        bucket = grouped.setdefault(entry.namespace.value, {})
        if not entry.key:
            logger.warning("Phrase %r produced an empty key", entry.source)
        elif entry.key in bucket:
            logger.debug(
                "Key collision in %s.%s: %r overwrites earlier entry",
                entry.namespace.value, entry.key, entry.source,
            )
        bucket[entry.key] = value
    return grouped


class TranslationPipeline:
    """Orchestrates classification, key derivation and batched translation.

    Usage:
        config = PipelineConfig(target_lang="es", service="gemini", api_key="...")
        pipeline = TranslationPipeline(config)

        result = pipeline.translate({"Save", "Loading...", "Home"})
        print(result.translations)
        # {'navigation': {'home': 'Inicio'}, 'messages': {...}, 'forms': {...}}
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        translator: Translator | None = None,
        classifier: NamespaceClassifier | None = None,
        progress_callback: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ):
        self.config = config or PipelineConfig()
        self.classifier = classifier or NamespaceClassifier()
        self.progress_callback = progress_callback or (lambda msg, pct: None)
        self.cancel_event = cancel_event
        self._translator = translator

    @property
    def translator(self) -> Translator:
        """Translator for this run, created from the config on first use."""
        if self._translator is None:
            self._translator = create_translator(
                self.config.service,
                api_key=self.config.api_key,
                model=self.config.model,
                **self.config.translator_kwargs,
            )
        return self._translator

    def translate(self, phrases: Iterable[PhraseLike]) -> PipelineResult:
        """Translate phrases into a namespaced mapping.

        Returns an empty result without touching the provider when there
        is nothing to translate.

        Raises:
            AlignmentError: The provider returned a different number of
                translations than phrases sent
            ProviderError: A batch failed
            TranslationCancelledError: cancel_event was set mid-run
        """
        target = self.config.target_lang
        plan = plan_entries(phrases, self.classifier)
        if not plan:
            logger.info("No phrases to translate")
            return PipelineResult(target_lang=target, stats={"phrases": 0})

        sources = [entry.source for entry in plan]
        translator = self.translator
        logger.info(
            "Translating %d phrases to %s using %s",
            len(sources), target, translator.name,
        )

        def run_batch(batch: list[str]) -> list[str]:
            translated = translator.translate_batch(batch, target)
            if len(translated) != len(batch):
                raise AlignmentError(expected=len(batch), actual=len(translated))
            return translated

        def on_batch(done: int, total: int) -> None:
            self.progress_callback(f"Translated batch {done}/{total}", done / total)

        translations = process_in_batches(
            sources,
            run_batch,
            batch_size=self.config.batch_size,
            delay=self.config.batch_delay,
            cancel_event=self.cancel_event,
            progress=on_batch,
        )

        grouped = group_entries(plan, translations)
        stats = {"phrases": len(plan), "translator": translator.name}
        stats.update({ns: len(keys) for ns, keys in grouped.items()})

        return PipelineResult(
            target_lang=target,
            translations=grouped,
            source_entries=group_entries(plan, sources),
            pairs=list(zip(sources, translations)),
            stats=stats,
        )


def translate_phrases(
    phrases: Iterable[PhraseLike],
    target_lang: str,
    translator: Translator,
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay: float = DEFAULT_BATCH_DELAY,
    classifier: Optional[NamespaceClassifier] = None,
    cancel_event: Optional[threading.Event] = None,
) -> NamespacedEntries:
    """Functional form of TranslationPipeline.translate().

    Returns only the ``namespace -> key -> text`` mapping.
    """
    config = PipelineConfig(
        target_lang=target_lang, batch_size=batch_size, batch_delay=delay
    )
    pipeline = TranslationPipeline(
        config, translator=translator, classifier=classifier, cancel_event=cancel_event
    )
    return pipeline.translate(phrases).translations


def source_entries(
    phrases: Iterable[PhraseLike],
    classifier: Optional[NamespaceClassifier] = None,
) -> NamespacedEntries:
    """Lay out source phrases as ``namespace -> key -> text`` without translating.

    Used for --extract-only runs and to record the source language.
    """
    plan = plan_entries(phrases, classifier)
    return group_entries(plan, [entry.source for entry in plan])
