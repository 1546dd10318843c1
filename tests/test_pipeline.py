"""
Tests for the translation pipeline.

Run with: pytest tests/test_pipeline.py -v
"""

import pytest

from i18n_adapt.errors import AlignmentError, ProviderError
from i18n_adapt.models import Namespace, Phrase
from i18n_adapt.pipeline import (
    PipelineConfig,
    TranslationPipeline,
    group_entries,
    plan_entries,
    source_entries,
    translate_phrases,
)
from i18n_adapt.translate.base import DummyTranslator, Translator


class ShortTranslator(Translator):
    """Drops the last translation of every batch."""

    name = "short"

    def translate_batch(self, phrases, target_lang):
        return [p.upper() for p in phrases][:-1]


class FailingTranslator(Translator):
    name = "failing"

    def __init__(self):
        self.calls = 0

    def translate_batch(self, phrases, target_lang):
        self.calls += 1
        raise ProviderError("Gemini API error: quota", status=429)


def make_pipeline(translator, **config):
    config.setdefault("batch_delay", 0)
    return TranslationPipeline(PipelineConfig(**config), translator=translator)


class TestPlanning:

    def test_plan_follows_namespace_order(self):
        plan = plan_entries(["Invalid input", "Home", "OK", "Save"])
        assert [e.namespace for e in plan] == [
            Namespace.COMMON, Namespace.NAVIGATION, Namespace.FORMS, Namespace.ERRORS,
        ]
        assert [e.key for e in plan] == ["ok", "home", "save", "invalidInput"]

    def test_plan_accepts_phrase_objects(self):
        plan = plan_entries({Phrase("Home"), Phrase("Home")})
        assert len(plan) == 1

    def test_group_entries_rejects_length_mismatch(self):
        plan = plan_entries(["Home", "Save"])
        with pytest.raises(AlignmentError) as exc_info:
            group_entries(plan, ["Inicio"])
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1

    def test_key_collision_keeps_last(self):
        entries = source_entries(["Submit form", "submit-form"])
        # both derive submitForm in forms; sorted order puts "submit-form" last
        assert entries == {"forms": {"submitForm": "submit-form"}}

    def test_source_entries_layout(self):
        entries = source_entries(["Home", "Loading..."])
        assert entries == {
            "navigation": {"home": "Home"},
            "messages": {"loading": "Loading..."},
        }


class TestTranslationPipeline:

    def test_translates_into_namespaces(self):
        translator = DummyTranslator()
        result = make_pipeline(translator, target_lang="es").translate(
            ["Home", "Save", "Invalid email"]
        )
        assert result.translations == {
            "navigation": {"home": "[es] Home"},
            "forms": {"save": "[es] Save"},
            "errors": {"invalidEmail": "[es] Invalid email"},
        }
        assert result.source_entries["forms"] == {"save": "Save"}
        assert result.stats["phrases"] == 3
        assert result.stats["translator"] == "dummy-prefix"

    def test_empty_input_never_calls_provider(self):
        translator = DummyTranslator()
        result = make_pipeline(translator).translate([])
        assert result.is_empty
        assert result.translations == {}
        assert translator.calls == []

    def test_empty_input_does_not_build_translator(self):
        pipeline = TranslationPipeline(PipelineConfig(service="gemini"))
        pipeline.translate(set())
        assert pipeline._translator is None

    def test_batches_respect_size_and_order(self):
        translator = DummyTranslator(mode="echo")
        phrases = [f"Label number {i:02d}" for i in range(7)]
        make_pipeline(translator, batch_size=3).translate(phrases)
        assert [len(b) for b in translator.calls] == [3, 3, 1]
        assert sum(translator.calls, []) == sorted(phrases)

    def test_short_batch_raises_alignment_error(self):
        with pytest.raises(AlignmentError, match="sent 2 phrases, received 1"):
            make_pipeline(ShortTranslator(), batch_size=5).translate(["Home", "Save"])

    def test_provider_error_propagates(self):
        translator = FailingTranslator()
        with pytest.raises(ProviderError, match="status 429"):
            make_pipeline(translator, batch_size=1).translate(["Home", "Save"])
        assert translator.calls == 1

    def test_progress_callback(self):
        updates = []
        pipeline = TranslationPipeline(
            PipelineConfig(batch_size=1, batch_delay=0),
            translator=DummyTranslator(),
            progress_callback=lambda msg, pct: updates.append((msg, pct)),
        )
        pipeline.translate(["Home", "Save"])
        assert updates == [("Translated batch 1/2", 0.5), ("Translated batch 2/2", 1.0)]

    def test_expansion_report(self):
        translator = DummyTranslator(mode="upper")
        result = make_pipeline(translator).translate(["Home"])
        report = result.expansion()
        assert report.language == "es"
        assert report.expansion_factor == 1.0
        assert not report.has_critical

    def test_config_to_dict_omits_key(self):
        assert "api_key" not in PipelineConfig(api_key="secret").to_dict()


def test_translate_phrases_functional_form():
    result = translate_phrases(["About us"], "de", DummyTranslator(), delay=0)
    assert result == {"navigation": {"aboutUs": "[de] About us"}}
