"""
Project-level operations used by the CLI.

- init_project: create the localization resource and loader files
- analyze_project: detect the framework and scrape candidate phrases
- generate_translations: translate phrases and merge them into the resource
- update_ui: add language-responsive hooks to UI files
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from i18n_adapt.detect import detect_framework, detect_structure
from i18n_adapt.errors import ResourceNotFoundError
from i18n_adapt.frameworks import get_adapter
from i18n_adapt.models import ExpansionReport, Framework, ProjectStructure, ScanResult
from i18n_adapt.pipeline import PipelineConfig, PipelineResult, ProgressCallback, TranslationPipeline
from i18n_adapt.resource import MergeOutcome, MergePolicy, merge_and_persist
from i18n_adapt.translate.base import Translator

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """Everything a translation run needs to know about a project."""
    framework: Framework
    structure: ProjectStructure
    scan: ScanResult

    @property
    def phrases(self) -> list[str]:
        return sorted(self.scan.texts)

    @property
    def resource_file(self) -> Path:
        return self.structure.resource_file


@dataclass
class TranslationRun:
    result: PipelineResult
    outcome: Optional[MergeOutcome] = None
    expansion: Optional[ExpansionReport] = None
    notes: list[str] = field(default_factory=list)


def _structure(project_path: Path) -> ProjectStructure:
    root = Path(project_path).resolve()
    framework = detect_framework(root)
    logger.info("Detected %s framework", framework.value)
    return detect_structure(root, framework)


def init_project(project_path: Path) -> tuple[ProjectStructure, list[Path]]:
    """Prepare a project for internationalization.

    Returns:
        The detected structure and the files created
    """
    structure = _structure(project_path)
    created = get_adapter(structure.framework).initialize(structure)
    return structure, created


def analyze_project(project_path: Path) -> Analysis:
    structure = _structure(project_path)
    scan = get_adapter(structure.framework).scan(structure)
    return Analysis(framework=structure.framework, structure=structure, scan=scan)


def generate_translations(
    analysis: Analysis,
    config: PipelineConfig,
    force: bool = False,
    translator: Optional[Translator] = None,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_event: Optional[threading.Event] = None,
) -> TranslationRun:
    """Translate the analysed phrases and merge them into the resource.

    Nothing is written when there are no phrases.

    Raises:
        ResourceNotFoundError: The project has not been initialised
        I18nAdaptError: Any provider, alignment or merge failure
    """
    if analysis.scan.phrases and not analysis.resource_file.exists():
        raise ResourceNotFoundError(
            f"Localization resource not found: {analysis.resource_file}. "
            "Run with --init-only first."
        )

    pipeline = TranslationPipeline(
        config,
        translator=translator,
        progress_callback=progress_callback,
        cancel_event=cancel_event,
    )
    result = pipeline.translate(analysis.scan.phrases)
    run = TranslationRun(result=result)
    if result.is_empty:
        run.notes.append("No strings found to translate")
        return run

    run.outcome = merge_and_persist(
        analysis.resource_file,
        config.target_lang,
        result.translations,
        MergePolicy.from_flag(force),
        source_language=config.source_lang,
        source_entries=result.source_entries,
    )
    run.expansion = result.expansion()
    return run


def update_ui(analysis: Analysis) -> list[Path]:
    """Patch UI files of an analysed project for language responsiveness."""
    return get_adapter(analysis.framework).update_ui(analysis.structure)
