"""
Angular adapter.

Component templates (``.html``) are scraped and patched. The JSON resource
lives under ``src/assets/i18n`` where a translate loader can fetch it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from i18n_adapt.frameworks.base import FrameworkAdapter
from i18n_adapt.models import Framework, ProjectStructure

logger = logging.getLogger(__name__)


class AngularAdapter(FrameworkAdapter):
    framework = Framework.ANGULAR
    class_attr = "class"

    def initialize_framework(self, structure: ProjectStructure) -> list[Path]:
        logger.info(
            "Serve %s with your translate loader (e.g. ngx-translate's HttpLoader)",
            structure.resource_file.relative_to(structure.root),
        )
        return []

    def template_sources(self, structure: ProjectStructure) -> Iterable[Path]:
        return [p for p in structure.ui_files if p.suffix == ".html"]

    def stylesheet_entry(self, structure: ProjectStructure) -> Path | None:
        for name in ("styles.css", "styles.scss"):
            candidate = structure.root / "src" / name
            if candidate.exists():
                return candidate
        return None

    def link_stylesheet(self, entry: Path, structure: ProjectStructure, content: str) -> str:
        css = self.relative_import(entry, structure.responsive_css_file)
        # @import must precede other rules
        return f"@import '{css}';\n{content}"
