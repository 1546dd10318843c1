"""
Vue adapter.

Only the ``<template>`` block of single-file components is scraped and
patched; script and style blocks are left untouched.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from i18n_adapt.config import SOURCE_LANG
from i18n_adapt.frameworks.base import FrameworkAdapter, add_class_hooks, add_import
from i18n_adapt.models import Framework, ProjectStructure

logger = logging.getLogger(__name__)

TEMPLATE_RE = re.compile(r"(<template[^>]*>)([\s\S]*)(</template>)")

LOADER_TEMPLATE = """\
import {{ createI18n }} from 'vue-i18n';
import messages from '{resource}';

const i18n = createI18n({{
  legacy: false,
  locale: navigator.language.split('-')[0] || '{fallback}',
  fallbackLocale: '{fallback}',
  messages
}});

export default i18n;
"""


class VueAdapter(FrameworkAdapter):
    framework = Framework.VUE
    class_attr = "class"

    def initialize_framework(self, structure: ProjectStructure) -> list[Path]:
        loader = structure.root / "src" / "i18n.js"
        if loader.exists():
            return []
        loader.parent.mkdir(parents=True, exist_ok=True)
        loader.write_text(
            LOADER_TEMPLATE.format(
                resource=self.relative_import(loader, structure.resource_file),
                fallback=SOURCE_LANG,
            ),
            encoding="utf-8",
        )
        logger.info("Created vue-i18n loader at %s", loader)
        return [loader]

    def template_text(self, content: str) -> str:
        match = TEMPLATE_RE.search(content)
        return match.group(2) if match else ""

    def patch_file(self, path: Path, content: str) -> str:
        match = TEMPLATE_RE.search(content)
        if match is None:
            return content
        patched, changed = add_class_hooks(match.group(2), self.class_attr)
        if not changed:
            return content
        return content[:match.start(2)] + patched + content[match.end(2):]

    def stylesheet_entry(self, structure: ProjectStructure) -> Path | None:
        for name in ("main.js", "main.ts"):
            candidate = structure.root / "src" / name
            if candidate.exists():
                return candidate
        return None

    def link_stylesheet(self, entry: Path, structure: ProjectStructure, content: str) -> str:
        css = self.relative_import(entry, structure.responsive_css_file)
        return add_import(content, f"import '{css}';")
