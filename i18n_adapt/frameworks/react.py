"""
React adapter.

Scrapes JSX text nodes and user-facing attributes, creates an i18next
loader that reads the JSON resource, and adds ``className`` hooks plus a
``document.documentElement.lang`` update to language switchers.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from i18n_adapt.config import SOURCE_LANG
from i18n_adapt.frameworks.base import FrameworkAdapter, add_class_hooks, add_import
from i18n_adapt.models import Framework, ProjectStructure

logger = logging.getLogger(__name__)

REQUIRED_PACKAGES = ("i18next", "react-i18next", "i18next-browser-languagedetector")

APP_FILE_NAMES = ("App.js", "App.jsx", "App.tsx", "app.js")

LOADER_TEMPLATE = """\
import i18n from 'i18next';
import {{ initReactI18next }} from 'react-i18next';
import LanguageDetector from 'i18next-browser-languagedetector';
import translations from '{resource}';

const resources = Object.fromEntries(
  Object.entries(translations).map(([lang, content]) => [lang, {{ translation: content }}])
);

i18n
  .use(LanguageDetector)
  .use(initReactI18next)
  .init({{
    resources,
    fallbackLng: '{fallback}',
    interpolation: {{
      escapeValue: false
    }}
  }});

i18n.on('languageChanged', (lng) => {{
  document.documentElement.lang = lng;
}});

export default i18n;
"""

LANGUAGE_SWITCH_RE = re.compile(
    r"(const changeLanguage\s*=\s*\(\s*(\w+)[^)]*\)\s*=>\s*\{\s*)(.*?i18n\.changeLanguage\([^)]*\);)",
    re.DOTALL,
)


def add_lang_attribute(content: str) -> str:
    """Keep <html lang> in sync wherever the UI switches language."""
    if "changeLanguage" not in content or "document.documentElement.lang" in content:
        return content

    def insert(match: re.Match) -> str:
        prefix, param, call = match.groups()
        return f"{prefix}{call}\n    document.documentElement.lang = {param};"

    return LANGUAGE_SWITCH_RE.sub(insert, content, count=1)


class ReactAdapter(FrameworkAdapter):
    framework = Framework.REACT
    class_attr = "className"

    def loader_path(self, structure: ProjectStructure) -> Path:
        return structure.root / "src" / "i18n.js"

    def initialize_framework(self, structure: ProjectStructure) -> list[Path]:
        self.check_dependencies(structure.root)

        loader = self.loader_path(structure)
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
        logger.info("Created i18n loader at %s", loader)
        return [loader]

    def check_dependencies(self, root: Path) -> list[str]:
        """Warn about i18next packages missing from package.json."""
        package_json = root / "package.json"
        if not package_json.exists():
            return []
        try:
            pkg = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error checking dependencies: %s", e)
            return []
        deps = {**(pkg.get("dependencies") or {}), **(pkg.get("devDependencies") or {})}
        missing = [name for name in REQUIRED_PACKAGES if name not in deps]
        if missing:
            logger.warning(
                "i18n dependencies not found in package.json. Please run: npm install --save %s",
                " ".join(missing),
            )
        return missing

    def stylesheet_entry(self, structure: ProjectStructure) -> Path | None:
        for path in structure.ui_files:
            if path.name in APP_FILE_NAMES:
                return path
        return None

    def link_stylesheet(self, entry: Path, structure: ProjectStructure, content: str) -> str:
        css = self.relative_import(entry, structure.responsive_css_file)
        return add_import(content, f"import '{css}';")

    def patch_file(self, path: Path, content: str) -> str:
        updated, _ = add_class_hooks(content, self.class_attr)
        return add_lang_attribute(updated)
