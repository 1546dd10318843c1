"""
Framework adapter interface and shared scraping helpers.

Adapters find candidate text in a framework's source dialect with regular
expressions; they do not parse templates. What they return (a set of
phrases, the UI files scanned, the current resource content) is all the
translation pipeline needs.
"""

from __future__ import annotations

import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from i18n_adapt.config import SOURCE_LANG
from i18n_adapt.frameworks.styles import RESPONSIVE_CSS
from i18n_adapt.models import Framework, ProjectStructure, ResourceData, ScanResult
from i18n_adapt.resource import init_resource, load_resource

logger = logging.getLogger(__name__)

# Source-language content of a freshly initialised resource, filed where
# the classifier would put each phrase so a later scan adds no duplicates
SEED_TRANSLATIONS: ResourceData = {
    SOURCE_LANG: {
        "common": {
            "retry": "Retry",
        },
        "navigation": {
            "home": "Home",
            "about": "About",
            "contact": "Contact",
        },
        "messages": {
            "loading": "Loading",
        },
        "errors": {
            "error": "Error",
        },
    },
}

TEXT_NODE_RE = re.compile(r">([^<>{}\n]+)<")
ATTRIBUTE_RE = re.compile(
    r"""(?:placeholder|title|alt|aria-label)=(?:['"](.*?)['"]|\{['"](.*?)['"]\})"""
)
# Attributes, allowing one level of {...} so JSX arrows like onClick={() => f()} fit
_ATTRS = r"((?:[^>{}]|\{[^{}]*\})*)"
BUTTON_RE = re.compile(rf"<button{_ATTRS}>([^<]+)</button>")
TEXT_ELEMENT_RE = re.compile(
    rf"<(p|span|div|h[1-6])\b{_ATTRS}>([^<>{{}}\n]+)(</\1>)"
)
IMPORT_RE = re.compile(r"""(import\s+.*?\s+from\s+['"][^'"]+['"];?)(\s*)""")

_DIGITS_RE = re.compile(r"^\d+$")


def is_candidate(text: str) -> bool:
    """Whether scraped text looks like translatable copy."""
    return len(text) > 1 and not _DIGITS_RE.match(text) and "${" not in text


def extract_phrases(content: str) -> list[str]:
    """Find text nodes and user-facing attribute values in markup."""
    found = []
    for match in TEXT_NODE_RE.finditer(content):
        found.append(match.group(1).strip())
    for match in ATTRIBUTE_RE.finditer(content):
        found.append((match.group(1) or match.group(2) or "").strip())
    return [text for text in found if is_candidate(text)]


def _static_class_re(class_attr: str) -> re.Pattern:
    # plain attribute only, not :class / [class] / v-bind:class
    return re.compile(rf'(?<![\w:.\[\-]){class_attr}="')


def add_class_hooks(content: str, class_attr: str) -> tuple[str, bool]:
    """Add ``lang-btn``/``lang-wrap`` classes to buttons and text elements.

    ``class_attr`` is ``className`` for JSX and ``class`` for HTML
    templates. Elements whose classes come from a dynamic binding are left
    alone.
    """
    changed = False
    static = _static_class_re(class_attr)

    def add_class(attrs: str, css_class: str) -> str | None:
        if css_class in attrs:
            return None
        match = static.search(attrs)
        if match:
            return f"{attrs[:match.end()]}{css_class} {attrs[match.end():]}"
        if class_attr in attrs:
            return None
        return f'{attrs} {class_attr}="{css_class}"'

    def button(match: re.Match) -> str:
        nonlocal changed
        attrs, text = match.group(1), match.group(2)
        new_attrs = add_class(attrs, "lang-btn") if text.strip() else None
        if new_attrs is None:
            return match.group(0)
        changed = True
        return f"<button{new_attrs}>{text}</button>"

    def text_element(match: re.Match) -> str:
        nonlocal changed
        tag, attrs, text, closing = match.groups()
        new_attrs = add_class(attrs, "lang-wrap") if text.strip() else None
        if new_attrs is None:
            return match.group(0)
        changed = True
        return f"<{tag}{new_attrs}>{text}{closing}"

    content = BUTTON_RE.sub(button, content)
    content = TEXT_ELEMENT_RE.sub(text_element, content)
    return content, changed


def add_import(content: str, statement: str) -> str:
    """Insert ``statement`` after the first import, or at the top."""
    match = IMPORT_RE.search(content)
    if match is None:
        return f"{statement}\n{content}"
    end = match.end(1)
    return f"{content[:end]}\n{statement}{content[end:]}"


class FrameworkAdapter(ABC):
    """Framework-specific scraping, initialisation and UI patching."""

    framework: Framework
    # Attribute carrying CSS classes in this framework's templates
    class_attr = "class"

    def initialize(self, structure: ProjectStructure) -> list[Path]:
        """Create the localization resource and stylesheet if missing.

        Returns:
            Files created
        """
        created = []
        if init_resource(structure.resource_file, SEED_TRANSLATIONS):
            created.append(structure.resource_file)
        if self.ensure_responsive_css(structure):
            created.append(structure.responsive_css_file)
        created.extend(self.initialize_framework(structure))
        return created

    @abstractmethod
    def initialize_framework(self, structure: ProjectStructure) -> list[Path]:
        """Framework-specific setup (loader modules etc.); returns files created."""

    def ensure_responsive_css(self, structure: ProjectStructure) -> bool:
        css = structure.responsive_css_file
        if css.exists():
            return False
        css.parent.mkdir(parents=True, exist_ok=True)
        css.write_text(RESPONSIVE_CSS, encoding="utf-8")
        logger.info("Created %s", css)
        return True

    def template_sources(self, structure: ProjectStructure) -> Iterable[Path]:
        """Files whose markup is scanned for phrases."""
        return structure.ui_files

    def template_text(self, content: str) -> str:
        """The part of a file that holds markup."""
        return content

    def scan(self, structure: ProjectStructure) -> ScanResult:
        """Collect candidate phrases and the current resource content.

        Source-language values already in the resource are included so
        that a run re-translates the whole known vocabulary.
        """
        result = ScanResult(ui_files=list(structure.ui_files))

        if structure.resource_file.exists():
            result.existing = load_resource(structure.resource_file)
            for keys in result.existing.get(SOURCE_LANG, {}).values():
                if isinstance(keys, dict):
                    for value in keys.values():
                        if isinstance(value, str) and value.strip():
                            result.add(value)

        for path in self.template_sources(structure):
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not analyze file %s: %s", path, e)
                continue
            for text in extract_phrases(self.template_text(content)):
                result.add(text, path)

        logger.info(
            "Found %d candidate phrases in %d files",
            len(result.phrases), len(result.ui_files),
        )
        return result

    def update_ui(self, structure: ProjectStructure) -> list[Path]:
        """Add language-responsive hooks to UI files.

        Returns:
            Files that were modified or created
        """
        changed = []
        if self.ensure_responsive_css(structure):
            changed.append(structure.responsive_css_file)
        if self.install_stylesheet(structure):
            changed.append(self.stylesheet_entry(structure))

        for path in self.template_sources(structure):
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not update file %s: %s", path, e)
                continue
            updated = self.patch_file(path, content)
            if updated != content:
                path.write_text(updated, encoding="utf-8")
                logger.info("Updated %s for language responsiveness", path.name)
                if path not in changed:
                    changed.append(path)
        return changed

    def patch_file(self, path: Path, content: str) -> str:
        updated, _ = add_class_hooks(content, self.class_attr)
        return updated

    def stylesheet_entry(self, structure: ProjectStructure) -> Path | None:
        """File that should load the responsive stylesheet, if any."""
        return None

    def install_stylesheet(self, structure: ProjectStructure) -> bool:
        """Make the stylesheet entry file load ResponsiveLanguage.css."""
        entry = self.stylesheet_entry(structure)
        if entry is None or not entry.exists():
            return False
        content = entry.read_text(encoding="utf-8")
        css_name = structure.responsive_css_file.name
        if css_name in content:
            return False
        entry.write_text(self.link_stylesheet(entry, structure, content), encoding="utf-8")
        logger.info("Added %s import to %s", css_name, entry)
        return True

    def link_stylesheet(self, entry: Path, structure: ProjectStructure, content: str) -> str:
        return content

    @staticmethod
    def relative_import(entry: Path, target: Path) -> str:
        rel = Path(os.path.relpath(target, entry.parent)).as_posix()
        return rel if rel.startswith(".") else f"./{rel}"
