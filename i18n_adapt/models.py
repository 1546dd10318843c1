"""
Core data models for i18n-adapt.

The pipeline moves a handful of small value types around:

- Phrase: a source-language string found in the project
- Namespace: the semantic bucket a phrase is filed under
- ScanResult: what a framework scraper hands to the pipeline
- ProjectStructure: where a project's resource and UI files live
- ExpansionReport: length comparison between sources and translations

Translated content itself is kept as plain nested dicts
(``namespace -> key -> text``) because that is also its on-disk shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


# namespace -> key -> text
NamespacedEntries = dict[str, dict[str, str]]

# language -> namespace -> key -> text
ResourceData = dict[str, NamespacedEntries]


class Namespace(str, Enum):
    """Semantic buckets for translation keys.

    Declaration order is the bucket iteration order used when phrases are
    flattened for translation.
    """
    COMMON = "common"
    NAVIGATION = "navigation"
    COMPONENTS = "components"
    MESSAGES = "messages"
    FORMS = "forms"
    ERRORS = "errors"


class Framework(str, Enum):
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"


@dataclass(frozen=True)
class Phrase:
    """A candidate source-language text fragment.

    Equality and hashing use the text only, so a set of phrases collected
    from many files is deduplicated by exact text.
    """
    text: str
    source_file: Optional[Path] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.text


@dataclass
class ProjectStructure:
    """Locations of the files a run reads and writes."""
    root: Path
    framework: Framework
    resource_file: Path
    responsive_css_file: Path
    ui_files: list[Path] = field(default_factory=list)
    resource_exists: bool = False


@dataclass
class ScanResult:
    """Output of a framework scraper.

    Attributes:
        phrases: Unique candidate phrases
        ui_files: UI source files that were scanned
        existing: Current resource content (language -> namespace -> key -> text)
    """
    phrases: set[Phrase] = field(default_factory=set)
    ui_files: list[Path] = field(default_factory=list)
    existing: ResourceData = field(default_factory=dict)

    @property
    def texts(self) -> set[str]:
        return {p.text for p in self.phrases}

    def add(self, text: str, source_file: Optional[Path] = None) -> None:
        self.phrases.add(Phrase(text, source_file))


@dataclass
class ExpansionEntry:
    source: str
    translated: str
    factor: float


@dataclass
class ExpansionReport:
    """How much longer translations are than their sources.

    Informational only: it is printed for the operator and never persisted.
    """
    language: str
    total_source_length: int = 0
    total_translated_length: int = 0
    expansion_factor: float = 1.0
    critical: list[ExpansionEntry] = field(default_factory=list)

    @property
    def has_critical(self) -> bool:
        return len(self.critical) > 0

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "total_source_length": self.total_source_length,
            "total_translated_length": self.total_translated_length,
            "expansion_factor": self.expansion_factor,
            "critical": [
                {"source": e.source, "translated": e.translated, "factor": e.factor}
                for e in self.critical
            ],
        }
