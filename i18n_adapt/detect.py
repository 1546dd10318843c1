"""
Framework and project structure detection.

Given a project root, work out which UI framework it uses and where its
localization resource and UI source files live.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from i18n_adapt.config import RESOURCE_FILENAME, RESPONSIVE_CSS_FILE
from i18n_adapt.models import Framework, ProjectStructure

logger = logging.getLogger(__name__)


# Candidate resource locations, first existing one wins; the first entry
# is also where a new resource is created.
RESOURCE_CANDIDATES = {
    Framework.REACT: [
        f"src/locales/{RESOURCE_FILENAME}",
        f"src/i18n/{RESOURCE_FILENAME}",
        f"src/translations/{RESOURCE_FILENAME}",
    ],
    Framework.VUE: [
        f"src/locales/{RESOURCE_FILENAME}",
        f"src/i18n/{RESOURCE_FILENAME}",
        f"src/plugins/i18n/{RESOURCE_FILENAME}",
    ],
    Framework.ANGULAR: [
        f"src/assets/i18n/{RESOURCE_FILENAME}",
        f"src/app/i18n/{RESOURCE_FILENAME}",
        f"src/locales/{RESOURCE_FILENAME}",
    ],
}

UI_PATTERNS = {
    Framework.REACT: ["src/**/*.js", "src/**/*.jsx", "src/**/*.tsx"],
    Framework.VUE: ["src/**/*.vue"],
    Framework.ANGULAR: ["src/**/*.html", "src/**/*.ts"],
}


def _dependencies(root: Path) -> dict:
    package_json = root / "package.json"
    if not package_json.exists():
        return {}
    try:
        pkg = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read %s: %s", package_json, e)
        return {}
    deps = {}
    deps.update(pkg.get("dependencies") or {})
    deps.update(pkg.get("devDependencies") or {})
    return deps


def _any(root: Path, pattern: str) -> bool:
    return next(root.glob(pattern), None) is not None


def detect_framework(root: Path) -> Framework:
    """Detect the UI framework of the project at ``root``.

    Checks package.json dependencies, then framework config files, then
    source file extensions. Defaults to React when nothing matches.
    """
    root = Path(root)
    deps = _dependencies(root)
    if "react" in deps:
        return Framework.REACT
    if "vue" in deps:
        return Framework.VUE
    if "@angular/core" in deps:
        return Framework.ANGULAR

    if (root / "angular.json").exists():
        return Framework.ANGULAR
    if (root / "vue.config.js").exists():
        return Framework.VUE

    if _any(root, "src/**/*.vue"):
        return Framework.VUE
    if _any(root, "src/**/*.jsx"):
        return Framework.REACT
    if _any(root, "src/**/*.ts") and (root / "src" / "app").exists():
        return Framework.ANGULAR

    logger.debug("No framework markers found in %s, assuming react", root)
    return Framework.REACT


def find_ui_files(root: Path, framework: Framework) -> list[Path]:
    files: set[Path] = set()
    for pattern in UI_PATTERNS[framework]:
        files.update(p for p in root.glob(pattern) if p.is_file())
    return sorted(files)


def detect_structure(root: Path, framework: Framework) -> ProjectStructure:
    """Locate the resource file and UI files for ``framework``."""
    root = Path(root)
    candidates = [root / rel for rel in RESOURCE_CANDIDATES[framework]]
    resource_file = next((c for c in candidates if c.exists()), None)
    if resource_file is not None:
        logger.info("Found localization resource: %s", resource_file)
    else:
        resource_file = candidates[0]
        logger.info("No localization resource found. Will create: %s", resource_file)

    ui_files = find_ui_files(root, framework)
    logger.info("Found %d UI files to analyze", len(ui_files))

    return ProjectStructure(
        root=root,
        framework=framework,
        resource_file=resource_file,
        responsive_css_file=root / RESPONSIVE_CSS_FILE,
        ui_files=ui_files,
        resource_exists=resource_file.exists(),
    )
