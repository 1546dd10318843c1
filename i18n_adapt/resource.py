"""
Localization resource storage and merging.

The resource is a JSON document holding every language the project has::

    {
      "en": {"common": {"loading": "Loading"}},
      "es": {"common": {"loading": "Cargando"}}
    }

A translation run moves through these states::

    NotFound -> Loaded -> Merged -> BackedUp -> Persisted

``Failed`` is reachable from Loaded (unparsable resource) and from the
Persisted attempt (write error). Before every write the previous file is
copied byte-for-byte to ``<name>.backup-<epoch millis>``. A failed write
leaves that backup in place and is not rolled back automatically: the
operator restores from the backup.

The file is assumed to have a single writer per invocation. No locking is
done, so another process editing it during a run may lose its changes.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

from i18n_adapt.errors import (
    MergeConflictError,
    ResourceFormatError,
    ResourceNotFoundError,
    ResourceWriteError,
)
from i18n_adapt.models import NamespacedEntries, ResourceData

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class MergePolicy(str, Enum):
    """How new entries combine with a language's existing content."""
    FORCE = "force"
    INCREMENTAL = "incremental"

    @classmethod
    def from_flag(cls, force: bool) -> "MergePolicy":
        return cls.FORCE if force else cls.INCREMENTAL


class RunState(str, Enum):
    NOT_FOUND = "NotFound"
    LOADED = "Loaded"
    MERGED = "Merged"
    BACKED_UP = "BackedUp"
    PERSISTED = "Persisted"
    FAILED = "Failed"


@dataclass
class MergeOutcome:
    """Summary of one merge-and-persist call."""
    path: Path
    language: str
    policy: MergePolicy
    backup_path: Optional[Path] = None
    added: int = 0
    updated: int = 0
    removed: int = 0
    created: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.removed)


# ============================================================================
# Reading and writing
# ============================================================================

def serialize_resource(data: Mapping) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def parse_resource(text: str, path: PathLike = "<resource>") -> ResourceData:
    """Parse resource text and check its top two levels.

    Raises:
        ResourceFormatError: Not JSON, or not ``{language: {...}}``
    """
    try:
        data = json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as e:
        raise ResourceFormatError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ResourceFormatError(f"{path} must contain a JSON object of languages")
    for language, content in data.items():
        if not isinstance(content, dict):
            raise ResourceFormatError(
                f"{path}: language '{language}' must map to an object of namespaces"
            )
    return data


def load_resource(path: PathLike) -> ResourceData:
    """Read the resource at ``path``.

    Raises:
        ResourceNotFoundError: The file does not exist
        ResourceFormatError: The file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise ResourceNotFoundError(f"Localization resource not found: {path}")
    return parse_resource(path.read_text(encoding="utf-8"), path)


def backup_path_for(path: Path, now: Optional[float] = None) -> Path:
    millis = int((time.time() if now is None else now) * 1000)
    candidate = path.with_name(f"{path.name}.backup-{millis}")
    suffix = 1
    while candidate.exists():
        candidate = path.with_name(f"{path.name}.backup-{millis}-{suffix}")
        suffix += 1
    return candidate


def create_backup(path: PathLike, now: Optional[float] = None) -> Path:
    """Copy ``path`` byte-for-byte to a timestamped backup next to it.

    Raises:
        ResourceWriteError: The copy failed; nothing else was touched
    """
    path = Path(path)
    target = backup_path_for(path, now)
    try:
        shutil.copyfile(path, target)
    except OSError as e:
        raise ResourceWriteError(
            f"Could not back up {path} ({e}); resource left unchanged"
        ) from e
    logger.info("Backed up %s to %s", path, target.name)
    return target


def write_atomic(path: PathLike, text: str) -> None:
    """Replace ``path`` with ``text`` in a single rename.

    The content is written to a temporary file in the same directory, then
    moved over the target, so readers see either the old or the new file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


# ============================================================================
# Merging
# ============================================================================

def _check_entries(entries: Mapping, origin: str) -> None:
    for namespace, keys in entries.items():
        if not isinstance(keys, dict):
            raise MergeConflictError(
                f"{origin} namespace '{namespace}' is a {type(keys).__name__}, expected an object"
            )
        for key, value in keys.items():
            if not isinstance(value, str):
                raise MergeConflictError(
                    f"{origin} value {namespace}.{key} is a {type(value).__name__}, expected a string"
                )


def merge_entries(
    existing: Optional[Mapping],
    new_entries: Mapping,
    policy: MergePolicy = MergePolicy.INCREMENTAL,
) -> NamespacedEntries:
    """Combine one language's existing content with new entries.

    - No existing content: the new entries become the content
    - FORCE: the new entries replace the content wholesale
    - INCREMENTAL: each new namespace is shallow-merged into the existing
      one; keys and namespaces absent from ``new_entries`` are kept

    Neither argument is modified.

    Raises:
        MergeConflictError: A namespace is not an object or a value is not
            a string, on either side
    """
    _check_entries(new_entries, "New")
    if existing is None or MergePolicy(policy) is MergePolicy.FORCE:
        return copy.deepcopy(dict(new_entries))

    _check_entries(existing, "Existing")
    merged = copy.deepcopy(dict(existing))
    for namespace, keys in new_entries.items():
        merged.setdefault(namespace, {}).update(keys)
    return merged


def count_changes(before: Mapping, after: Mapping) -> tuple[int, int, int]:
    """Return (added, updated, removed) key counts between two contents."""
    added = updated = removed = 0
    for namespace in set(before) | set(after):
        old = before.get(namespace)
        new = after.get(namespace)
        old = old if isinstance(old, dict) else {}
        new = new if isinstance(new, dict) else {}
        for key in set(old) | set(new):
            if key not in old:
                added += 1
            elif key not in new:
                removed += 1
            elif old[key] != new[key]:
                updated += 1
    return added, updated, removed


def merge_and_persist(
    path: PathLike,
    language: str,
    new_entries: Mapping,
    policy: MergePolicy = MergePolicy.INCREMENTAL,
    *,
    create: bool = False,
    source_language: Optional[str] = None,
    source_entries: Optional[Mapping] = None,
    now: Optional[float] = None,
) -> MergeOutcome:
    """Merge new entries for ``language`` into the resource and write it.

    Args:
        path: Resource file
        language: Language code whose content is updated
        new_entries: namespace -> key -> text
        policy: FORCE or INCREMENTAL
        create: Create the file when missing instead of failing
        source_language: Language of the source phrases (e.g. "en")
        source_entries: Source-language entries to merge incrementally in
            the same write, so keys resolve in the fallback language too
        now: Timestamp for the backup name (defaults to the current time)

    Raises:
        ResourceNotFoundError: The file is missing and ``create`` is False
        ResourceFormatError: The existing file cannot be parsed
        MergeConflictError: Incompatible types between old and new content
        ResourceWriteError: Backup or write failed
    """
    path = Path(path)
    policy = MergePolicy(policy)
    outcome = MergeOutcome(path=path, language=language, policy=policy)

    state = RunState.NOT_FOUND
    if path.exists():
        data = load_resource(path)
        state = RunState.LOADED
    elif create:
        data = {}
        outcome.created = True
    else:
        raise ResourceNotFoundError(
            f"Localization resource not found: {path}. Run with --init-only first."
        )
    logger.debug("%s: %s", path, state.value)

    existing = data.get(language)
    merged = merge_entries(existing, new_entries, policy)
    outcome.added, outcome.updated, outcome.removed = count_changes(existing or {}, merged)

    updated_data = dict(data)
    updated_data[language] = merged
    if source_entries and source_language and source_language != language:
        updated_data[source_language] = merge_entries(
            data.get(source_language), source_entries, MergePolicy.INCREMENTAL
        )
    text = serialize_resource(updated_data)
    state = RunState.MERGED
    logger.debug("%s: %s (%s)", path, state.value, policy.value)

    if not outcome.created:
        outcome.backup_path = create_backup(path, now)
        state = RunState.BACKED_UP
        logger.debug("%s: %s", path, state.value)

    try:
        write_atomic(path, text)
    except OSError as e:
        logger.debug("%s: %s", path, RunState.FAILED.value)
        raise ResourceWriteError(f"Could not write {path}: {e}", outcome.backup_path) from e

    logger.debug("%s: %s", path, RunState.PERSISTED.value)
    logger.info(
        "Updated %s translations in %s (+%d ~%d -%d)",
        language, path, outcome.added, outcome.updated, outcome.removed,
    )
    return outcome


def init_resource(path: PathLike, seed: Mapping) -> bool:
    """Create the resource with ``seed`` content if it does not exist.

    Returns:
        True if the file was created, False if it already existed
    """
    path = Path(path)
    if path.exists():
        logger.info("Localization resource already exists: %s", path)
        return False
    write_atomic(path, serialize_resource(seed))
    logger.info("Created localization resource at %s", path)
    return True
