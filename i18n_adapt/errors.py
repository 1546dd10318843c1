"""
Exception taxonomy for i18n-adapt.

Every error raised by the translation pipeline derives from
:class:`I18nAdaptError` so that the CLI can present it and exit with a
failure status. None of these are caught inside the pipeline: a failed
batch, a malformed provider payload or a merge problem always reaches the
caller instead of producing a partial result.
"""

from __future__ import annotations

from typing import Optional


class I18nAdaptError(Exception):
    """Base class for all i18n-adapt errors."""


class ProviderError(I18nAdaptError):
    """The translation provider call failed or returned no usable payload."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        if status is not None:
            message = f"{message} (status {status})"
        super().__init__(message)


class ProviderFormatError(ProviderError):
    """The provider answered, but the payload could not be parsed into
    exactly one translation per input phrase."""


class UnsupportedProviderError(I18nAdaptError):
    """A provider was selected that has no implementation."""


class AlignmentError(I18nAdaptError):
    """Translations returned do not line up with the phrases sent."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Translation count mismatch: sent {expected} phrases, received {actual}"
        )


class ResourceNotFoundError(I18nAdaptError):
    """The localization resource is missing where an update was expected."""


class ResourceFormatError(I18nAdaptError):
    """The localization resource exists but is not a valid document."""


class MergeConflictError(I18nAdaptError):
    """Existing and new entries have incompatible types."""


class TranslationCancelledError(I18nAdaptError):
    """The caller cancelled the run before the next batch started."""


class UnsupportedFrameworkError(I18nAdaptError):
    """No adapter exists for the detected framework."""


class ResourceWriteError(I18nAdaptError):
    """Backing up or writing the localization resource failed.

    ``backup_path`` is set when a backup was taken before the failure; the
    resource is not rolled back automatically, the operator restores it
    from that file.
    """

    def __init__(self, message: str, backup_path=None):
        self.backup_path = backup_path
        if backup_path is not None:
            message = f"{message}. Previous version saved at {backup_path}"
        super().__init__(message)
