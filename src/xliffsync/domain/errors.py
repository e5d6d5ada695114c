"""Error taxonomy shared by the merge workflow.

Classified errors derive from ``XliffSyncError`` and carry an ``ErrorKind``.
They are reported without a stack trace and turned into a nonzero status.
Everything else is unclassified and propagates.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    CONFIG = "config"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    UNEXPECTED = "unexpected"


class XliffSyncError(RuntimeError):
    """Base class for expected, user-facing failures."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


class CatalogNotFoundError(XliffSyncError):
    """Raised when a catalog file does not exist."""

    kind = ErrorKind.NOT_FOUND


class MalformedCatalogError(XliffSyncError):
    """Raised when a catalog file cannot be decoded or parsed."""

    kind = ErrorKind.MALFORMED


class UnsupportedFieldError(RuntimeError):
    """Raised when writing a field the catalog format cannot store."""
