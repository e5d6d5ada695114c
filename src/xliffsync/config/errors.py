"""Configuration error definitions."""

from __future__ import annotations

from xliffsync.domain.errors import ErrorKind, XliffSyncError


class ConfigurationError(XliffSyncError):
    """Raised when configuration values are invalid."""

    kind = ErrorKind.CONFIG


class ProfileError(ConfigurationError):
    """Raised when the profile file is missing, unreadable or not valid."""
