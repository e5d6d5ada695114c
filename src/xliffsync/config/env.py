"""Environment variable lookups for configuration."""

from __future__ import annotations

import os
from typing import Final

PROFILE_ENV_VAR: Final[str] = "XLIFFSYNC_PROFILE"
LOG_LEVEL_ENV_VAR: Final[str] = "XLIFFSYNC_LOG_LEVEL"


def optional_env_var(name: str) -> str | None:
    """Return the stripped value of ``name``, or None when unset or blank."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def profile_from_env() -> str | None:
    return optional_env_var(PROFILE_ENV_VAR)


def log_level_from_env() -> str | None:
    return optional_env_var(LOG_LEVEL_ENV_VAR)
