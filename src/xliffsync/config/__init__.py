"""Application configuration helpers."""

from __future__ import annotations

from xliffsync.common.logging import configure_logging, level_from_name

from .env import LOG_LEVEL_ENV_VAR, PROFILE_ENV_VAR, log_level_from_env, profile_from_env
from .errors import ConfigurationError, ProfileError
from .parameters import (
    CommandOptions,
    MergeParameters,
    is_valid_extraction_pattern,
    is_valid_language,
)
from .profile import MergeOptions, ProfileFile, load_profile

__all__ = [
    "LOG_LEVEL_ENV_VAR",
    "PROFILE_ENV_VAR",
    "CommandOptions",
    "ConfigurationError",
    "MergeOptions",
    "MergeParameters",
    "ProfileError",
    "ProfileFile",
    "configure_logging",
    "is_valid_extraction_pattern",
    "is_valid_language",
    "level_from_name",
    "load_profile",
    "log_level_from_env",
    "profile_from_env",
]
