from __future__ import annotations

from .logging import configure_logging, level_from_name

__all__ = ["configure_logging", "level_from_name"]
