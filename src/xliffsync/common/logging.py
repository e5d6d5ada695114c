"""Root logger setup for the command line."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Install one stderr handler on the root logger.

    ``force=True`` replaces handlers installed earlier, as the CLI does once
    per run.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )


def level_from_name(name: str | None, *, default: int = logging.INFO) -> int:
    """Translate ``"debug"``/``"WARNING"``/``"10"`` into a logging level."""

    if not name or not name.strip():
        return default
    value = name.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelNamesMapping().get(value.upper())
    return default if level is None else level
