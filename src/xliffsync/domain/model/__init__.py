"""Catalog domain model."""

from __future__ import annotations

from .catalog import Catalog
from .entry import (
    CAPABILITIES,
    Capabilities,
    Entry,
    SourceReference,
    source_markup_for,
)
from .enums import CatalogFormat, TargetState, target_format_for

__all__ = [
    "CAPABILITIES",
    "Capabilities",
    "Catalog",
    "CatalogFormat",
    "Entry",
    "SourceReference",
    "TargetState",
    "source_markup_for",
    "target_format_for",
]
