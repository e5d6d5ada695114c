"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalogs import CatalogStore, TranslationExporter

__all__ = ["CatalogStore", "TranslationExporter"]
