"""Ports for reading, writing and exporting catalogs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from xliffsync.domain.model import Catalog, CatalogFormat


@runtime_checkable
class CatalogStore(Protocol):
    """Catalog persistence used by the merge run."""

    def exists(self, path: Path) -> bool: ...

    def load(
        self,
        catalog_format: CatalogFormat,
        path: Path,
        *,
        encoding: str = "UTF-8",
        master_path: Path | None = None,
    ) -> Catalog: ...

    def create(
        self,
        catalog_format: CatalogFormat,
        path: Path,
        *,
        encoding: str = "UTF-8",
        source_language: str | None = None,
        target_language: str | None = None,
        master_path: Path | None = None,
    ) -> Catalog: ...

    def save(self, catalog: Catalog, *, beautify: bool = False) -> None: ...


@runtime_checkable
class TranslationExporter(Protocol):
    """Writes a key-to-text dictionary derived from a finished catalog."""

    def __call__(self, catalog: Catalog, *, pattern: str, output: Path) -> int: ...


__all__ = ["CatalogStore", "TranslationExporter"]
