"""Filesystem-backed catalog store dispatching on catalog format."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeAlias

from xliffsync.domain.model import Catalog, CatalogFormat

from .xliff12 import read_xliff12, write_xliff12
from .xliff20 import read_xliff20, write_xliff20
from .xmb import read_xmb, read_xtb, write_xmb, write_xtb

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

log = getLogger(__name__)

CatalogWriter: TypeAlias = "Callable[..., None]"

_WRITERS: dict[CatalogFormat, CatalogWriter] = {
    CatalogFormat.XLIFF_12: write_xliff12,
    CatalogFormat.XLIFF_20: write_xliff20,
    CatalogFormat.XMB: write_xmb,
    CatalogFormat.XTB: write_xtb,
}


@dataclass(slots=True)
class FileCatalogStore:
    """Load, create and save catalog files.

    XMB masters read while loading XTB files are cached by path.
    """

    _masters: dict[Path, Catalog] = field(default_factory=dict, repr=False)

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def load(
        self,
        catalog_format: CatalogFormat,
        path: Path,
        *,
        encoding: str = "UTF-8",
        master_path: Path | None = None,
    ) -> Catalog:
        log.debug("loading %s catalog %s", catalog_format, path)
        match catalog_format:
            case CatalogFormat.XLIFF_12:
                return read_xliff12(path, encoding=encoding)
            case CatalogFormat.XLIFF_20:
                return read_xliff20(path, encoding=encoding)
            case CatalogFormat.XMB:
                return read_xmb(path, encoding=encoding)
            case CatalogFormat.XTB:
                master = self._master(master_path, encoding) if master_path else None
                return read_xtb(path, encoding=encoding, master=master)

    def create(
        self,
        catalog_format: CatalogFormat,
        path: Path,
        *,
        encoding: str = "UTF-8",
        source_language: str | None = None,
        target_language: str | None = None,
        master_path: Path | None = None,
    ) -> Catalog:
        """Return an empty in-memory catalog; nothing is written until ``save``.

        Entries of a new XTB catalog get their source when imported from the
        master, so ``master_path`` is only needed by ``load``.
        """

        del master_path

        return Catalog(
            format=catalog_format,
            path=path,
            encoding=encoding,
            source_language=None if catalog_format is CatalogFormat.XTB else source_language,
            target_language=None if catalog_format is CatalogFormat.XMB else target_language,
        )

    def save(self, catalog: Catalog, *, beautify: bool = False) -> None:
        log.debug("writing %s catalog %s", catalog.format, catalog.path)
        _WRITERS[catalog.format](catalog, beautify=beautify)
        self._masters.pop(catalog.path, None)

    def _master(self, path: Path, encoding: str) -> Catalog:
        master = self._masters.get(path)
        if master is None:
            master = read_xmb(path, encoding=encoding)
            self._masters[path] = master
        return master
