"""Catalog file readers and writers."""

from .store import FileCatalogStore
from .xliff12 import read_xliff12, write_xliff12
from .xliff20 import read_xliff20, write_xliff20
from .xmb import read_xmb, read_xtb, write_xmb, write_xtb

__all__ = [
    "FileCatalogStore",
    "read_xliff12",
    "read_xliff20",
    "read_xmb",
    "read_xtb",
    "write_xliff12",
    "write_xliff20",
    "write_xmb",
    "write_xtb",
]
