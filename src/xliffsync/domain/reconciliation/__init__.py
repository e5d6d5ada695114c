"""Reconciliation core: merge a master catalog into language catalogs.

Layered flow per language:
1) match master entries to target entries by id
2) fall back to rename detection for unknown ids (optional)
3) update matched entries, create missing ones
4) count (and optionally drop) target entries that left the master
"""

from __future__ import annotations

from .engine import MergeEngine, reconcile
from .equivalence import content_equivalent, entries_equivalent, references_equivalent
from .policy import MergePolicy
from .report import MergeReport
from .resolve import ResolveRename, resolve_rename

__all__ = [
    "MergeEngine",
    "MergePolicy",
    "MergeReport",
    "ResolveRename",
    "content_equivalent",
    "entries_equivalent",
    "reconcile",
    "references_equivalent",
    "resolve_rename",
]
