"""Rename detection for master entries whose id is unknown to a target.

Matching policy: the first target entry (in catalog order) whose source
content is equivalent to the master entry's source wins. There is no scoring
between several equivalent candidates.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

from .equivalence import content_equivalent

if TYPE_CHECKING:
    from xliffsync.domain.model import Catalog, Entry


ResolveRename: TypeAlias = "Callable[[Entry, Catalog], Entry | None]"


def resolve_rename(master_entry: Entry, target: Catalog) -> Entry | None:
    """Return the target entry ``master_entry`` was probably renamed from."""

    master_source = master_entry.normalized_source()
    for candidate in target:
        if content_equivalent(candidate.normalized_source(), master_source):
            return candidate
    return None
