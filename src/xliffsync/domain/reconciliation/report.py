"""Change counts produced by one reconciliation."""

from __future__ import annotations

from dataclasses import astuple, dataclass


@dataclass(slots=True)
class MergeReport:
    new: int = 0
    source_content_changed: int = 0
    source_ref_changed: int = 0
    description_or_meaning_changed: int = 0
    id_changed: int = 0
    removed: int = 0

    @property
    def is_noop(self) -> bool:
        """True when nothing changed and the catalog must not be rewritten."""

        return not any(astuple(self))
