"""Per-language merge policy."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class MergePolicy:
    """Switches controlling how one target catalog is reconciled.

    ``target_prefix``/``target_suffix`` decorate the target content of entries
    created with ``use_source_as_target`` in non-default languages.
    """

    is_default_language: bool = False
    use_source_as_target: bool = True
    allow_id_change: bool = False
    remove_unused_ids: bool = True
    preserve_order: bool = True
    target_prefix: str = ""
    target_suffix: str = ""
