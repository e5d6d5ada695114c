"""Ordered entry container for one catalog file.

Entries keep file order. Identifiers are unique; entries without an
identifier are kept in order but are not indexed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from xliffsync.domain.messages import convert_native

from .entry import CAPABILITIES, Entry, source_markup_for

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from .entry import Capabilities
    from .enums import CatalogFormat


@dataclass(slots=True, kw_only=True)
class Catalog:
    format: CatalogFormat
    path: Path
    encoding: str = "UTF-8"
    source_language: str | None = None
    target_language: str | None = None
    warnings: list[str] = field(default_factory=list[str])

    _entries: list[Entry] = field(default_factory=list[Entry], repr=False)
    _entries_by_id: dict[str, Entry] = field(default_factory=dict[str, Entry], repr=False)

    @property
    def capabilities(self) -> Capabilities:
        return CAPABILITIES[self.format]

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(entry.id for entry in self._entries)

    @property
    def missing_id_count(self) -> int:
        return sum(1 for entry in self._entries if not entry.has_id)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        # Snapshot so callers may remove entries while iterating.
        return iter(tuple(self._entries))

    def __contains__(self, entry_id: object) -> bool:
        return isinstance(entry_id, str) and entry_id in self._entries_by_id

    def find_by_id(self, entry_id: str) -> Entry | None:
        if not entry_id:
            return None
        return self._entries_by_id.get(entry_id)

    def set_source_language(self, language: str) -> None:
        self.source_language = language

    def add(self, entry: Entry) -> bool:
        """Append ``entry``; a duplicate identifier is rejected with a warning."""

        self._check_format(entry)
        if entry.has_id and entry.id in self._entries_by_id:
            self.warnings.append(f'duplicate id "{entry.id}" in {self.path}, keeping the first')
            return False
        self._entries.append(entry)
        if entry.has_id:
            self._entries_by_id[entry.id] = entry
        return True

    def extend(self, entries: Iterable[Entry]) -> None:
        for entry in entries:
            self.add(entry)

    def remove_by_id(self, entry_id: str) -> Entry | None:
        entry = self._entries_by_id.pop(entry_id, None)
        if entry is not None:
            self._entries.remove(entry)
        return entry

    def import_entry(
        self,
        master_entry: Entry,
        *,
        preserve_order: bool = False,
        after: Entry | None = None,
    ) -> Entry:
        """Create an untranslated copy of ``master_entry`` in this catalog.

        With ``preserve_order`` the copy goes directly behind ``after`` (or to
        the front when ``after`` is None); otherwise it is appended.
        """

        if not master_entry.has_id:
            raise ValueError("cannot import an entry without id")
        if master_entry.id in self._entries_by_id:
            raise ValueError(f'id "{master_entry.id}" already exists in {self.path}')
        if source_markup_for(master_entry.format) != source_markup_for(self.format):
            raise ValueError(f"cannot import {master_entry.format} entries into {self.format}")

        capabilities = self.capabilities
        entry = Entry(id=master_entry.id, format=self.format, source=master_entry.source)
        if capabilities.references:
            entry.references = master_entry.references
        if capabilities.description_and_meaning:
            entry.description = master_entry.description
            entry.meaning = master_entry.meaning

        if not preserve_order:
            self._entries.append(entry)
        elif after is None:
            self._entries.insert(0, entry)
        else:
            self._entries.insert(self._index_of(after) + 1, entry)
        self._entries_by_id[entry.id] = entry
        return entry

    def content_from(self, master_entry: Entry) -> str | None:
        """Return the source of ``master_entry`` as target markup of this catalog."""

        if master_entry.source is None:
            return None
        return convert_native(
            master_entry.source,
            source_markup=source_markup_for(master_entry.format),
            target_markup=self.format,
        )

    def _index_of(self, entry: Entry) -> int:
        for index, candidate in enumerate(self._entries):
            if candidate is entry:
                return index
        raise ValueError(f'entry "{entry.id}" is not part of {self.path}')

    def _check_format(self, entry: Entry) -> None:
        if entry.format is not self.format:
            raise ValueError(f"{entry.format} entry cannot be stored in {self.format} catalog")
