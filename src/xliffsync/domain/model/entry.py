"""Translatable entries and per-format capability descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from xliffsync.domain.errors import UnsupportedFieldError
from xliffsync.domain.messages import parse_native

from .enums import CatalogFormat, TargetState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from xliffsync.domain.messages import ParsedMessage


@dataclass(frozen=True, slots=True)
class SourceReference:
    """Location of a message in the application source."""

    sourcefile: str
    line: int
    end_line: int | None = None

    @property
    def key(self) -> str:
        """``file:line``, the identity used when comparing reference sets."""
        return f"{self.sourcefile}:{self.line}"

    @property
    def location(self) -> str:
        """``file:line`` or ``file:line,endline`` as written to location notes."""
        if self.end_line is None:
            return self.key
        return f"{self.key},{self.end_line}"


@dataclass(frozen=True, slots=True)
class Capabilities:
    """Which entry fields a catalog format can store."""

    target: bool
    source: bool
    references: bool
    description_and_meaning: bool


CAPABILITIES: Final[dict[CatalogFormat, Capabilities]] = {
    CatalogFormat.XLIFF_12: Capabilities(
        target=True, source=True, references=True, description_and_meaning=True
    ),
    CatalogFormat.XLIFF_20: Capabilities(
        target=True, source=True, references=True, description_and_meaning=True
    ),
    CatalogFormat.XMB: Capabilities(
        target=False, source=True, references=True, description_and_meaning=True
    ),
    CatalogFormat.XTB: Capabilities(
        target=True, source=False, references=False, description_and_meaning=False
    ),
}


def source_markup_for(catalog_format: CatalogFormat) -> CatalogFormat:
    """XTB files have no source; their entries carry the master's XMB source."""

    if catalog_format is CatalogFormat.XTB:
        return CatalogFormat.XMB
    return catalog_format


def references_from(
    values: Iterable[SourceReference] | None,
) -> tuple[SourceReference, ...] | None:
    if values is None:
        return None
    return tuple(values)


@dataclass(eq=False, kw_only=True)
class Entry:
    """One translatable unit.

    Content fields hold native markup of the entry's format. The normalized
    view is parsed lazily and cached until the content changes.
    """

    id: str
    format: CatalogFormat
    source: str | None = None
    target: str | None = None
    state: TargetState = TargetState.NEW
    references: tuple[SourceReference, ...] | None = None
    description: str | None = None
    meaning: str | None = None

    _normalized_source: ParsedMessage | None = field(default=None, init=False, repr=False)
    _normalized_target: ParsedMessage | None = field(default=None, init=False, repr=False)

    @property
    def capabilities(self) -> Capabilities:
        return CAPABILITIES[self.format]

    @property
    def has_id(self) -> bool:
        return bool(self.id)

    @property
    def is_translated(self) -> bool:
        return bool(self.target)

    def normalized_source(self) -> ParsedMessage | None:
        if self._normalized_source is None:
            self._normalized_source = parse_native(self.source, source_markup_for(self.format))
        return self._normalized_source

    def normalized_target(self) -> ParsedMessage | None:
        if self._normalized_target is None:
            self._normalized_target = parse_native(self.target, self.format)
        return self._normalized_target

    def set_source(self, content: str | None) -> None:
        self._require(self.capabilities.source, "source content")
        self.source = content
        self._normalized_source = None

    def translate(self, content: str | None) -> None:
        self._require(self.capabilities.target, "target content")
        self.target = content
        self._normalized_target = None

    def set_state(self, state: TargetState) -> None:
        self._require(self.capabilities.target, "target state")
        self.state = state

    def set_references(self, references: Iterable[SourceReference] | None) -> None:
        self._require(self.capabilities.references, "source references")
        self.references = references_from(references)

    def set_description(self, description: str | None) -> None:
        self._require(self.capabilities.description_and_meaning, "description")
        self.description = description

    def set_meaning(self, meaning: str | None) -> None:
        self._require(self.capabilities.description_and_meaning, "meaning")
        self.meaning = meaning

    def _require(self, supported: bool, field_name: str) -> None:
        if not supported:
            raise UnsupportedFieldError(f"{self.format} entries cannot store {field_name}")
