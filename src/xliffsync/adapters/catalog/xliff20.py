"""XLIFF 2.0 catalogs (``xlf2``)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Final

from xliffsync.domain.errors import MalformedCatalogError
from xliffsync.domain.model import Catalog, CatalogFormat, Entry, TargetState

from .xml_support import (
    append_content,
    expect_root,
    inner_xml,
    parse_location,
    read_document,
    write_document,
)

if TYPE_CHECKING:
    from pathlib import Path

    from xliffsync.domain.model import SourceReference

NAMESPACE: Final[str] = "urn:oasis:names:tc:xliff:document:2.0"
CONTENT_TAGS: Final[frozenset[str]] = frozenset({"source", "target", "note"})

_READ_STATES: Final[dict[str, TargetState]] = {
    "initial": TargetState.NEW,
    "translated": TargetState.TRANSLATED,
    "reviewed": TargetState.FINAL,
    "final": TargetState.FINAL,
}
_WRITE_STATES: Final[dict[TargetState, str]] = {
    TargetState.NEW: "initial",
    TargetState.TRANSLATED: "translated",
    TargetState.FINAL: "final",
}


def read_xliff20(path: Path, *, encoding: str = "UTF-8") -> Catalog:
    root = read_document(path, encoding)
    expect_root(root, "xliff", path=path, kind="XLIFF 2.0")
    version = root.get("version", "2.0")
    if not version.startswith("2."):
        raise MalformedCatalogError(f'file "{path}" is XLIFF {version}, expected XLIFF 2.0')

    catalog = Catalog(
        format=CatalogFormat.XLIFF_20,
        path=path,
        encoding=encoding,
        source_language=root.get("srcLang"),
        target_language=root.get("trgLang"),
    )
    catalog.extend(_entry_from_unit(unit) for unit in root.iter("unit"))
    return catalog


def _entry_from_unit(unit: ET.Element) -> Entry:
    segment = unit.find("segment")
    source = segment.find("source") if segment is not None else None
    target = segment.find("target") if segment is not None else None
    target_content = inner_xml(target) if target is not None else None

    description = None
    meaning = None
    references: list[SourceReference] = []
    for note in unit.iterfind("notes/note"):
        category = note.get("category")
        if category == "description":
            description = note.text or ""
        elif category == "meaning":
            meaning = note.text or ""
        elif category == "location" and (reference := parse_location(note.text)) is not None:
            references.append(reference)

    return Entry(
        id=unit.get("id", ""),
        format=CatalogFormat.XLIFF_20,
        source=inner_xml(source) if source is not None else None,
        target=target_content,
        state=_state_of(segment, target_content),
        references=tuple(references) or None,
        description=description,
        meaning=meaning,
    )


def _state_of(segment: ET.Element | None, content: str | None) -> TargetState:
    state = segment.get("state") if segment is not None else None
    if state is None:
        return TargetState.TRANSLATED if content and content.strip() else TargetState.NEW
    return _READ_STATES.get(state, TargetState.TRANSLATED)


def write_xliff20(catalog: Catalog, *, beautify: bool = False) -> None:
    attributes = {"version": "2.0", "xmlns": NAMESPACE}
    if catalog.source_language:
        attributes["srcLang"] = catalog.source_language
    if catalog.target_language:
        attributes["trgLang"] = catalog.target_language
    root = ET.Element("xliff", attributes)
    file_element = ET.SubElement(root, "file", {"original": "ng.template", "id": "ngi18n"})
    for entry in catalog:
        file_element.append(_unit_element(entry))

    write_document(
        catalog.path,
        root,
        encoding=catalog.encoding,
        beautify=beautify,
        content_tags=CONTENT_TAGS,
    )


def _unit_element(entry: Entry) -> ET.Element:
    unit = ET.Element("unit", {"id": entry.id} if entry.has_id else {})

    notes = [
        (category, text)
        for category, text in (("description", entry.description), ("meaning", entry.meaning))
        if text is not None
    ]
    notes.extend(("location", reference.location) for reference in entry.references or ())
    if notes:
        notes_element = ET.SubElement(unit, "notes")
        for category, text in notes:
            note = ET.SubElement(notes_element, "note", {"category": category})
            note.text = text

    segment_attributes = {"state": _WRITE_STATES[entry.state]} if entry.target is not None else {}
    segment = ET.SubElement(unit, "segment", segment_attributes)
    append_content(ET.SubElement(segment, "source"), entry.source or "")
    if entry.target is not None:
        append_content(ET.SubElement(segment, "target"), entry.target)
    return unit
