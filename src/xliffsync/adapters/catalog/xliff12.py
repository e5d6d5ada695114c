"""XLIFF 1.2 catalogs (``xlf``), as written by Angular's ``ng extract-i18n``."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Final

from xliffsync.domain.errors import MalformedCatalogError
from xliffsync.domain.model import Catalog, CatalogFormat, Entry, SourceReference, TargetState

from .xml_support import append_content, expect_root, inner_xml, read_document, write_document

if TYPE_CHECKING:
    from pathlib import Path

NAMESPACE: Final[str] = "urn:oasis:names:tc:xliff:document:1.2"
CONTENT_TAGS: Final[frozenset[str]] = frozenset({"source", "target", "note", "context"})

_STATES: Final[dict[str, TargetState]] = {
    "new": TargetState.NEW,
    "needs-translation": TargetState.NEW,
    "needs-adaptation": TargetState.NEW,
    "needs-l10n": TargetState.NEW,
    "translated": TargetState.TRANSLATED,
    "needs-review-translation": TargetState.TRANSLATED,
    "needs-review-adaptation": TargetState.TRANSLATED,
    "needs-review-l10n": TargetState.TRANSLATED,
    "final": TargetState.FINAL,
    "signed-off": TargetState.FINAL,
}


def read_xliff12(path: Path, *, encoding: str = "UTF-8") -> Catalog:
    root = read_document(path, encoding)
    expect_root(root, "xliff", path=path, kind="XLIFF 1.2")
    version = root.get("version", "1.2")
    if not version.startswith("1."):
        raise MalformedCatalogError(f'file "{path}" is XLIFF {version}, expected XLIFF 1.2')
    file_element = root.find("file")
    if file_element is None:
        raise MalformedCatalogError(f'file "{path}" has no <file> element')

    catalog = Catalog(
        format=CatalogFormat.XLIFF_12,
        path=path,
        encoding=encoding,
        source_language=file_element.get("source-language"),
        target_language=file_element.get("target-language"),
    )
    catalog.extend(_entry_from_unit(unit) for unit in root.iter("trans-unit"))
    return catalog


def _entry_from_unit(unit: ET.Element) -> Entry:
    source = unit.find("source")
    target = unit.find("target")
    target_content = inner_xml(target) if target is not None else None
    return Entry(
        id=unit.get("id", ""),
        format=CatalogFormat.XLIFF_12,
        source=inner_xml(source) if source is not None else None,
        target=target_content,
        state=_state_of(target, target_content),
        references=_references_of(unit),
        description=_note(unit, "description"),
        meaning=_note(unit, "meaning"),
    )


def _state_of(target: ET.Element | None, content: str | None) -> TargetState:
    if target is None:
        return TargetState.NEW
    state = target.get("state")
    if state is None:
        return TargetState.TRANSLATED if content and content.strip() else TargetState.NEW
    return _STATES.get(state, TargetState.TRANSLATED)


def _references_of(unit: ET.Element) -> tuple[SourceReference, ...] | None:
    references: list[SourceReference] = []
    for group in unit.findall("context-group"):
        if group.get("purpose") != "location":
            continue
        sourcefile = None
        line = None
        for context in group.findall("context"):
            if context.get("context-type") == "sourcefile":
                sourcefile = (context.text or "").strip()
            elif context.get("context-type") == "linenumber":
                try:
                    line = int((context.text or "").strip())
                except ValueError:
                    line = None
        if sourcefile and line is not None:
            references.append(SourceReference(sourcefile=sourcefile, line=line))
    return tuple(references) or None


def _note(unit: ET.Element, kind: str) -> str | None:
    for note in unit.findall("note"):
        if note.get("from") == kind:
            return note.text or ""
    return None


def write_xliff12(catalog: Catalog, *, beautify: bool = False) -> None:
    root = ET.Element("xliff", {"version": "1.2", "xmlns": NAMESPACE})
    file_attributes = {"datatype": "plaintext", "original": "ng2.template"}
    if catalog.source_language:
        file_attributes["source-language"] = catalog.source_language
    if catalog.target_language:
        file_attributes["target-language"] = catalog.target_language
    file_element = ET.SubElement(root, "file", file_attributes)
    body = ET.SubElement(file_element, "body")
    for entry in catalog:
        body.append(_unit_element(entry))

    write_document(
        catalog.path,
        root,
        encoding=catalog.encoding,
        beautify=beautify,
        content_tags=CONTENT_TAGS,
    )


def _unit_element(entry: Entry) -> ET.Element:
    attributes = {"id": entry.id} if entry.has_id else {}
    attributes["datatype"] = "html"
    unit = ET.Element("trans-unit", attributes)

    append_content(ET.SubElement(unit, "source"), entry.source or "")
    if entry.target is not None:
        target = ET.SubElement(unit, "target", {"state": entry.state.value})
        append_content(target, entry.target)

    for reference in entry.references or ():
        group = ET.SubElement(unit, "context-group", {"purpose": "location"})
        sourcefile = ET.SubElement(group, "context", {"context-type": "sourcefile"})
        sourcefile.text = reference.sourcefile
        line = ET.SubElement(group, "context", {"context-type": "linenumber"})
        line.text = str(reference.line)

    for kind, text in (("description", entry.description), ("meaning", entry.meaning)):
        if text is not None:
            note = ET.SubElement(unit, "note", {"priority": "1", "from": kind})
            note.text = text
    return unit
