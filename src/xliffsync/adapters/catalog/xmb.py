"""XMB masters and XTB translation bundles.

XTB files store nothing but translations; the source of each entry is looked
up in the XMB master by id.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from logging import getLogger
from typing import TYPE_CHECKING, Final

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

log = getLogger(__name__)

XMB_CONTENT_TAGS: Final[frozenset[str]] = frozenset({"msg"})
XTB_CONTENT_TAGS: Final[frozenset[str]] = frozenset({"translation"})

XMB_DOCTYPE: Final[str] = """
<!DOCTYPE messagebundle [
<!ELEMENT messagebundle (msg)*>
<!ATTLIST messagebundle class CDATA #IMPLIED>
<!ELEMENT msg (#PCDATA|ph|source)*>
<!ATTLIST msg id CDATA #IMPLIED>
<!ATTLIST msg seq CDATA #IMPLIED>
<!ATTLIST msg name CDATA #IMPLIED>
<!ATTLIST msg desc CDATA #IMPLIED>
<!ATTLIST msg meaning CDATA #IMPLIED>
<!ATTLIST msg obsolete (obsolete) #IMPLIED>
<!ATTLIST msg xml:space (default|preserve) "default">
<!ATTLIST msg is_hidden CDATA #IMPLIED>
<!ELEMENT source (#PCDATA)>
<!ELEMENT ph (#PCDATA|ex)*>
<!ATTLIST ph name CDATA #REQUIRED>
<!ELEMENT ex (#PCDATA)>
]>
"""

XTB_DOCTYPE: Final[str] = """
<!DOCTYPE translationbundle [
<!ELEMENT translationbundle (translation)*>
<!ATTLIST translationbundle lang CDATA #REQUIRED>
<!ELEMENT translation (#PCDATA|ph)*>
<!ATTLIST translation id CDATA #REQUIRED>
<!ELEMENT ph EMPTY>
<!ATTLIST ph name CDATA #REQUIRED>
]>
"""


def read_xmb(path: Path, *, encoding: str = "UTF-8") -> Catalog:
    root = read_document(path, encoding)
    expect_root(root, "messagebundle", path=path, kind="XMB")

    catalog = Catalog(format=CatalogFormat.XMB, path=path, encoding=encoding)
    catalog.extend(_entry_from_msg(msg) for msg in root.iter("msg"))
    return catalog


def _entry_from_msg(msg: ET.Element) -> Entry:
    references: list[SourceReference] = [
        reference
        for source in msg.findall("source")
        if (reference := parse_location(source.text)) is not None
    ]
    return Entry(
        id=msg.get("id", ""),
        format=CatalogFormat.XMB,
        source=inner_xml(msg, skip={"source"}),
        references=tuple(references) or None,
        description=msg.get("desc"),
        meaning=msg.get("meaning"),
    )


def read_xtb(path: Path, *, encoding: str = "UTF-8", master: Catalog | None = None) -> Catalog:
    """Read an XTB file, taking entry sources from the XMB ``master``."""

    root = read_document(path, encoding)
    expect_root(root, "translationbundle", path=path, kind="XTB")

    catalog = Catalog(
        format=CatalogFormat.XTB,
        path=path,
        encoding=encoding,
        target_language=root.get("lang"),
    )
    if master is None:
        log.debug("reading %s without XMB master, entries have no source", path)
    for translation in root.iter("translation"):
        entry_id = translation.get("id", "")
        master_entry = master.find_by_id(entry_id) if master is not None else None
        content = inner_xml(translation)
        catalog.add(
            Entry(
                id=entry_id,
                format=CatalogFormat.XTB,
                source=master_entry.source if master_entry is not None else None,
                target=content,
                state=TargetState.FINAL if content.strip() else TargetState.NEW,
            )
        )
    return catalog


def write_xmb(catalog: Catalog, *, beautify: bool = False) -> None:
    root = ET.Element("messagebundle")
    for entry in catalog:
        attributes = {"id": entry.id} if entry.has_id else {}
        if entry.description is not None:
            attributes["desc"] = entry.description
        if entry.meaning is not None:
            attributes["meaning"] = entry.meaning
        msg = ET.SubElement(root, "msg", attributes)
        for reference in entry.references or ():
            ET.SubElement(msg, "source").text = reference.location
        append_content(msg, entry.source or "")

    write_document(
        catalog.path,
        root,
        encoding=catalog.encoding,
        beautify=beautify,
        content_tags=XMB_CONTENT_TAGS,
        doctype=XMB_DOCTYPE,
    )


def write_xtb(catalog: Catalog, *, beautify: bool = False) -> None:
    root = ET.Element("translationbundle", {"lang": catalog.target_language or ""})
    for entry in catalog:
        translation = ET.SubElement(root, "translation", {"id": entry.id})
        # Untranslated entries are kept with empty content so their ids persist.
        append_content(translation, entry.target or "")

    write_document(
        catalog.path,
        root,
        encoding=catalog.encoding,
        beautify=beautify,
        content_tags=XTB_CONTENT_TAGS,
        doctype=XTB_DOCTYPE,
    )
