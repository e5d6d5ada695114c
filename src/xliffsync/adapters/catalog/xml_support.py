"""Shared ElementTree helpers for catalog files.

Namespaces are stripped on read so that content fragments serialize without
``ns0:`` prefixes; writers declare the namespace again on the root element.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from xliffsync.domain.errors import CatalogNotFoundError, MalformedCatalogError
from xliffsync.domain.model import SourceReference

if TYPE_CHECKING:
    from collections.abc import Collection
    from pathlib import Path

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def read_document(path: Path, encoding: str) -> ET.Element:
    try:
        text = path.read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise CatalogNotFoundError(f'file "{path}" not found') from exc
    except (UnicodeDecodeError, LookupError) as exc:
        raise MalformedCatalogError(f'file "{path}" cannot be read as {encoding}: {exc}') from exc

    text = _XML_DECLARATION.sub("", text.removeprefix("\ufeff"), count=1)
    try:
        root = ET.fromstring(text)  # noqa: S314
    except ET.ParseError as exc:
        raise MalformedCatalogError(f'file "{path}" is not well-formed XML: {exc}') from exc
    _strip_namespaces(root)
    return root


def expect_root(root: ET.Element, tag: str, *, path: Path, kind: str) -> None:
    if root.tag != tag:
        raise MalformedCatalogError(
            f'file "{path}" is not a {kind} file (root element <{root.tag}>, expected <{tag}>)'
        )


def _strip_namespaces(root: ET.Element) -> None:
    for element in root.iter():
        if element.tag.startswith("{"):
            element.tag = element.tag.split("}", 1)[1]


def inner_xml(element: ET.Element, *, skip: Collection[str] = ()) -> str:
    """Serialize the mixed content of ``element`` (children listed in ``skip`` dropped)."""

    chunks = [escape(element.text or "")]
    for child in element:
        if child.tag in skip:
            chunks.append(escape(child.tail or ""))
            continue
        # tostring includes the tail
        chunks.append(ET.tostring(child, encoding="unicode"))
    return "".join(chunks)


def append_content(element: ET.Element, native: str) -> None:
    """Append native markup to the mixed content of ``element``."""

    try:
        fragment = ET.fromstring(f"<fragment>{native}</fragment>")  # noqa: S314
    except ET.ParseError as exc:
        raise MalformedCatalogError(f"invalid message markup {native!r}: {exc}") from exc

    if fragment.text:
        if len(element):
            last = element[-1]
            last.tail = (last.tail or "") + fragment.text
        else:
            element.text = (element.text or "") + fragment.text
    element.extend(list(fragment))


def parse_location(text: str | None) -> SourceReference | None:
    """Parse ``file:line`` (or ``file:line,endline``) location notes."""

    if not text:
        return None
    sourcefile, separator, lines = text.strip().rpartition(":")
    if not separator or not sourcefile:
        return None
    first, _, last = lines.partition(",")
    try:
        line = int(first)
        end_line = int(last) if last.strip() else None
    except ValueError:
        return None
    return SourceReference(sourcefile=sourcefile, line=line, end_line=end_line)


def indent(root: ET.Element, *, content_tags: Collection[str], space: str = "  ") -> None:
    """Put structural elements on their own lines.

    Elements in ``content_tags`` hold translatable mixed content; their
    whitespace is never touched.
    """

    def _indent(element: ET.Element, level: int) -> None:
        if element.tag in content_tags or not len(element):
            return
        child_indent = "\n" + space * (level + 1)
        if not element.text or not element.text.strip():
            element.text = child_indent
        for child in element:
            _indent(child, level + 1)
            if not child.tail or not child.tail.strip():
                child.tail = child_indent
        last = element[-1]
        if not last.tail or not last.tail.strip():
            last.tail = "\n" + space * level

    _indent(root, 0)


def write_document(
    path: Path,
    root: ET.Element,
    *,
    encoding: str,
    beautify: bool,
    content_tags: Collection[str],
    doctype: str | None = None,
) -> None:
    indent(root, content_tags=content_tags, space="  " if beautify else "")
    chunks = [f'<?xml version="1.0" encoding="{encoding}"?>\n']
    if doctype:
        chunks.append(doctype.strip() + "\n")
    chunks.append(ET.tostring(root, encoding="unicode"))
    chunks.append("\n")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(chunks), encoding=encoding, errors="xmlcharrefreplace")
