"""Parse native catalog markup into normalized messages.

Each catalog format encodes placeholders differently; this module maps them
onto the shared part model. Angular placeholder names (``INTERPOLATION_1``,
``START_BOLD_TEXT``, ``ICU``) drive the classification.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING

from xliffsync.domain.errors import MalformedCatalogError

from .icu import build_message
from .parts import (
    EmptyTag,
    IcuMessageRef,
    Placeholder,
    TagEnd,
    TagStart,
    TextPart,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from xliffsync.domain.model.enums import CatalogFormat

    from .parts import ParsedMessage, Part

_INDEX_SUFFIX = re.compile(r"(?P<base>.+?)_(?P<index>\d+)")
_HEADING = re.compile(r"HEADING_LEVEL(?P<level>\d)")

_TAG_NAMES: dict[str, str] = {
    "BOLD_TEXT": "b",
    "EMPHASISED_TEXT": "em",
    "ITALIC_TEXT": "i",
    "LINK": "a",
    "PARAGRAPH": "p",
    "UNDERLINED_TEXT": "u",
    "STRIKETHROUGH_TEXT": "s",
    "SMALL_TEXT": "small",
    "STRONG_TEXT": "strong",
    "BLOCK_QUOTE": "blockquote",
    "ORDERED_LIST": "ol",
    "UNORDERED_LIST": "ul",
    "LIST_ITEM": "li",
    "TABLE": "table",
    "TABLE_ROW": "tr",
    "TABLE_CELL": "td",
    "TABLE_HEADER_CELL": "th",
    "TABLE_BODY": "tbody",
    "TABLE_HEADER": "thead",
    "TABLE_FOOTER": "tfoot",
}

_EMPTY_TAG_NAMES: dict[str, str] = {
    "LINE_BREAK": "br",
    "HORIZONTAL_RULE": "hr",
}


def _split_index(name: str) -> tuple[str, int | None]:
    match = _INDEX_SUFFIX.fullmatch(name)
    if match is None:
        return name, None
    return match.group("base"), int(match.group("index"))


def _tag_name(base: str) -> str:
    if base.startswith("TAG_"):
        return base[4:].lower()
    heading = _HEADING.fullmatch(base)
    if heading is not None:
        return f"h{heading.group('level')}"
    return _TAG_NAMES.get(base, base.lower())


def part_for_name(name: str, display: str | None = None) -> Part:
    """Classify a placeholder by its Angular placeholder name."""

    base, index = _split_index(name)
    if base == "INTERPOLATION":
        return Placeholder(name=name, index=index or 0, display_text=display)
    if base == "ICU":
        return IcuMessageRef(name=name, index=index or 0, display_text=display)
    if base.startswith("START_"):
        return TagStart(name=name, tag=_tag_name(base.removeprefix("START_")))
    if base.startswith("CLOSE_"):
        return TagEnd(name=name, tag=_tag_name(base.removeprefix("CLOSE_")))
    if base in _EMPTY_TAG_NAMES:
        return EmptyTag(name=name, tag=_EMPTY_TAG_NAMES[base])
    if base.startswith("TAG_"):
        return EmptyTag(name=name, tag=_tag_name(base))
    return Placeholder(name=name, display_text=display)


def _with_tail(element: ET.Element, parts: Iterator[Part]) -> Iterator[Part]:
    yield from parts
    if element.tail:
        yield TextPart(element.tail)


def _xliff12_tokens(element: ET.Element) -> Iterator[Part]:
    if element.text:
        yield TextPart(element.text)
    for child in element:
        if child.tag == "x":
            tokens = iter((part_for_name(child.get("id", ""), child.get("equiv-text")),))
        else:
            tokens = _xliff12_tokens(child)
        yield from _with_tail(child, tokens)


def _xliff20_tokens(element: ET.Element) -> Iterator[Part]:
    if element.text:
        yield TextPart(element.text)
    for child in element:
        if child.tag == "ph":
            tokens = iter((part_for_name(child.get("equiv", ""), child.get("disp")),))
        elif child.tag == "pc":
            tokens = _paired_code_tokens(child)
        else:
            tokens = _xliff20_tokens(child)
        yield from _with_tail(child, tokens)


def _paired_code_tokens(element: ET.Element) -> Iterator[Part]:
    yield part_for_name(element.get("equivStart", ""), element.get("dispStart"))
    yield from _xliff20_tokens(element)
    yield part_for_name(element.get("equivEnd", ""), element.get("dispEnd"))


def _xmb_tokens(element: ET.Element) -> Iterator[Part]:
    if element.text:
        yield TextPart(element.text)
    for child in element:
        if child.tag == "ph":
            example = child.findtext("ex")
            tokens = iter((part_for_name(child.get("name", ""), example),))
        elif child.tag == "source":
            tokens = iter(())
        else:
            tokens = _xmb_tokens(child)
        yield from _with_tail(child, tokens)


# Keyed by CatalogFormat values.
_TOKENIZERS: dict[str, Callable[[ET.Element], Iterator[Part]]] = {
    "xlf": _xliff12_tokens,
    "xlf2": _xliff20_tokens,
    "xmb": _xmb_tokens,
    "xtb": _xmb_tokens,
}


def parse_native(native: str | None, markup: CatalogFormat) -> ParsedMessage | None:
    """Parse the inner markup of a content element written in ``markup``."""

    if native is None:
        return None
    try:
        fragment = ET.fromstring(f"<fragment>{native}</fragment>")  # noqa: S314
    except ET.ParseError as exc:
        raise MalformedCatalogError(f"invalid {markup} message markup: {exc}") from exc
    return build_message(_TOKENIZERS[markup](fragment))


def convert_native(
    native: str,
    *,
    source_markup: CatalogFormat,
    target_markup: CatalogFormat,
) -> str:
    """Re-express native content written in ``source_markup`` in ``target_markup``."""

    if source_markup == target_markup:
        return native
    if target_markup == "xtb":
        message = parse_native(native, source_markup)
        return message.as_native_string() if message is not None else ""
    raise ValueError(f"cannot convert {source_markup} content to {target_markup}")
