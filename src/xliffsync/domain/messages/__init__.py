"""Normalized message content shared by all catalog formats."""

from __future__ import annotations

from .icu import ICU_KINDS, build_message, parse_icu_message
from .markup import convert_native, parse_native, part_for_name
from .parts import (
    EmptyTag,
    IcuCase,
    IcuMessage,
    IcuMessageRef,
    ParsedMessage,
    Part,
    Placeholder,
    TagEnd,
    TagStart,
    TextPart,
)

__all__ = [
    "ICU_KINDS",
    "EmptyTag",
    "IcuCase",
    "IcuMessage",
    "IcuMessageRef",
    "ParsedMessage",
    "Part",
    "Placeholder",
    "TagEnd",
    "TagStart",
    "TextPart",
    "build_message",
    "convert_native",
    "parse_icu_message",
    "parse_native",
    "part_for_name",
]
