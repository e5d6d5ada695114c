"""ICU plural/select message parsing over tokenized message content.

Placeholders inside case bodies arrive as atomic parts, so the reader works on
a stream that mixes single characters with part objects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from .parts import IcuCase, IcuMessage, ParsedMessage, TextPart

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .parts import Part

ICU_KINDS = frozenset({"plural", "select", "selectordinal"})

_Item: TypeAlias = "str | Part"


class IcuSyntaxError(ValueError):
    """Raised when brace syntax is not a well-formed ICU message."""


def build_message(tokens: Iterable[Part]) -> ParsedMessage:
    """Merge tokens into a message, recognizing a pure ICU message."""

    parts = merge_text(tokens)
    icu = parse_icu_message(parts)
    if icu is not None:
        return ParsedMessage((icu,))
    return ParsedMessage(parts)


def merge_text(tokens: Iterable[Part]) -> tuple[Part, ...]:
    merged: list[Part] = []
    for token in tokens:
        if isinstance(token, TextPart):
            if not token.text:
                continue
            if merged and isinstance(merged[-1], TextPart):
                merged[-1] = TextPart(merged[-1].text + token.text)
                continue
        merged.append(token)
    return tuple(merged)


def parse_icu_message(parts: Sequence[Part]) -> IcuMessage | None:
    """Return the ICU message if ``parts`` is exactly one (modulo whitespace)."""

    items = _explode(parts)
    start, end = 0, len(items)
    while start < end and _is_space(items[start]):
        start += 1
    while end > start and _is_space(items[end - 1]):
        end -= 1
    if start == end or items[start] != "{":
        return None

    reader = _Reader(items[start:end])
    try:
        message = reader.read_icu()
    except IcuSyntaxError:
        return None
    if not reader.at_end():
        return None
    return message


def _explode(parts: Sequence[Part]) -> list[_Item]:
    items: list[_Item] = []
    for part in parts:
        if isinstance(part, TextPart):
            items.extend(part.text)
        else:
            items.append(part)
    return items


def _is_space(item: _Item) -> bool:
    return isinstance(item, str) and item.isspace()


class _Reader:
    def __init__(self, items: list[_Item]) -> None:
        self._items = items
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos >= len(self._items)

    def peek(self) -> _Item | None:
        if self.at_end():
            return None
        return self._items[self._pos]

    def advance(self) -> _Item:
        item = self._items[self._pos]
        self._pos += 1
        return item

    def expect(self, char: str) -> None:
        self.skip_space()
        if self.peek() != char:
            raise IcuSyntaxError(f"expected {char!r} at {self._pos}")
        self.advance()

    def skip_space(self) -> None:
        while not self.at_end() and _is_space(self._items[self._pos]):
            self._pos += 1

    def read_token(self, stops: str) -> str:
        self.skip_space()
        chars: list[str] = []
        while True:
            item = self.peek()
            if item is None:
                raise IcuSyntaxError("unexpected end of message")
            if not isinstance(item, str):
                raise IcuSyntaxError("placeholder inside ICU header")
            if item in stops or item.isspace():
                break
            chars.append(item)
            self.advance()
        token = "".join(chars)
        if not token:
            raise IcuSyntaxError(f"empty token at {self._pos}")
        return token

    def read_icu(self) -> IcuMessage:
        self.expect("{")
        variable = self.read_token(",{}")
        self.expect(",")
        kind = self.read_token(",{}")
        if kind not in ICU_KINDS:
            raise IcuSyntaxError(f"unknown ICU message kind {kind!r}")
        self.expect(",")

        cases: list[IcuCase] = []
        while True:
            self.skip_space()
            if self.peek() == "}":
                self.advance()
                break
            selector = self.read_token("{}")
            self.expect("{")
            cases.append(IcuCase(selector=selector, message=self.read_case_body()))
        if not cases:
            raise IcuSyntaxError("ICU message without cases")
        return IcuMessage(variable=variable, kind=kind, cases=tuple(cases))

    def read_case_body(self) -> ParsedMessage:
        tokens: list[Part] = []
        text: list[str] = []

        def flush() -> None:
            if text:
                tokens.append(TextPart("".join(text)))
                text.clear()

        while True:
            item = self.peek()
            if item is None:
                raise IcuSyntaxError("unterminated ICU case")
            if item == "}":
                self.advance()
                break
            if item == "{":
                flush()
                tokens.append(self.read_icu())
                continue
            if isinstance(item, str):
                text.append(item)
            else:
                flush()
                tokens.append(item)
            self.advance()
        flush()
        return ParsedMessage(merge_text(tokens))
