"""Normalized message content.

A message is a flat tuple of parts. Text runs, placeholders and markup tags sit
side by side; an ICU message holds nested messages per case.

Two renderings are provided:

- ``as_native_string`` is the canonical markup form. Every placeholder-like
  part becomes ``<ph name="NAME"/>`` (the XTB syntax) and text is XML-escaped.
- ``as_display_string`` is the placeholder-normalized human form
  (``{{0}}``, ``<b>``, ``<ICU-Message-Ref_0/>``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias
from xml.sax.saxutils import escape

if TYPE_CHECKING:
    from collections.abc import Iterator


_ATTR_ENTITIES = {'"': "&quot;"}


def _ph(name: str) -> str:
    return f'<ph name="{escape(name, _ATTR_ENTITIES)}"/>'


@dataclass(frozen=True, slots=True)
class TextPart:
    text: str

    def native(self) -> str:
        return escape(self.text)

    def display(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Runtime-substituted value (interpolation or custom placeholder)."""

    name: str
    index: int | None = None
    display_text: str | None = None

    def native(self) -> str:
        return _ph(self.name)

    def display(self) -> str:
        if self.index is None:
            return f"{{{{{self.name}}}}}"
        return f"{{{{{self.index}}}}}"


@dataclass(frozen=True, slots=True)
class TagStart:
    name: str
    tag: str

    def native(self) -> str:
        return _ph(self.name)

    def display(self) -> str:
        return f"<{self.tag}>"


@dataclass(frozen=True, slots=True)
class TagEnd:
    name: str
    tag: str

    def native(self) -> str:
        return _ph(self.name)

    def display(self) -> str:
        return f"</{self.tag}>"


@dataclass(frozen=True, slots=True)
class EmptyTag:
    name: str
    tag: str

    def native(self) -> str:
        return _ph(self.name)

    def display(self) -> str:
        return f"<{self.tag}/>"


@dataclass(frozen=True, slots=True)
class IcuMessageRef:
    """Reference to an ICU message that is defined in another entry."""

    name: str
    index: int = 0
    display_text: str | None = None

    def native(self) -> str:
        return _ph(self.name)

    def display(self) -> str:
        return f"<ICU-Message-Ref_{self.index}/>"


@dataclass(frozen=True, slots=True)
class IcuCase:
    selector: str
    message: ParsedMessage


@dataclass(frozen=True, slots=True)
class IcuMessage:
    """Plural/select message: ``{VAR, kind, selector {message} ...}``."""

    variable: str
    kind: str
    cases: tuple[IcuCase, ...]

    def native(self) -> str:
        rendered = " ".join(
            f"{case.selector} {{{case.message.as_native_string()}}}" for case in self.cases
        )
        return f"{{{self.variable}, {self.kind}, {rendered}}}"

    def display(self) -> str:
        rendered = " ".join(
            f"{case.selector} {{{case.message.as_display_string()}}}" for case in self.cases
        )
        return f"{{{self.variable}, {self.kind}, {rendered}}}"

    @property
    def selectors(self) -> tuple[str, ...]:
        return tuple(case.selector for case in self.cases)


Part: TypeAlias = TextPart | Placeholder | TagStart | TagEnd | EmptyTag | IcuMessageRef | IcuMessage


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """Normalized content of one source or target field."""

    parts: tuple[Part, ...] = ()

    def __iter__(self) -> Iterator[Part]:
        return iter(self.parts)

    @property
    def is_empty(self) -> bool:
        return not self.parts

    @property
    def icu_message(self) -> IcuMessage | None:
        significant = [
            part
            for part in self.parts
            if not (isinstance(part, TextPart) and not part.text.strip())
        ]
        if len(significant) == 1 and isinstance(significant[0], IcuMessage):
            return significant[0]
        return None

    @property
    def is_icu_message(self) -> bool:
        return self.icu_message is not None

    @property
    def contains_icu_message_ref(self) -> bool:
        return any(isinstance(part, IcuMessageRef) for part in self.parts)

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        return tuple(part for part in self.parts if isinstance(part, Placeholder))

    def as_native_string(self) -> str:
        return "".join(part.native() for part in self.parts)

    def as_display_string(self) -> str:
        return "".join(part.display() for part in self.parts)
