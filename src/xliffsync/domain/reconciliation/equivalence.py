"""Equivalence rules deciding whether master and target content differ.

The check order matters: a pure ICU message is never equivalent to plain text,
even if both flatten to the same words.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from xliffsync.domain.messages import ParsedMessage
    from xliffsync.domain.model import Entry, SourceReference


def content_equivalent(first: ParsedMessage | None, second: ParsedMessage | None) -> bool:
    """Compare normalized source contents.

    - exactly one side absent -> different
    - pure ICU message on one side only -> different
    - both pure ICU messages -> canonical ICU renderings must match
    - ICU message references involved -> canonical native renderings must match
    - otherwise -> placeholder-normalized display strings must match
    """

    if first is None or second is None:
        return first is None and second is None

    first_icu = first.icu_message
    second_icu = second.icu_message
    if first_icu is not None or second_icu is not None:
        if first_icu is None or second_icu is None:
            return False
        return first_icu.native().strip() == second_icu.native().strip()

    if first.contains_icu_message_ref or second.contains_icu_message_ref:
        return first.as_native_string().strip() == second.as_native_string().strip()

    return first.as_display_string().strip() == second.as_display_string().strip()


def entries_equivalent(first: Entry, second: Entry) -> bool:
    return content_equivalent(first.normalized_source(), second.normalized_source())


def references_equivalent(
    first: Iterable[SourceReference] | None,
    second: Iterable[SourceReference] | None,
) -> bool:
    """Order-independent comparison of ``file:line`` reference sets."""

    if first is None or second is None:
        return first is None and second is None

    first_keys = {reference.key for reference in first}
    second_keys = {reference.key for reference in second}
    return len(first_keys) == len(second_keys) and first_keys == second_keys
