"""Export finished catalogs as ngx-translate JSON dictionaries."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from pathlib import Path

    from xliffsync.domain.model import Catalog, Entry

log = getLogger(__name__)

EXPLICIT_ID: Final[str] = "@@"
DEFAULT_PATTERN: Final[str] = "@@|ngx-translate"

# Ids Angular generates itself: SHA1 digests (xlf) or decimal fingerprints (xmb).
_GENERATED_ID = re.compile(r"[0-9a-fA-F]{40}|[0-9]+")


def is_explicit_id(entry_id: str) -> bool:
    return bool(entry_id) and _GENERATED_ID.fullmatch(entry_id) is None


def matches_pattern(entry: Entry, parts: frozenset[str]) -> bool:
    if EXPLICIT_ID in parts and is_explicit_id(entry.id):
        return True
    return entry.description is not None and entry.description in parts


def display_text(entry: Entry) -> str | None:
    """Return the placeholder-normalized text of ``entry``, None for ICU messages."""

    source = entry.normalized_source()
    if source is not None and source.is_icu_message:
        return None
    message = entry.normalized_target() if entry.is_translated else None
    if message is None or message.is_empty:
        message = source
    if message is None or message.is_icu_message:
        return None
    return message.as_display_string()


@dataclass(slots=True)
class NgxTranslateExporter:
    """Write matching entries of a catalog as nested JSON."""

    indent: int = 2

    def __call__(self, catalog: Catalog, *, pattern: str, output: Path) -> int:
        parts = frozenset(part.strip() for part in pattern.split("|") if part.strip())
        tree: dict[str, Any] = {}
        exported = 0
        for entry in catalog:
            if not entry.has_id or not matches_pattern(entry, parts):
                continue
            text = display_text(entry)
            if text is None:
                log.debug('skipping ICU message "%s" for ngx-translate', entry.id)
                continue
            if _insert(tree, entry.id.split("."), text):
                exported += 1
            else:
                log.warning(
                    'ngx-translate key "%s" clashes with another key in %s, skipped',
                    entry.id,
                    output,
                )

        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(tree, indent=self.indent, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        log.info("wrote %d ngx-translate keys to %s", exported, output)
        return exported


def _insert(tree: dict[str, Any], keys: list[str], value: str) -> bool:
    node = tree
    for key in keys[:-1]:
        child = node.setdefault(key, {})
        if not isinstance(child, dict):
            return False
        node = child
    if keys[-1] in node:
        return False
    node[keys[-1]] = value
    return True
