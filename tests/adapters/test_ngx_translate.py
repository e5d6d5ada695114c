from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from tests.support.catalogs import make_catalog, make_entry
from xliffsync.adapters.ngx_translate import NgxTranslateExporter, is_explicit_id

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.parametrize(
    ("entry_id", "expected"),
    [
        ("app.title", True),
        ("greeting", True),
        ("0123456789abcdef0123456789abcdef01234567", False),
        ("4711", False),
        ("", False),
    ],
)
def test_is_explicit_id(entry_id: str, expected: bool) -> None:
    assert is_explicit_id(entry_id) is expected


def test_export_nests_keys_and_normalizes_placeholders(tmp_path: Path) -> None:
    output = tmp_path / "i18n" / "messages.de.json"
    catalog = make_catalog(
        make_entry(
            "app.title",
            'Hello <x id="INTERPOLATION"/>',
            target='Hallo <x id="INTERPOLATION"/>',
        ),
        make_entry("app.subtitle", "Welcome", target=""),
        make_entry("a3f9c0b1d2e4f5a6b7c8d9e0f1a2b3c4d5e6f7a8", "Generated", target="Generiert"),
        make_entry("4711", "Marked", target="Markiert", description="ngx-translate"),
        make_entry("plural", "{VAR_PLURAL, plural, =1 {one} other {many}}", target="x"),
    )

    exported = NgxTranslateExporter()(catalog, pattern="@@|ngx-translate", output=output)

    assert exported == 3
    assert json.loads(output.read_text(encoding="utf-8")) == {
        "app": {"title": "Hallo {{0}}", "subtitle": "Welcome"},
        "4711": "Markiert",
    }


def test_export_with_description_pattern_only(tmp_path: Path) -> None:
    output = tmp_path / "messages.de.json"
    catalog = make_catalog(
        make_entry("explicit", "Explicit", target="Explizit"),
        make_entry("4711", "Marked", target="Markiert", description="ngx"),
    )

    NgxTranslateExporter()(catalog, pattern="ngx", output=output)

    assert json.loads(output.read_text(encoding="utf-8")) == {"4711": "Markiert"}


def test_export_preserves_non_ascii_and_indents(tmp_path: Path) -> None:
    output = tmp_path / "messages.de.json"
    catalog = make_catalog(make_entry("bye", "Bye", target="Tschüss"))

    NgxTranslateExporter()(catalog, pattern="@@", output=output)

    assert output.read_text(encoding="utf-8") == '{\n  "bye": "Tschüss"\n}\n'


def test_export_skips_clashing_keys(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    output = tmp_path / "messages.de.json"
    catalog = make_catalog(
        make_entry("menu", "Menu", target="Menü"),
        make_entry("menu.open", "Open", target="Öffnen"),
    )

    with caplog.at_level(logging.WARNING):
        exported = NgxTranslateExporter()(catalog, pattern="@@", output=output)

    assert exported == 1
    assert json.loads(output.read_text(encoding="utf-8")) == {"menu": "Menü"}
    assert "menu.open" in caplog.text
