from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.support.catalogs import make_catalog, make_entry, ref
from xliffsync.adapters.catalog import read_xliff20, write_xliff20
from xliffsync.domain.errors import MalformedCatalogError
from xliffsync.domain.model import CatalogFormat, TargetState

if TYPE_CHECKING:
    from pathlib import Path

ANGULAR_XLF2 = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en" trgLang="de">
  <file id="ngi18n" original="ng.template">
    <unit id="greeting">
      <notes>
        <note category="description">Start page</note>
        <note category="meaning">welcome</note>
        <note category="location">src/app/app.component.html:3,5</note>
        <note category="location">src/app/other.component.html:7</note>
      </notes>
      <segment state="reviewed">
        <source>Hello <ph id="0" equiv="INTERPOLATION" disp="{{ name }}"/>!</source>
        <target>Hallo <ph id="0" equiv="INTERPOLATION" disp="{{ name }}"/>!</target>
      </segment>
    </unit>
    <unit id="new">
      <segment state="initial">
        <source>Bye</source>
      </segment>
    </unit>
    <unit id="stateless">
      <segment>
        <source>Yes</source>
        <target>Ja</target>
      </segment>
    </unit>
  </file>
</xliff>
"""


def test_read_angular_xliff20(tmp_path: Path) -> None:
    path = tmp_path / "messages.de.xlf"
    path.write_text(ANGULAR_XLF2, encoding="utf-8")

    catalog = read_xliff20(path)

    assert catalog.format is CatalogFormat.XLIFF_20
    assert (catalog.source_language, catalog.target_language) == ("en", "de")
    assert catalog.ids == ("greeting", "new", "stateless")

    greeting = catalog.find_by_id("greeting")
    assert greeting is not None
    assert greeting.state is TargetState.FINAL
    assert greeting.description == "Start page"
    assert greeting.meaning == "welcome"
    assert greeting.references == (
        ref("src/app/app.component.html", 3, 5),
        ref("src/app/other.component.html", 7),
    )
    normalized = greeting.normalized_source()
    assert normalized is not None
    assert normalized.as_display_string() == "Hello {{0}}!"

    states = {entry.id: (entry.target, entry.state) for entry in catalog}
    assert states["new"] == (None, TargetState.NEW)
    assert states["stateless"] == ("Ja", TargetState.TRANSLATED)


def test_write_then_read_keeps_entries(tmp_path: Path) -> None:
    path = tmp_path / "messages.fr.xlf"
    catalog = make_catalog(
        make_entry(
            "a",
            "Hello",
            catalog_format=CatalogFormat.XLIFF_20,
            target="Bonjour",
            state=TargetState.FINAL,
            references=[ref("app.html", 1)],
            meaning="salutation",
        ),
        make_entry("b", "Bye", catalog_format=CatalogFormat.XLIFF_20),
        catalog_format=CatalogFormat.XLIFF_20,
        path=path,
        target_language="fr",
    )

    write_xliff20(catalog)
    text = path.read_text(encoding="utf-8")
    reread = read_xliff20(path)

    assert 'srcLang="en"' in text
    assert 'trgLang="fr"' in text
    assert '<segment state="final">' in text
    assert [(e.id, e.target, e.state) for e in reread] == [
        ("a", "Bonjour", TargetState.FINAL),
        ("b", None, TargetState.NEW),
    ]
    first = reread.find_by_id("a")
    assert first is not None
    assert first.references == (ref("app.html", 1),)
    assert (first.description, first.meaning) == (None, "salutation")


def test_rejects_xliff12_document(tmp_path: Path) -> None:
    path = tmp_path / "messages.xlf"
    path.write_text('<xliff version="1.2"><file/></xliff>', encoding="utf-8")

    with pytest.raises(MalformedCatalogError):
        read_xliff20(path)


def test_location_notes_keep_end_line(tmp_path: Path) -> None:
    path = tmp_path / "messages.de.xlf"
    catalog = make_catalog(
        make_entry(
            "a",
            "Hello",
            catalog_format=CatalogFormat.XLIFF_20,
            references=[ref("src/a.html", 10, 12), ref("src/b.html", 4)],
        ),
        catalog_format=CatalogFormat.XLIFF_20,
        path=path,
        target_language="de",
    )

    write_xliff20(catalog)
    text = path.read_text(encoding="utf-8")
    entry = read_xliff20(path).find_by_id("a")

    assert '<note category="location">src/a.html:10,12</note>' in text
    assert '<note category="location">src/b.html:4</note>' in text
    assert entry is not None
    assert entry.references == (ref("src/a.html", 10, 12), ref("src/b.html", 4))
