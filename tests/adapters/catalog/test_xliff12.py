from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.support.catalogs import make_catalog, make_entry, ref
from xliffsync.adapters.catalog import read_xliff12, write_xliff12
from xliffsync.domain.errors import CatalogNotFoundError, MalformedCatalogError
from xliffsync.domain.model import CatalogFormat, TargetState

if TYPE_CHECKING:
    from pathlib import Path

ANGULAR_XLF = """<?xml version="1.0" encoding="UTF-8" ?>
<xliff version="1.2" xmlns="urn:oasis:names:tc:xliff:document:1.2">
  <file source-language="en" target-language="de" datatype="plaintext" original="ng2.template">
    <body>
      <trans-unit id="greeting" datatype="html">
        <source>Hello <x id="INTERPOLATION" equiv-text="{{ name }}"/>!</source>
        <target state="final">Hallo <x id="INTERPOLATION" equiv-text="{{ name }}"/>!</target>
        <context-group purpose="location">
          <context context-type="sourcefile">src/app/app.component.html</context>
          <context context-type="linenumber">3</context>
        </context-group>
        <context-group purpose="location">
          <context context-type="sourcefile">src/app/other.component.html</context>
          <context context-type="linenumber">7</context>
        </context-group>
        <note priority="1" from="description">Greeting on the start page</note>
        <note priority="1" from="meaning">welcome</note>
      </trans-unit>
      <trans-unit id="untranslated" datatype="html">
        <source>Bye</source>
      </trans-unit>
      <trans-unit id="review" datatype="html">
        <source>Later</source>
        <target state="needs-review-translation">Später</target>
      </trans-unit>
      <trans-unit id="stateless" datatype="html">
        <source>Yes</source>
        <target>Ja</target>
      </trans-unit>
      <trans-unit id="greeting" datatype="html">
        <source>Duplicate</source>
      </trans-unit>
    </body>
  </file>
</xliff>
"""


def test_read_angular_xliff12(tmp_path: Path) -> None:
    path = tmp_path / "messages.de.xlf"
    path.write_text(ANGULAR_XLF, encoding="utf-8")

    catalog = read_xliff12(path)

    assert catalog.format is CatalogFormat.XLIFF_12
    assert (catalog.source_language, catalog.target_language) == ("en", "de")
    assert catalog.ids == ("greeting", "untranslated", "review", "stateless")
    assert catalog.warnings == [f'duplicate id "greeting" in {path}, keeping the first']

    greeting = catalog.find_by_id("greeting")
    assert greeting is not None
    assert greeting.source == 'Hello <x id="INTERPOLATION" equiv-text="{{ name }}" />!'
    assert greeting.state is TargetState.FINAL
    assert greeting.references == (
        ref("src/app/app.component.html", 3),
        ref("src/app/other.component.html", 7),
    )
    assert greeting.description == "Greeting on the start page"
    assert greeting.meaning == "welcome"
    normalized = greeting.normalized_target()
    assert normalized is not None
    assert normalized.as_display_string() == "Hallo {{0}}!"

    states = {entry.id: (entry.target, entry.state) for entry in catalog}
    assert states["untranslated"] == (None, TargetState.NEW)
    assert states["review"] == ("Später", TargetState.TRANSLATED)
    assert states["stateless"] == ("Ja", TargetState.TRANSLATED)


def test_write_then_read_keeps_entries(tmp_path: Path) -> None:
    path = tmp_path / "out" / "messages.fr.xlf"
    catalog = make_catalog(
        make_entry(
            "a",
            'Click <x id="START_LINK" ctype="x-a"/>here<x id="CLOSE_LINK" ctype="x-a"/>',
            target="Cliquez ici",
            state=TargetState.TRANSLATED,
            references=[ref("app.html", 12)],
            description="link",
        ),
        make_entry("b", "Tom &amp; Jerry"),
        path=path,
        target_language="fr",
    )

    write_xliff12(catalog, beautify=True)
    reread = read_xliff12(path)

    assert reread.target_language == "fr"
    assert [(e.id, e.source, e.target, e.state) for e in reread] == [
        (
            "a",
            'Click <x id="START_LINK" ctype="x-a" />here<x id="CLOSE_LINK" ctype="x-a" />',
            "Cliquez ici",
            TargetState.TRANSLATED,
        ),
        ("b", "Tom &amp; Jerry", None, TargetState.NEW),
    ]
    first = reread.find_by_id("a")
    assert first is not None
    assert first.references == (ref("app.html", 12),)
    assert first.description == "link"
    assert first.meaning is None


def test_written_file_declares_encoding_and_namespace(tmp_path: Path) -> None:
    path = tmp_path / "messages.de.xlf"
    catalog = make_catalog(make_entry("a", "Grüße", target="Grüße"), path=path)
    catalog.encoding = "ISO-8859-1"

    write_xliff12(catalog)
    text = path.read_bytes().decode("iso-8859-1")

    assert text.startswith('<?xml version="1.0" encoding="ISO-8859-1"?>')
    assert 'xmlns="urn:oasis:names:tc:xliff:document:1.2"' in text
    assert "<source>Grüße</source>" in text
    assert read_xliff12(path, encoding="ISO-8859-1").ids == ("a",)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CatalogNotFoundError):
        read_xliff12(tmp_path / "missing.xlf")


@pytest.mark.parametrize(
    "content",
    [
        "<xliff version='1.2'><file><body>",
        "<messagebundle/>",
        "<xliff version='2.0'><file/></xliff>",
    ],
)
def test_malformed_files(tmp_path: Path, content: str) -> None:
    path = tmp_path / "messages.xlf"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(MalformedCatalogError):
        read_xliff12(path)
