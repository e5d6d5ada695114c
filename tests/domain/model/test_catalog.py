from __future__ import annotations

from pathlib import Path

import pytest

from tests.support.catalogs import make_catalog, make_entry, ref
from xliffsync.domain.errors import UnsupportedFieldError
from xliffsync.domain.model import Catalog, CatalogFormat, TargetState, target_format_for


def test_duplicate_ids_keep_first_and_warn() -> None:
    catalog = make_catalog(make_entry("a", "first"), make_entry("a", "second"))

    assert len(catalog) == 1
    found = catalog.find_by_id("a")
    assert found is not None
    assert found.source == "first"
    assert catalog.warnings == ['duplicate id "a" in messages.xlf, keeping the first']


def test_entries_without_id_are_kept_but_not_indexed() -> None:
    catalog = make_catalog(make_entry("a"), make_entry(""), make_entry(""))

    assert len(catalog) == 3
    assert catalog.missing_id_count == 2
    assert catalog.find_by_id("") is None
    assert "" not in catalog


def test_remove_while_iterating() -> None:
    catalog = make_catalog(make_entry("a"), make_entry("b"), make_entry("c"))

    for entry in catalog:
        if entry.id != "b":
            catalog.remove_by_id(entry.id)

    assert catalog.ids == ("b",)
    assert catalog.remove_by_id("missing") is None


def test_import_entry_placement() -> None:
    target = make_catalog(make_entry("a"), make_entry("c"))
    master_b = make_entry("b", "B")
    master_front = make_entry("front", "F")
    master_end = make_entry("end", "E")

    a = target.find_by_id("a")
    target.import_entry(master_b, preserve_order=True, after=a)
    target.import_entry(master_front, preserve_order=True, after=None)
    target.import_entry(master_end)

    assert target.ids == ("front", "a", "b", "c", "end")


def test_import_entry_copies_fields_the_format_supports() -> None:
    master = make_entry(
        "greeting",
        "Hello",
        references=[ref("app.html", 3)],
        description="intro",
        meaning="welcome",
    )
    target = make_catalog()

    imported = target.import_entry(master)

    assert imported is not master
    assert imported.source == "Hello"
    assert imported.target is None
    assert imported.state is TargetState.NEW
    assert imported.references == (ref("app.html", 3),)
    assert imported.description == "intro"
    assert imported.meaning == "welcome"


def test_import_xmb_entry_into_xtb_catalog() -> None:
    master = make_entry(
        "42",
        'Hi <ph name="INTERPOLATION"><ex>x</ex></ph>',
        catalog_format=CatalogFormat.XMB,
        references=[ref("app.html", 3)],
        description="greeting",
    )
    target = make_catalog(catalog_format=CatalogFormat.XTB, path=Path("messages.de.xtb"))

    imported = target.import_entry(master)

    assert imported.format is CatalogFormat.XTB
    assert imported.references is None
    assert imported.description is None
    assert target.content_from(master) == 'Hi <ph name="INTERPOLATION"/>'
    normalized = imported.normalized_source()
    assert normalized is not None
    assert normalized.as_display_string() == "Hi {{0}}"


def test_import_rejects_existing_or_missing_ids() -> None:
    target = make_catalog(make_entry("a"))

    with pytest.raises(ValueError, match="already exists"):
        target.import_entry(make_entry("a"))
    with pytest.raises(ValueError, match="without id"):
        target.import_entry(make_entry(""))


def test_import_rejects_incompatible_formats() -> None:
    target = make_catalog(catalog_format=CatalogFormat.XLIFF_20)

    with pytest.raises(ValueError, match="cannot import"):
        target.import_entry(make_entry("a", catalog_format=CatalogFormat.XMB))


def test_add_rejects_entries_of_another_format() -> None:
    catalog = Catalog(format=CatalogFormat.XLIFF_12, path=Path("messages.xlf"))

    with pytest.raises(ValueError, match="cannot be stored"):
        catalog.add(make_entry("a", catalog_format=CatalogFormat.XLIFF_20))


def test_capability_guards() -> None:
    xmb_entry = make_entry("a", catalog_format=CatalogFormat.XMB)
    xtb_entry = make_entry("a", catalog_format=CatalogFormat.XTB)

    with pytest.raises(UnsupportedFieldError):
        xmb_entry.translate("Hallo")
    with pytest.raises(UnsupportedFieldError):
        xmb_entry.set_state(TargetState.FINAL)
    with pytest.raises(UnsupportedFieldError):
        xtb_entry.set_source("Hello")
    with pytest.raises(UnsupportedFieldError):
        xtb_entry.set_references([ref("a.ts", 1)])
    with pytest.raises(UnsupportedFieldError):
        xtb_entry.set_description("d")

    xtb_entry.translate("Hallo")
    assert xtb_entry.target == "Hallo"


def test_normalized_source_cache_is_reset_on_change() -> None:
    entry = make_entry("a", "Hello")
    first = entry.normalized_source()

    entry.set_source("Bye")

    second = entry.normalized_source()
    assert first is not None
    assert second is not None
    assert first.as_display_string() == "Hello"
    assert second.as_display_string() == "Bye"


@pytest.mark.parametrize(
    ("master_format", "expected"),
    [
        (CatalogFormat.XLIFF_12, CatalogFormat.XLIFF_12),
        (CatalogFormat.XLIFF_20, CatalogFormat.XLIFF_20),
        (CatalogFormat.XMB, CatalogFormat.XTB),
    ],
)
def test_target_format_pairing(master_format: CatalogFormat, expected: CatalogFormat) -> None:
    assert target_format_for(master_format) is expected


def test_xtb_is_never_a_master_format() -> None:
    with pytest.raises(ValueError):  # noqa: PT011
        target_format_for(CatalogFormat.XTB)
