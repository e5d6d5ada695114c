from __future__ import annotations

import pytest

from xliffsync.domain.errors import MalformedCatalogError
from xliffsync.domain.messages import (
    EmptyTag,
    IcuMessageRef,
    Placeholder,
    TagEnd,
    TagStart,
    TextPart,
    convert_native,
    parse_native,
    part_for_name,
)
from xliffsync.domain.model import CatalogFormat


def test_parse_xliff12_interpolation() -> None:
    message = parse_native(
        'Hello <x id="INTERPOLATION" equiv-text="{{ name }}"/>!', CatalogFormat.XLIFF_12
    )

    assert message is not None
    assert message.parts == (
        TextPart("Hello "),
        Placeholder(name="INTERPOLATION", index=0, display_text="{{ name }}"),
        TextPart("!"),
    )
    assert message.as_display_string() == "Hello {{0}}!"
    assert message.as_native_string() == 'Hello <ph name="INTERPOLATION"/>!'


def test_parse_xliff12_tags_render_as_html() -> None:
    message = parse_native(
        'Click <x id="START_BOLD_TEXT" ctype="x-b" equiv-text="&lt;b&gt;"/>here'
        '<x id="CLOSE_BOLD_TEXT" ctype="x-b" equiv-text="&lt;/b&gt;"/>'
        '<x id="LINE_BREAK" ctype="lb" equiv-text="&lt;br/&gt;"/>',
        CatalogFormat.XLIFF_12,
    )

    assert message is not None
    assert message.as_display_string() == "Click <b>here</b><br/>"


def test_parse_xliff20_paired_codes() -> None:
    message = parse_native(
        'Go <pc id="0" equivStart="START_LINK" equivEnd="CLOSE_LINK" type="link" '
        'dispStart="&lt;a&gt;" dispEnd="&lt;/a&gt;">home</pc> now '
        '<ph id="1" equiv="INTERPOLATION_1" disp="{{ user }}"/>',
        CatalogFormat.XLIFF_20,
    )

    assert message is not None
    assert message.as_display_string() == "Go <a>home</a> now {{1}}"


def test_parse_xmb_placeholder_with_example() -> None:
    message = parse_native(
        'Hi <ph name="INTERPOLATION_1"><ex>{{ x }}</ex></ph>', CatalogFormat.XMB
    )

    assert message is not None
    assert message.as_display_string() == "Hi {{1}}"
    assert message.as_native_string() == 'Hi <ph name="INTERPOLATION_1"/>'


def test_text_is_escaped_in_native_rendering() -> None:
    message = parse_native("a &lt; b &amp; c", CatalogFormat.XLIFF_12)

    assert message is not None
    assert message.as_display_string() == "a < b & c"
    assert message.as_native_string() == "a &lt; b &amp; c"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("START_BOLD_TEXT_1", TagStart(name="START_BOLD_TEXT_1", tag="b")),
        ("CLOSE_LINK", TagEnd(name="CLOSE_LINK", tag="a")),
        ("START_HEADING_LEVEL2", TagStart(name="START_HEADING_LEVEL2", tag="h2")),
        ("START_TAG_SPAN", TagStart(name="START_TAG_SPAN", tag="span")),
        ("LINE_BREAK", EmptyTag(name="LINE_BREAK", tag="br")),
        ("TAG_IMG", EmptyTag(name="TAG_IMG", tag="img")),
        ("ICU_1", IcuMessageRef(name="ICU_1", index=1)),
        ("INTERPOLATION_2", Placeholder(name="INTERPOLATION_2", index=2)),
        ("CUSTOM_THING", Placeholder(name="CUSTOM_THING")),
    ],
)
def test_part_for_name_classifies_angular_placeholders(name: str, expected: object) -> None:
    assert part_for_name(name) == expected


def test_parse_native_absent_content() -> None:
    assert parse_native(None, CatalogFormat.XLIFF_12) is None


def test_parse_native_rejects_broken_markup() -> None:
    with pytest.raises(MalformedCatalogError):
        parse_native('Hello <x id="INTERPOLATION"', CatalogFormat.XLIFF_12)


def test_convert_xmb_to_xtb_drops_examples() -> None:
    converted = convert_native(
        'Hi <ph name="INTERPOLATION"><ex>{{ x }}</ex></ph> &amp; bye',
        source_markup=CatalogFormat.XMB,
        target_markup=CatalogFormat.XTB,
    )

    assert converted == 'Hi <ph name="INTERPOLATION"/> &amp; bye'


def test_convert_same_markup_is_identity() -> None:
    native = 'Hi <x id="INTERPOLATION"/>'

    assert (
        convert_native(
            native, source_markup=CatalogFormat.XLIFF_12, target_markup=CatalogFormat.XLIFF_12
        )
        == native
    )


def test_convert_between_xliff_versions_is_unsupported() -> None:
    with pytest.raises(ValueError, match="cannot convert"):
        convert_native(
            "Hi", source_markup=CatalogFormat.XLIFF_12, target_markup=CatalogFormat.XLIFF_20
        )
