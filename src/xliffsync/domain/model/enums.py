"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CatalogFormat(StrEnum):
    XLIFF_12 = "xlf"
    XLIFF_20 = "xlf2"
    XMB = "xmb"
    XTB = "xtb"


class TargetState(StrEnum):
    """Translation workflow state of an entry's target content."""

    NEW = "new"
    TRANSLATED = "translated"
    FINAL = "final"


# Masters in a compact format are merged into their paired target format.
_TARGET_FORMAT_FOR_MASTER: dict[CatalogFormat, CatalogFormat] = {
    CatalogFormat.XLIFF_12: CatalogFormat.XLIFF_12,
    CatalogFormat.XLIFF_20: CatalogFormat.XLIFF_20,
    CatalogFormat.XMB: CatalogFormat.XTB,
}


def target_format_for(master_format: CatalogFormat) -> CatalogFormat:
    """Return the format used for language catalogs of a ``master_format`` master."""

    try:
        return _TARGET_FORMAT_FOR_MASTER[master_format]
    except KeyError:
        raise ValueError(f"{master_format} cannot be used as master format") from None
