"""Pydantic models describing the profile file."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ProfileError

if TYPE_CHECKING:
    from pathlib import Path


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ProfileBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MergeOptions(ProfileBaseModel):
    """Options under ``xliffmergeOptions``; absent values fall back to defaults later."""

    src_dir: str | None = Field(default=None, alias="srcDir")
    gen_dir: str | None = Field(default=None, alias="genDir")
    i18n_file: str | None = Field(default=None, alias="i18nFile")
    i18n_base_file: str | None = Field(default=None, alias="i18nBaseFile")
    i18n_format: str | None = Field(default=None, alias="i18nFormat")
    encoding: str | None = None
    default_language: str | None = Field(default=None, alias="defaultLanguage")
    languages: list[str] | None = None
    remove_unused_ids: bool | None = Field(default=None, alias="removeUnusedIds")
    support_ngx_translate: bool | None = Field(default=None, alias="supportNgxTranslate")
    ngx_translate_extraction_pattern: str | None = Field(
        default=None, alias="ngxTranslateExtractionPattern"
    )
    use_source_as_target: bool | None = Field(default=None, alias="useSourceAsTarget")
    target_prefix: str | None = Field(default=None, alias="targetPraefix")
    target_suffix: str | None = Field(default=None, alias="targetSuffix")
    beautify_output: bool | None = Field(default=None, alias="beautifyOutput")
    preserve_order: bool | None = Field(default=None, alias="preserveOrder")
    allow_id_change: bool | None = Field(default=None, alias="allowIdChange")
    verbose: bool | None = None
    quiet: bool | None = None

    _normalize_paths = field_validator(
        "src_dir",
        "gen_dir",
        "i18n_file",
        "i18n_base_file",
        "i18n_format",
        "encoding",
        "default_language",
        mode="before",
    )(_blank_to_none)


class ProfileFile(ProfileBaseModel):
    """A profile JSON document (a ``package.json`` with the same key works too)."""

    xliffmerge_options: MergeOptions = Field(
        default_factory=MergeOptions, alias="xliffmergeOptions"
    )


def load_profile(path: Path) -> ProfileFile:
    """Read and validate the profile at ``path``."""

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ProfileError(f'profile "{path}" not found') from exc
    except OSError as exc:
        raise ProfileError(f'profile "{path}" cannot be read: {exc}') from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProfileError(f'profile "{path}" is not valid JSON: {exc}') from exc

    try:
        return ProfileFile.model_validate(payload)
    except ValidationError as exc:
        raise ProfileError(f'profile "{path}" is invalid: {exc}') from exc
