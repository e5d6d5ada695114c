"""Validated run parameters built from command-line options and the profile.

Validation never raises: problems are collected in ``errors`` (fatal, the run
aborts before touching any catalog) and ``warnings`` (reported, the run goes
on). Relative ``srcDir``/``genDir`` values are resolved against the directory
of the profile file; ``i18nFile`` is resolved against ``srcDir``.
"""

from __future__ import annotations

import codecs
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from xliffsync.adapters.ngx_translate import DEFAULT_PATTERN, EXPLICIT_ID
from xliffsync.domain.model import CatalogFormat, target_format_for
from xliffsync.domain.reconciliation import MergePolicy

from .env import profile_from_env
from .errors import ConfigurationError, ProfileError
from .profile import MergeOptions, load_profile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .profile import ProfileFile

DEFAULT_LANGUAGE: Final[str] = "en"
DEFAULT_ENCODING: Final[str] = "UTF-8"
DEFAULT_BASE_FILE: Final[str] = "messages"
MASTER_FORMATS: Final[tuple[CatalogFormat, ...]] = (
    CatalogFormat.XLIFF_12,
    CatalogFormat.XLIFF_20,
    CatalogFormat.XMB,
)

_LANGUAGE = re.compile(r"[a-zA-Z]{2,3}([-_][a-zA-Z0-9]{2,8})*")
_PATTERN_PART = re.compile(r"[a-zA-Z_][a-zA-Z0-9_-]*")

_FILE_EXTENSIONS: Final[dict[CatalogFormat, str]] = {
    CatalogFormat.XLIFF_12: "xlf",
    CatalogFormat.XLIFF_20: "xlf",
    CatalogFormat.XTB: "xtb",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class CommandOptions:
    """What the command line contributes."""

    languages: tuple[str, ...] = ()
    profile_path: str | None = None
    verbose: bool = False
    quiet: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class MergeParameters:
    profile_path: Path | None = None
    src_dir: Path = Path()
    gen_dir: Path = Path()
    i18n_file: Path = Path("messages.xlf")
    i18n_base_file: str = DEFAULT_BASE_FILE
    i18n_format: CatalogFormat = CatalogFormat.XLIFF_12
    encoding: str = DEFAULT_ENCODING
    default_language: str = DEFAULT_LANGUAGE
    languages: tuple[str, ...] = (DEFAULT_LANGUAGE,)
    remove_unused_ids: bool = True
    support_ngx_translate: bool = False
    ngx_translate_extraction_pattern: str = DEFAULT_PATTERN
    use_source_as_target: bool = True
    target_prefix: str = ""
    target_suffix: str = ""
    beautify_output: bool = False
    preserve_order: bool = True
    allow_id_change: bool = False
    verbose: bool = False
    quiet: bool = False
    errors: tuple[ConfigurationError, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        options: CommandOptions | None = None,
        profile: ProfileFile | None = None,
        *,
        base_dir: Path | None = None,
    ) -> MergeParameters:
        """Build parameters from ``options`` plus ``profile``.

        When ``profile`` is None it is read from ``options.profile_path`` (or
        ``XLIFFSYNC_PROFILE``); without any profile all defaults apply.
        """

        return _ParameterBuilder(options or CommandOptions(), profile, base_dir).build()

    @property
    def target_format(self) -> CatalogFormat:
        return target_format_for(self.i18n_format)

    def generated_i18n_file(self, language: str) -> Path:
        extension = _FILE_EXTENSIONS[self.target_format]
        return self.gen_dir / f"{self.i18n_base_file}.{language}.{extension}"

    def generated_ngx_translate_file(self, language: str) -> Path:
        return self.gen_dir / f"{self.i18n_base_file}.{language}.json"

    def is_default_language(self, language: str) -> bool:
        return language == self.default_language

    def policy_for(self, language: str) -> MergePolicy:
        is_default = self.is_default_language(language)
        return MergePolicy(
            is_default_language=is_default,
            use_source_as_target=self.use_source_as_target,
            allow_id_change=self.allow_id_change,
            remove_unused_ids=self.remove_unused_ids,
            preserve_order=self.preserve_order,
            target_prefix="" if is_default else self.target_prefix,
            target_suffix="" if is_default else self.target_suffix,
        )

    def describe(self) -> list[tuple[str, object]]:
        """Parameter name/value pairs for the verbose dump."""

        return [
            ("profile", self.profile_path),
            ("srcDir", self.src_dir),
            ("genDir", self.gen_dir),
            ("i18nFile", self.i18n_file),
            ("i18nBaseFile", self.i18n_base_file),
            ("i18nFormat", self.i18n_format),
            ("encoding", self.encoding),
            ("defaultLanguage", self.default_language),
            ("languages", ", ".join(self.languages)),
            ("removeUnusedIds", self.remove_unused_ids),
            ("supportNgxTranslate", self.support_ngx_translate),
            ("ngxTranslateExtractionPattern", self.ngx_translate_extraction_pattern),
            ("useSourceAsTarget", self.use_source_as_target),
            ("targetPraefix", self.target_prefix),
            ("targetSuffix", self.target_suffix),
            ("beautifyOutput", self.beautify_output),
            ("preserveOrder", self.preserve_order),
            ("allowIdChange", self.allow_id_change),
        ]


def is_valid_language(language: str) -> bool:
    return _LANGUAGE.fullmatch(language) is not None


def is_valid_extraction_pattern(pattern: str) -> bool:
    parts = pattern.split("|")
    return all(part == EXPLICIT_ID or _PATTERN_PART.fullmatch(part) for part in parts)


class _ParameterBuilder:
    def __init__(
        self,
        options: CommandOptions,
        profile: ProfileFile | None,
        base_dir: Path | None,
    ) -> None:
        self.options = options
        self.profile = profile
        self.base_dir = base_dir or Path()
        self.profile_path: Path | None = None
        self.errors: list[ConfigurationError] = []
        self.warnings: list[str] = []

    def build(self) -> MergeParameters:
        merge_options = self._merge_options()

        i18n_format = self._format(merge_options.i18n_format)
        encoding = self._encoding(merge_options.encoding)
        src_dir = self._src_dir(merge_options.src_dir)
        i18n_file = self._i18n_file(src_dir, merge_options.i18n_file, i18n_format)
        gen_dir = self._gen_dir(src_dir, merge_options.gen_dir)
        base_file = merge_options.i18n_base_file or (
            Path(merge_options.i18n_file).stem if merge_options.i18n_file else DEFAULT_BASE_FILE
        )

        default_language = merge_options.default_language or DEFAULT_LANGUAGE
        languages = self._languages(default_language, merge_options.languages)

        pattern = merge_options.ngx_translate_extraction_pattern or DEFAULT_PATTERN
        if not is_valid_extraction_pattern(pattern):
            self.errors.append(
                ConfigurationError(
                    f'ngxTranslateExtractionPattern "{pattern}": parts must be "@@" or '
                    "identifiers separated by |"
                )
            )

        use_source_as_target = _flag(merge_options.use_source_as_target, default=True)
        target_prefix = merge_options.target_prefix or ""
        target_suffix = merge_options.target_suffix or ""
        if not use_source_as_target and (target_prefix or target_suffix):
            self.warnings.append(
                "configured targetPraefix/targetSuffix are ignored because useSourceAsTarget "
                "is disabled"
            )

        return MergeParameters(
            profile_path=self.profile_path,
            src_dir=src_dir,
            gen_dir=gen_dir,
            i18n_file=i18n_file,
            i18n_base_file=base_file,
            i18n_format=i18n_format,
            encoding=encoding,
            default_language=default_language,
            languages=languages,
            remove_unused_ids=_flag(merge_options.remove_unused_ids, default=True),
            support_ngx_translate=_flag(merge_options.support_ngx_translate, default=False),
            ngx_translate_extraction_pattern=pattern,
            use_source_as_target=use_source_as_target,
            target_prefix=target_prefix,
            target_suffix=target_suffix,
            beautify_output=_flag(merge_options.beautify_output, default=False),
            preserve_order=_flag(merge_options.preserve_order, default=True),
            allow_id_change=_flag(merge_options.allow_id_change, default=False),
            verbose=self.options.verbose or _flag(merge_options.verbose, default=False),
            quiet=self.options.quiet or _flag(merge_options.quiet, default=False),
            errors=tuple(self.errors),
            warnings=tuple(self.warnings),
        )

    def _merge_options(self) -> MergeOptions:
        if self.profile is not None:
            return self.profile.xliffmerge_options

        profile_name = self.options.profile_path or profile_from_env()
        if profile_name is None:
            return MergeOptions()

        self.profile_path = Path(profile_name)
        self.base_dir = self.profile_path.parent
        try:
            return load_profile(self.profile_path).xliffmerge_options
        except ProfileError as exc:
            self.errors.append(exc)
            return MergeOptions()

    def _format(self, value: str | None) -> CatalogFormat:
        if value is None:
            return CatalogFormat.XLIFF_12
        for candidate in MASTER_FORMATS:
            if candidate.value == value:
                return candidate
        allowed = ", ".join(fmt.value for fmt in MASTER_FORMATS)
        self.errors.append(
            ConfigurationError(f'i18nFormat "{value}" invalid, must be one of {allowed}')
        )
        return CatalogFormat.XLIFF_12

    def _encoding(self, value: str | None) -> str:
        if value is None:
            return DEFAULT_ENCODING
        try:
            codecs.lookup(value)
        except LookupError:
            self.errors.append(ConfigurationError(f'encoding "{value}" is not supported'))
            return DEFAULT_ENCODING
        return value

    def _src_dir(self, value: str | None) -> Path:
        src_dir = self._resolve(value or ".")
        if not src_dir.is_dir():
            self.errors.append(ConfigurationError(f'srcDir "{src_dir}" is not a directory'))
        return src_dir

    def _i18n_file(self, src_dir: Path, value: str | None, i18n_format: CatalogFormat) -> Path:
        default_name = "messages.xmb" if i18n_format is CatalogFormat.XMB else "messages.xlf"
        i18n_file = src_dir / (value or default_name)
        if not i18n_file.is_file():
            self.errors.append(ConfigurationError(f'i18nFile "{i18n_file}" is not readable'))
        return i18n_file

    def _gen_dir(self, src_dir: Path, value: str | None) -> Path:
        if not value:
            return src_dir
        gen_dir = self._resolve(value)
        if gen_dir.is_dir():
            return gen_dir
        try:
            gen_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self.errors.append(ConfigurationError(f'genDir "{gen_dir}" cannot be created: {exc}'))
        return gen_dir

    def _languages(
        self, default_language: str, configured: Sequence[str] | None
    ) -> tuple[str, ...]:
        if self.options.languages:
            languages = tuple(dict.fromkeys(self.options.languages))
        elif configured:
            languages = tuple(dict.fromkeys(configured))
        else:
            languages = (default_language,)

        for language in dict.fromkeys((default_language, *languages)):
            if not is_valid_language(language):
                self.errors.append(ConfigurationError(f'language "{language}" is not valid'))
        if default_language not in languages:
            self.warnings.append(
                f'defaultLanguage "{default_language}" is not contained in list of languages'
            )
        return languages

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        return self.base_dir / path


def _flag(value: bool | None, *, default: bool) -> bool:  # noqa: FBT001
    return default if value is None else value
