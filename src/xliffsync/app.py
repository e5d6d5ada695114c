"""Application orchestration entry points.

One run loads the master catalog once, corrects its source language when it
disagrees with the configured default language, then reconciles every
configured language concurrently. Each language runs in a worker thread and
owns its catalog; the master is shared read-only.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from xliffsync import __version__
from xliffsync.adapters.catalog import FileCatalogStore
from xliffsync.adapters.ngx_translate import NgxTranslateExporter
from xliffsync.domain.errors import ErrorKind, XliffSyncError
from xliffsync.domain.reconciliation import MergeEngine

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from xliffsync.config import MergeParameters
    from xliffsync.domain.model import Catalog
    from xliffsync.domain.ports import CatalogStore, TranslationExporter
    from xliffsync.domain.reconciliation import MergeReport

log = getLogger(__name__)

CONFIG_ERROR_STATUS = -1
LANGUAGE_ERROR_STATUS = 1


@dataclass(frozen=True, slots=True, kw_only=True)
class LanguageOutcome:
    """Result of processing one language; failures are carried, not raised."""

    language: str
    status: int = 0
    error_kind: ErrorKind | None = None
    message: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.status == 0


@dataclass(slots=True)
class MergeRun:
    """Merge the master catalog into every configured language catalog."""

    parameters: MergeParameters
    store: CatalogStore = field(default_factory=FileCatalogStore)
    exporter: TranslationExporter = field(default_factory=NgxTranslateExporter)
    engine: MergeEngine = field(default_factory=MergeEngine)
    master: Catalog | None = field(default=None, init=False)

    def run(self) -> int:
        return asyncio.run(self.run_async())

    async def run_async(self) -> int:
        parameters = self.parameters
        log.info("xliffsync version %s", __version__)
        if parameters.verbose:
            for name, value in parameters.describe():
                log.debug("%s: %s", name, value)

        if parameters.errors:
            for error in parameters.errors:
                log.error("%s", error.message)
            return CONFIG_ERROR_STATUS
        for warning in parameters.warnings:
            log.warning("%s", warning)

        try:
            self.master = self.read_master()
        except XliffSyncError as exc:
            log.error("%s", exc.message)  # noqa: TRY400
            return CONFIG_ERROR_STATUS

        outcomes = await self.process_languages(parameters.languages)
        return aggregate_status(outcomes)

    def read_master(self) -> Catalog:
        parameters = self.parameters
        try:
            master = self.store.load(
                parameters.i18n_format, parameters.i18n_file, encoding=parameters.encoding
            )
            for warning in master.warnings:
                log.warning("%s", warning)

            count = len(master)
            missing = master.missing_id_count
            log.info("master contains %s entries", count)
            if missing:
                log.warning(
                    "master contains %s entries, but there are %s without id", count, missing
                )

            source_language = master.source_language
            if source_language and source_language != parameters.default_language:
                log.warning(
                    'master says to have source-language="%s", should be "%s" '
                    "(your defaultLanguage)",
                    source_language,
                    parameters.default_language,
                )
                master.set_source_language(parameters.default_language)
                self.store.save(master, beautify=parameters.beautify_output)
                log.warning(
                    'changed master source-language="%s" to "%s"',
                    source_language,
                    parameters.default_language,
                )
        except XliffSyncError:
            raise
        except Exception as exc:
            raise XliffSyncError(
                f'file "{parameters.i18n_file}", oops {exc}', kind=ErrorKind.UNEXPECTED
            ) from exc
        return master

    async def process_languages(self, languages: Sequence[str]) -> list[LanguageOutcome]:
        """Process all languages concurrently; every task runs to completion.

        An unclassified failure is re-raised once all siblings have finished.
        """

        results = await asyncio.gather(
            *(asyncio.to_thread(self.process_language, language) for language in languages),
            return_exceptions=True,
        )
        outcomes = [
            result
            if isinstance(result, LanguageOutcome)
            else _unexpected_outcome(language, result)
            for language, result in zip(languages, results, strict=True)
        ]
        for outcome in outcomes:
            if outcome.error is not None:
                raise outcome.error
        return outcomes

    def process_language(self, language: str) -> LanguageOutcome:
        parameters = self.parameters
        log.debug("processing language %s", language)
        path = parameters.generated_i18n_file(language)
        try:
            if self.store.exists(path):
                catalog = self.merge_into(language, path)
            else:
                catalog = self.create_catalog(language, path)

            if parameters.support_ngx_translate:
                self.exporter(
                    catalog,
                    pattern=parameters.ngx_translate_extraction_pattern,
                    output=parameters.generated_ngx_translate_file(language),
                )
        except XliffSyncError as exc:
            log.error("%s", exc.message)  # noqa: TRY400
            return LanguageOutcome(
                language=language,
                status=LANGUAGE_ERROR_STATUS,
                error_kind=exc.kind,
                message=exc.message,
            )
        except Exception as exc:
            message = f'file "{path}", oops {exc}'
            log.error("%s", message)  # noqa: TRY400
            return LanguageOutcome(
                language=language,
                status=LANGUAGE_ERROR_STATUS,
                error_kind=ErrorKind.UNEXPECTED,
                message=message,
                error=exc,
            )
        return LanguageOutcome(language=language)

    def create_catalog(self, language: str, path: Path) -> Catalog:
        parameters = self.parameters
        master = self._require_master()
        catalog = self.store.create(
            parameters.target_format,
            path,
            encoding=parameters.encoding,
            source_language=parameters.default_language,
            target_language=language,
            master_path=master.path,
        )
        self.engine.reconcile(master, catalog, parameters.policy_for(language))
        self.store.save(catalog, beautify=parameters.beautify_output)
        log.info('created new file "%s" for target-language="%s"', path, language)
        if not parameters.is_default_language(language):
            log.warning('please translate file "%s" to target-language="%s"', path, language)
        return catalog

    def merge_into(self, language: str, path: Path) -> Catalog:
        parameters = self.parameters
        master = self._require_master()
        catalog = self.store.load(
            parameters.target_format,
            path,
            encoding=parameters.encoding,
            master_path=master.path,
        )
        for warning in catalog.warnings:
            log.warning("%s", warning)

        report = self.engine.reconcile(master, catalog, parameters.policy_for(language))
        _log_report(report, language, remove_unused=parameters.remove_unused_ids)

        if report.is_noop:
            log.info('file for "%s" was up to date', language)
            return catalog

        self.store.save(catalog, beautify=parameters.beautify_output)
        log.info('updated file "%s" for target-language="%s"', path, language)
        if report.new and not parameters.is_default_language(language):
            log.warning('please translate file "%s" to target-language="%s"', path, language)
        return catalog

    def _require_master(self) -> Catalog:
        if self.master is None:
            self.master = self.read_master()
        return self.master


def merge_translations(
    parameters: MergeParameters,
    *,
    store: CatalogStore | None = None,
    exporter: TranslationExporter | None = None,
) -> int:
    """Run one merge with the configured adapters and return the exit status."""

    run = MergeRun(
        parameters,
        store=store or FileCatalogStore(),
        exporter=exporter or NgxTranslateExporter(),
    )
    return run.run()


def aggregate_status(outcomes: Sequence[LanguageOutcome]) -> int:
    """Return the first nonzero status in configured language order."""

    return next((outcome.status for outcome in outcomes if not outcome.ok), 0)


def _unexpected_outcome(language: str, error: BaseException) -> LanguageOutcome:
    return LanguageOutcome(
        language=language,
        status=LANGUAGE_ERROR_STATUS,
        error_kind=ErrorKind.UNEXPECTED,
        message=str(error),
        error=error,
    )


def _log_report(report: MergeReport, language: str, *, remove_unused: bool) -> None:
    if report.new:
        log.warning('merged %s entries from master to "%s"', report.new, language)
    if report.source_content_changed:
        log.warning(
            'transferred %s changed source content from master to "%s"',
            report.source_content_changed,
            language,
        )
    if report.source_ref_changed:
        log.warning(
            'transferred %s source references from master to "%s"',
            report.source_ref_changed,
            language,
        )
    if report.id_changed:
        log.warning('found %s changed ids in "%s"', report.id_changed, language)
    if report.description_or_meaning_changed:
        log.warning(
            'transferred %s changed descriptions/meanings from master to "%s"',
            report.description_or_meaning_changed,
            language,
        )
    if report.removed:
        if remove_unused:
            log.warning('removed %s unused entries in "%s"', report.removed, language)
        else:
            log.warning(
                'keeping %s unused entries in "%s", because removeUnusedIds is disabled',
                report.removed,
                language,
            )
