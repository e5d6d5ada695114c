"""Reconcile a master catalog into one language catalog.

The target catalog is mutated in place. Master entries are visited in master
order; the entry handled last is tracked so that new entries can be inserted
right behind it when order preservation is requested.

Workflow state transitions:
- new entry, default language        -> target = source, FINAL
- new entry, use source as target    -> target = prefix + source + suffix, TRANSLATED
- new entry, otherwise               -> no target, NEW
- renamed entry with a translation   -> translation carried over, TRANSLATED
- source changed, default language   -> target = new source, FINAL
- source changed, FINAL elsewhere    -> TRANSLATED (NEW/TRANSLATED stay as they are)
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from xliffsync.domain.model import TargetState

from .equivalence import entries_equivalent, references_equivalent
from .report import MergeReport
from .resolve import ResolveRename, resolve_rename

if TYPE_CHECKING:
    from xliffsync.domain.model import Catalog, Entry

    from .policy import MergePolicy

log = getLogger(__name__)


@dataclass(slots=True)
class MergeEngine:
    """Run one master-to-target reconciliation."""

    resolve: ResolveRename = resolve_rename

    def reconcile(self, master: Catalog, target: Catalog, policy: MergePolicy) -> MergeReport:
        report = MergeReport()
        last_processed: Entry | None = None

        for master_entry in master:
            if not master_entry.has_id:
                continue

            existing = target.find_by_id(master_entry.id)
            if existing is not None:
                _update_entry(existing, master_entry, target=target, policy=policy, report=report)
                last_processed = existing
                continue

            renamed = (
                self._import_renamed(master_entry, target, policy=policy, after=last_processed)
                if policy.allow_id_change
                else None
            )
            if renamed is not None:
                report.id_changed += 1
                last_processed = renamed
                continue

            last_processed = _import_new(master_entry, target, policy=policy, after=last_processed)
            report.new += 1

        report.removed = _handle_unused(master, target, policy=policy)
        return report

    def _import_renamed(
        self,
        master_entry: Entry,
        target: Catalog,
        *,
        policy: MergePolicy,
        after: Entry | None,
    ) -> Entry | None:
        candidate = self.resolve(master_entry, target)
        if candidate is None:
            return None

        log.debug(
            'id "%s" in %s looks like a rename of "%s"',
            master_entry.id,
            target.path,
            candidate.id,
        )
        entry = target.import_entry(master_entry, preserve_order=policy.preserve_order, after=after)
        if candidate.target:
            entry.translate(candidate.target)
            entry.set_state(TargetState.TRANSLATED)
        return entry


def reconcile(master: Catalog, target: Catalog, policy: MergePolicy) -> MergeReport:
    """Reconcile ``master`` into ``target`` using the default rename resolver."""

    return MergeEngine().reconcile(master, target, policy)


def _import_new(
    master_entry: Entry,
    target: Catalog,
    *,
    policy: MergePolicy,
    after: Entry | None,
) -> Entry:
    entry = target.import_entry(master_entry, preserve_order=policy.preserve_order, after=after)
    if policy.is_default_language:
        entry.translate(target.content_from(master_entry))
        entry.set_state(TargetState.FINAL)
    elif policy.use_source_as_target:
        entry.translate(_decorate(target.content_from(master_entry), entry, policy))
        entry.set_state(TargetState.TRANSLATED)
    return entry


def _decorate(content: str | None, entry: Entry, policy: MergePolicy) -> str | None:
    if content is None or not (policy.target_prefix or policy.target_suffix):
        return content
    source = entry.normalized_source()
    if source is not None and source.is_icu_message:
        return content
    return escape(policy.target_prefix) + content + escape(policy.target_suffix)


def _update_entry(
    entry: Entry,
    master_entry: Entry,
    *,
    target: Catalog,
    policy: MergePolicy,
    report: MergeReport,
) -> None:
    capabilities = entry.capabilities

    if capabilities.source and not entries_equivalent(master_entry, entry):
        entry.set_source(master_entry.source)
        if policy.is_default_language:
            entry.translate(target.content_from(master_entry))
            entry.set_state(TargetState.FINAL)
        elif entry.state is TargetState.FINAL:
            entry.set_state(TargetState.TRANSLATED)
        report.source_content_changed += 1

    if capabilities.references and not references_equivalent(
        master_entry.references, entry.references
    ):
        entry.set_references(master_entry.references)
        report.source_ref_changed += 1

    if capabilities.description_and_meaning and (
        entry.description != master_entry.description or entry.meaning != master_entry.meaning
    ):
        entry.set_description(master_entry.description)
        entry.set_meaning(master_entry.meaning)
        report.description_or_meaning_changed += 1


def _handle_unused(master: Catalog, target: Catalog, *, policy: MergePolicy) -> int:
    """Count (and optionally drop) target entries whose id left the master."""

    unused = 0
    for entry in target:
        if not entry.has_id or entry.id in master:
            continue
        if policy.remove_unused_ids:
            target.remove_by_id(entry.id)
        unused += 1
    return unused
