"""Per-species reconciliation run.

The engine composes the line-level stages (parse, species filter, resolve,
deduplicate) with the set-level stages (plan, persist) for one species. It
owns all species-scoped state; nothing here is shared between species except
the lock that keeps summary blocks from interleaving in the log.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Lock
from typing import TYPE_CHECKING

from rnaxref.domain.counters import CounterPool
from rnaxref.domain.model import FEED_PROCESSING_ORDER, ExternalDatabase

from .contracts import FeedDefinition, MalformedLineError, UniqueMatch
from .deduplicate import DUPLICATE_WITHIN_RUN, IncomingRecords
from .parse import LINES_PROCESSED, MALFORMED_LINES, lookup_accession, read_candidates
from .persist import PersistenceResult, apply_plan
from .plan import ReconciliationPlan, plan_reconciliation
from .resolve import MATCH, MULTI_MATCH, NO_MATCH, build_resolver, record_outcome
from .species_filter import SpeciesFilter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rnaxref.domain.model import Species
    from rnaxref.domain.ports import CrossReferenceUnitOfWork, FeedSource, SubjectRepository

log = logging.getLogger(__name__)

type UnitOfWorkFactory = Callable[[], CrossReferenceUnitOfWork]


@dataclass(slots=True, kw_only=True)
class SpeciesRunResult:
    """Outcome of one species run."""

    species: Species
    plan: ReconciliationPlan
    persistence: PersistenceResult
    counters: dict[str, int]

    @property
    def net_yield(self) -> int:
        return self.plan.net_yield


def ordered_feeds(feeds: Iterable[FeedDefinition]) -> list[FeedDefinition]:
    """Local-authority feed first, then the catalog feeds."""

    return sorted(feeds, key=lambda feed: FEED_PROCESSING_ORDER.index(feed.kind))


@dataclass(slots=True, kw_only=True)
class SpeciesReconciler:
    """Reconcile the cross references of one species against the store."""

    feed_source: FeedSource
    unit_of_work_factory: UnitOfWorkFactory
    feeds: tuple[FeedDefinition, ...]
    source_pipeline: str
    external_db_key: int
    fallback_db_key: int = ExternalDatabase.GENBANK_NUCLEOTIDE
    summary_lock: Lock = field(default_factory=Lock)

    def __call__(self, species: Species) -> SpeciesRunResult:
        counters = CounterPool()
        log.debug("START for %s", species.common_name)

        with self.unit_of_work_factory() as uow:
            repositories = uow.repositories
            incoming = IncomingRecords(
                source_pipeline=self.source_pipeline,
                external_db_key=self.external_db_key,
                counters=counters,
            )
            processed_feeds: list[FeedDefinition] = []
            for feed in ordered_feeds(self.feeds):
                if not feed.applies_to(species.taxon_id):
                    continue
                self._process_feed(
                    feed,
                    species=species,
                    subjects=repositories.subjects,
                    incoming=incoming,
                    counters=counters,
                )
                processed_feeds.append(feed)

            log.debug("QC: get %s ids in store for %s", self.source_pipeline, species.common_name)
            resident = repositories.cross_references.list_for_species(
                species.key,
                self.source_pipeline,
                self.external_db_key,
            )
            plan = plan_reconciliation(incoming, resident)
            persistence = apply_plan(plan, repositories.cross_references)
            uow.commit()

        result = SpeciesRunResult(
            species=species,
            plan=plan,
            persistence=persistence,
            counters=counters.snapshot(),
        )
        self._log_summary(result, feeds=processed_feeds)
        return result

    def _process_feed(
        self,
        feed: FeedDefinition,
        *,
        species: Species,
        subjects: SubjectRepository,
        incoming: IncomingRecords,
        counters: CounterPool,
    ) -> None:
        resolver = build_resolver(feed.strategy, subjects, fallback_db_key=self.fallback_db_key)
        candidates = read_candidates(
            self.feed_source.open_lines(feed.name),
            feed=feed,
            species_filter=SpeciesFilter.for_species(species),
            counters=counters,
        )
        for candidate in candidates:
            accession = lookup_accession(candidate, feed)
            try:
                outcome = resolver(accession)
            except MalformedLineError as exc:
                counters.increment(MALFORMED_LINES)
                log.error("*** %s line %d: %s", feed.name, candidate.line_number, exc)
                continue

            record_outcome(
                outcome,
                feed=feed,
                candidate=candidate,
                accession=accession,
                species_name=species.common_name,
                counters=counters,
            )
            if isinstance(outcome, UniqueMatch):
                incoming.add_match(candidate.rna_central_id, outcome.subject_id)

    def _log_summary(self, result: SpeciesRunResult, *, feeds: Iterable[FeedDefinition]) -> None:
        counts = result.counters
        with self.summary_lock:
            log.info("===")
            log.info("summary for %s", result.species.common_name)
            log.info("   lines processed      = %s", _thousands(counts.get(LINES_PROCESSED, 0)))
            for feed in feeds:
                for prefix, caption in (
                    (MATCH, "match"),
                    (NO_MATCH, "no match"),
                    (MULTI_MATCH, "multimatch"),
                ):
                    value = counts.get(feed.counter(prefix), 0)
                    if value:
                        label = f"{caption} by {feed.counter_label}"
                        log.info("   %-20s = %s", label, _thousands(value))
            for name, caption in (
                (DUPLICATE_WITHIN_RUN, "duplicates in run"),
                (MALFORMED_LINES, "malformed lines"),
            ):
                value = counts.get(name, 0)
                if value:
                    log.info("   %-20s = %s", caption, _thousands(value))

            plan = result.plan
            if plan.is_empty:
                return
            log.info("")
            if plan.to_insert:
                log.info(
                    "  inserted %s ids : %s", self.source_pipeline, _thousands(len(plan.to_insert))
                )
            if plan.to_delete:
                log.info(
                    "  deleted %s ids : %s", self.source_pipeline, _thousands(len(plan.to_delete))
                )
            if plan.to_match:
                log.info(
                    "  matching %s ids : %s", self.source_pipeline, _thousands(len(plan.to_match))
                )


def _thousands(value: int) -> str:
    return f"{value:,}"
