"""Run the per-species reconciliation across all configured species.

Each species is one task on a bounded thread pool. Species tasks share no
mutable state; their counters are merged once at join time. The first
failing task fails the whole run after the tasks already in flight finish.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rnaxref.domain.counters import CounterPool

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rnaxref.domain.model import Species
    from rnaxref.domain.reconciliation import SpeciesRunResult

log = logging.getLogger(__name__)

type ReconcileSpecies = Callable[[Species], SpeciesRunResult]


class SpeciesRunError(RuntimeError):
    """Raised when the reconciliation of one species fails."""

    def __init__(self, species: Species) -> None:
        self.species = species
        super().__init__(f"Reconciliation failed for species {species.common_name}")


@dataclass(slots=True, kw_only=True)
class RunSummary:
    """Aggregate of all species runs."""

    species: tuple[Species, ...]
    yields: dict[str, int]
    counters: dict[str, int]
    started_at: datetime
    finished_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def table_lines(self) -> list[str]:
        """Net yield per species, in input order, skipping species with zero yield."""

        lines: list[str] = []
        for species in self.species:
            count = self.yields.get(species.common_name, 0)
            if count:
                lines.append(f"{species.common_name:>12} - {count:7d}")
        return lines

    @property
    def elapsed_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


def run_all_species(
    species: Sequence[Species],
    reconcile: ReconcileSpecies,
    *,
    max_workers: int | None = None,
) -> RunSummary:
    started_at = datetime.now(UTC)
    yields = CounterPool()
    totals = CounterPool()
    workers = max_workers or os.cpu_count() or 1

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="species") as executor:
        futures: dict[Future[SpeciesRunResult], Species] = {
            executor.submit(reconcile, item): item for item in species
        }
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        failed = [future for future in done if future.exception() is not None]
        if failed:
            for future in pending:
                future.cancel()
            wait(pending)
            failed = [
                future
                for future in futures
                if not future.cancelled() and future.exception() is not None
            ]
            first = min(failed, key=lambda future: species.index(futures[future]))
            failed_species = futures[first]
            log.error("species run failed: %s", failed_species.common_name)
            raise SpeciesRunError(failed_species) from first.exception()

        for future in done:
            result = future.result()
            yields.add(result.species.common_name, result.net_yield)
            totals.merge(result.counters)

    return RunSummary(
        species=tuple(species),
        yields=yields.snapshot(),
        counters=totals.snapshot(),
        started_at=started_at,
    )


def log_run_summary(summary: RunSummary) -> None:
    log.info("")
    log.info("=== RNAcentral id count")
    for line in summary.table_lines():
        log.info(line)
    log.info("")
    log.info("===    time elapsed: %s", format_elapsed(summary.elapsed_seconds))
    log.info("")


def format_elapsed(seconds: float) -> str:
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours} hr {minutes} min {secs} sec"
    if minutes:
        return f"{minutes} min {secs} sec"
    return f"{secs} sec"
