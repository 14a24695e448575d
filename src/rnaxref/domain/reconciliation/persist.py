"""Submit a reconciliation plan to the cross-reference store.

Batches go out in the order insert, delete, touch, and an empty batch is
never submitted. Transaction boundaries belong to the caller's unit of work.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rnaxref.domain.model import CrossReferenceRecord
    from rnaxref.domain.ports import CrossReferenceRepository

    from .plan import ReconciliationPlan

log = logging.getLogger(__name__)
log_inserted = logging.getLogger("rnaxref.audit.inserted")
log_deleted = logging.getLogger("rnaxref.audit.deleted")


@dataclass(slots=True)
class PersistenceResult:
    """Row counts reported by the store for one species."""

    inserted: int = 0
    deleted: int = 0
    touched: int = 0


def apply_plan(
    plan: ReconciliationPlan,
    repository: CrossReferenceRepository,
) -> PersistenceResult:
    result = PersistenceResult()

    if plan.to_insert:
        batch = _ordered(plan.to_insert)
        for record in batch:
            log_inserted.info(record.dump("|"))
        result.inserted = repository.insert_records(batch)

    if plan.to_delete:
        batch = _ordered(plan.to_delete)
        for record in batch:
            log_deleted.info(record.dump("|"))
        result.deleted = repository.delete_records(batch)

    if plan.to_match:
        result.touched = repository.touch_modification_date(
            [record.identity for record in _ordered(plan.to_match)]
        )

    log.debug(
        "persisted: inserted=%s, deleted=%s, touched=%s",
        result.inserted,
        result.deleted,
        result.touched,
    )
    return result


def _ordered(records: Iterable[CrossReferenceRecord]) -> list[CrossReferenceRecord]:
    return sorted(records, key=lambda record: record.identity)
