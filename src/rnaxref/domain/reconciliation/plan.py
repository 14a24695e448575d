"""Three-way diff between incoming and resident cross references.

The plan is the contract between the diff (pure set arithmetic on identity
tuples) and persistence (batched store writes). Timestamps never take part
in the diff, so re-running with unchanged feeds yields only matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rnaxref.domain.model import CrossReferenceRecord


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationPlan:
    to_insert: frozenset[CrossReferenceRecord]
    to_delete: frozenset[CrossReferenceRecord]
    to_match: frozenset[CrossReferenceRecord]

    @property
    def net_yield(self) -> int:
        """Signed change in record count, used for reporting only."""

        return len(self.to_match) + len(self.to_insert) - len(self.to_delete)

    @property
    def is_empty(self) -> bool:
        return not (self.to_insert or self.to_delete or self.to_match)


def plan_reconciliation(
    incoming: Iterable[CrossReferenceRecord],
    resident: Iterable[CrossReferenceRecord],
) -> ReconciliationPlan:
    """Compute to-insert, to-delete and to-match sets by identity tuple.

    Matched records are taken from the resident side so they keep their store
    row key and creation date.
    """

    incoming_set = frozenset(incoming)
    resident_set = frozenset(resident)
    return ReconciliationPlan(
        to_insert=incoming_set - resident_set,
        to_delete=resident_set - incoming_set,
        to_match=frozenset(record for record in resident_set if record in incoming_set),
    )
