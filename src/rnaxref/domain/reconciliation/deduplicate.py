"""Intra-run deduplication of resolved cross references.

Several feeds can resolve the same RNAcentral id to the same subject (an RGD
line and a RefSeq line for one rat gene, or one line repeated across files).
The incoming set keeps the first record per identity tuple and counts the
rest as ``duplicateWithinRun``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from rnaxref.domain.model import CrossReferenceRecord, IdentityKey

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rnaxref.domain.counters import CounterPool

DUPLICATE_WITHIN_RUN: Final[str] = "duplicateWithinRun"


@dataclass(slots=True)
class IncomingRecords:
    """Incoming cross references of one species run, unique by identity."""

    source_pipeline: str
    external_db_key: int
    counters: CounterPool
    _records: dict[IdentityKey, CrossReferenceRecord] = field(
        default_factory=dict, init=False
    )

    def add_match(
        self,
        rna_central_id: str,
        subject_id: int,
        *,
        now: datetime | None = None,
    ) -> bool:
        """Record a unique match; return False when the identity was already present."""

        key = IdentityKey(rna_central_id, self.source_pipeline, self.external_db_key, subject_id)
        if key in self._records:
            self.counters.increment(DUPLICATE_WITHIN_RUN)
            return False

        stamp = now or datetime.now(UTC)
        self._records[key] = CrossReferenceRecord(
            external_id=rna_central_id,
            source_pipeline=self.source_pipeline,
            external_db_key=self.external_db_key,
            subject_id=subject_id,
            created_at=stamp,
            modified_at=stamp,
        )
        return True

    def records(self) -> frozenset[CrossReferenceRecord]:
        return frozenset(self._records.values())

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __iter__(self) -> Iterator[CrossReferenceRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
