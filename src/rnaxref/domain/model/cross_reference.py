"""Cross-reference records linking a foreign accession to a local subject.

Equality and hashing of ``CrossReferenceRecord`` only consider the identity
tuple ``(external_id, source_pipeline, external_db_key, subject_id)``. Two
records differing in timestamps or store row key are the same record for
reconciliation purposes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import NamedTuple


class IdentityKey(NamedTuple):
    external_id: str
    source_pipeline: str
    external_db_key: int
    subject_id: int


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True, kw_only=True)
class CrossReferenceRecord:
    external_id: str
    source_pipeline: str
    external_db_key: int
    subject_id: int

    created_at: datetime = field(default_factory=_utcnow, compare=False)
    modified_at: datetime = field(default_factory=_utcnow, compare=False)
    key: int | None = field(default=None, compare=False)

    @property
    def identity(self) -> IdentityKey:
        return IdentityKey(
            self.external_id,
            self.source_pipeline,
            self.external_db_key,
            self.subject_id,
        )

    def dump(self, separator: str = "|") -> str:
        """Render the record as one audit-log line."""

        fields = (
            "" if self.key is None else str(self.key),
            str(self.subject_id),
            str(self.external_db_key),
            self.external_id,
            self.source_pipeline,
            self.created_at.isoformat(),
            self.modified_at.isoformat(),
        )
        return separator.join(fields)
