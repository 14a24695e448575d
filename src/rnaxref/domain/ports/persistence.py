"""Ports for reading subjects and persisting cross-reference records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from rnaxref.domain.model import CrossReferenceRecord, Gene, IdentityKey, Transcript


@runtime_checkable
class SubjectRepository(Protocol):
    """Read-side lookups used by the resolution strategies."""

    def transcripts_by_accession(self, accession: str) -> Sequence[Transcript]: ...

    def active_genes_by_external_accession(
        self, db_key: int, accession: str
    ) -> Sequence[Gene]: ...

    def gene_by_id(self, subject_id: int) -> Gene | None: ...

    def active_genes_by_external_gene_id(self, accession: str) -> Sequence[Gene]: ...


@runtime_checkable
class CrossReferenceRepository(Protocol):
    """Read and write cross-reference records of one pipeline."""

    def list_for_species(
        self,
        species_key: int,
        source_pipeline: str,
        external_db_key: int,
    ) -> Sequence[CrossReferenceRecord]: ...

    def insert_records(self, records: Collection[CrossReferenceRecord]) -> int:
        """Insert records, silently skipping duplicates; return rows inserted."""
        ...

    def delete_records(self, records: Collection[CrossReferenceRecord]) -> int: ...

    def touch_modification_date(self, keys: Collection[IdentityKey]) -> int: ...


__all__ = ["CrossReferenceRepository", "SubjectRepository"]
