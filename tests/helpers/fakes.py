"""In-memory implementations of the domain ports."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from rnaxref.domain.ports import CrossReferenceRepositories

if TYPE_CHECKING:
    from collections.abc import Collection, Iterator
    from types import TracebackType

    from rnaxref.domain.model import CrossReferenceRecord, Gene, IdentityKey, Transcript


@dataclass
class InMemorySubjectRepository:
    genes: dict[int, Gene] = field(default_factory=dict)
    transcripts: list[Transcript] = field(default_factory=list)
    external_ids: list[tuple[int, str, int]] = field(default_factory=list)
    gene_catalog_db_key: int = 20
    calls: list[tuple[str, object]] = field(default_factory=list)

    def add_gene(self, gene: Gene) -> None:
        self.genes[gene.subject_id] = gene

    def add_external_id(self, db_key: int, accession: str, subject_id: int) -> None:
        self.external_ids.append((db_key, accession, subject_id))

    def transcripts_by_accession(self, accession: str) -> list[Transcript]:
        self.calls.append(("transcripts_by_accession", accession))
        return [transcript for transcript in self.transcripts if transcript.accession == accession]

    def active_genes_by_external_accession(self, db_key: int, accession: str) -> list[Gene]:
        self.calls.append(("active_genes_by_external_accession", (db_key, accession)))
        subject_ids = sorted(
            {
                subject_id
                for key, value, subject_id in self.external_ids
                if key == db_key and value == accession
            }
        )
        return [
            self.genes[subject_id]
            for subject_id in subject_ids
            if subject_id in self.genes and self.genes[subject_id].active
        ]

    def gene_by_id(self, subject_id: int) -> Gene | None:
        self.calls.append(("gene_by_id", subject_id))
        return self.genes.get(subject_id)

    def active_genes_by_external_gene_id(self, accession: str) -> list[Gene]:
        self.calls.append(("active_genes_by_external_gene_id", accession))
        return self.active_genes_by_external_accession(self.gene_catalog_db_key, accession)


@dataclass
class InMemoryCrossReferenceRepository:
    """Store keyed by identity; ``species_by_subject`` scopes listing to a species."""

    records: dict[IdentityKey, CrossReferenceRecord] = field(default_factory=dict)
    species_by_subject: dict[int, int] = field(default_factory=dict)
    batches: list[tuple[str, list[object]]] = field(default_factory=list)
    fail_on: str | None = None

    def seed(self, record: CrossReferenceRecord, *, species_key: int) -> None:
        self.records[record.identity] = record
        self.species_by_subject[record.subject_id] = species_key

    def list_for_species(
        self,
        species_key: int,
        source_pipeline: str,
        external_db_key: int,
    ) -> list[CrossReferenceRecord]:
        if self.fail_on == "list":
            raise ConnectionError("store unreachable")
        return [
            record
            for record in self.records.values()
            if self.species_by_subject.get(record.subject_id) == species_key
            and record.source_pipeline == source_pipeline
            and record.external_db_key == external_db_key
        ]

    def insert_records(self, records: Collection[CrossReferenceRecord]) -> int:
        self.batches.append(("insert", list(records)))
        inserted = 0
        for record in records:
            if record.identity not in self.records:
                self.records[record.identity] = record
                inserted += 1
        return inserted

    def delete_records(self, records: Collection[CrossReferenceRecord]) -> int:
        self.batches.append(("delete", list(records)))
        deleted = 0
        for record in records:
            if self.records.pop(record.identity, None) is not None:
                deleted += 1
        return deleted

    def touch_modification_date(self, keys: Collection[IdentityKey]) -> int:
        self.batches.append(("touch", list(keys)))
        touched = 0
        for key in keys:
            record = self.records.get(key)
            if record is not None:
                self.records[key] = replace(record, modified_at=datetime.now(UTC))
                touched += 1
        return touched


class FakeUnitOfWork:
    def __init__(
        self,
        subjects: InMemorySubjectRepository,
        cross_references: InMemoryCrossReferenceRepository,
    ) -> None:
        self._repositories = CrossReferenceRepositories(
            subjects=subjects,
            cross_references=cross_references,
        )
        self.committed = 0
        self.rolled_back = 0

    @property
    def repositories(self) -> CrossReferenceRepositories:
        return self._repositories

    def __enter__(self) -> FakeUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed += 1

    def rollback(self) -> None:
        self.rolled_back += 1


class ListFeedSource:
    """Feed source over in-memory line lists; counts how often each feed is opened."""

    def __init__(self, feeds: dict[str, list[str]]) -> None:
        self.feeds = feeds
        self.opened: list[str] = []

    def open_lines(self, feed_name: str) -> Iterator[str]:
        self.opened.append(feed_name)
        return iter(list(self.feeds[feed_name]))
