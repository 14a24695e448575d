"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import and_, delete, exists, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite

from rnaxref.adapters.sqlalchemy.mappings import (
    ACTIVE_STATUS,
    gene_table,
    transcript_table,
    xdb_id_table,
)
from rnaxref.domain.model import CrossReferenceRecord, ExternalDatabase, Gene, Transcript

if TYPE_CHECKING:
    from collections.abc import Collection

    from sqlalchemy import ColumnElement, Insert, Row
    from sqlalchemy.engine import CursorResult
    from sqlalchemy.orm import Session

    from rnaxref.domain.model import IdentityKey


def _gene_from_row(row: Row[Any]) -> Gene:
    return Gene(
        subject_id=row.rgd_id,
        symbol=row.symbol,
        species_key=row.species_type_key,
        active=row.object_status == ACTIVE_STATUS,
    )


def _record_from_row(row: Row[Any]) -> CrossReferenceRecord:
    return CrossReferenceRecord(
        external_id=row.acc_id,
        source_pipeline=row.src_pipeline,
        external_db_key=row.xdb_key,
        subject_id=row.rgd_id,
        created_at=row.creation_date,
        modified_at=row.modification_date,
        key=row.acc_xdb_key,
    )


def _identity_clause(
    external_id: str,
    source_pipeline: str,
    external_db_key: int,
    subject_id: int,
) -> ColumnElement[bool]:
    return and_(
        xdb_id_table.c.acc_id == external_id,
        xdb_id_table.c.src_pipeline == source_pipeline,
        xdb_id_table.c.xdb_key == external_db_key,
        xdb_id_table.c.rgd_id == subject_id,
    )


class SqlAlchemySubjectRepository:
    """Gene and transcript lookups for the resolution strategies."""

    def __init__(
        self,
        session: Session,
        *,
        gene_catalog_db_key: int = ExternalDatabase.ENSEMBL_GENES,
    ) -> None:
        self.session = session
        self._gene_catalog_db_key = gene_catalog_db_key

    def transcripts_by_accession(self, accession: str) -> list[Transcript]:
        stmt = (
            select(transcript_table)
            .where(transcript_table.c.acc_id == accession)
            .order_by(transcript_table.c.rgd_id)
        )
        return [
            Transcript(transcript_id=row.rgd_id, subject_id=row.gene_rgd_id, accession=row.acc_id)
            for row in self.session.execute(stmt)
        ]

    def active_genes_by_external_accession(self, db_key: int, accession: str) -> list[Gene]:
        stmt = (
            select(gene_table)
            .distinct()
            .join(xdb_id_table, xdb_id_table.c.rgd_id == gene_table.c.rgd_id)
            .where(xdb_id_table.c.xdb_key == db_key)
            .where(xdb_id_table.c.acc_id == accession)
            .where(gene_table.c.object_status == ACTIVE_STATUS)
            .order_by(gene_table.c.rgd_id)
        )
        return [_gene_from_row(row) for row in self.session.execute(stmt)]

    def gene_by_id(self, subject_id: int) -> Gene | None:
        stmt = select(gene_table).where(gene_table.c.rgd_id == subject_id)
        row = self.session.execute(stmt).one_or_none()
        return None if row is None else _gene_from_row(row)

    def active_genes_by_external_gene_id(self, accession: str) -> list[Gene]:
        return self.active_genes_by_external_accession(self._gene_catalog_db_key, accession)


class SqlAlchemyCrossReferenceRepository:
    """Cross-reference rows of one pipeline, addressed by identity tuple."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_species(
        self,
        species_key: int,
        source_pipeline: str,
        external_db_key: int,
    ) -> list[CrossReferenceRecord]:
        stmt = (
            select(xdb_id_table)
            .join(gene_table, gene_table.c.rgd_id == xdb_id_table.c.rgd_id)
            .where(gene_table.c.species_type_key == species_key)
            .where(xdb_id_table.c.src_pipeline == source_pipeline)
            .where(xdb_id_table.c.xdb_key == external_db_key)
            .order_by(xdb_id_table.c.acc_xdb_key)
        )
        return [_record_from_row(row) for row in self.session.execute(stmt)]

    def insert_records(self, records: Collection[CrossReferenceRecord]) -> int:
        inserted = 0
        for record in records:
            values = {
                "acc_id": record.external_id,
                "src_pipeline": record.source_pipeline,
                "xdb_key": record.external_db_key,
                "rgd_id": record.subject_id,
                "creation_date": record.created_at,
                "modification_date": record.modified_at,
            }
            stmt = self._insert_ignoring_duplicates(record)
            if stmt is None:
                continue
            inserted += self._rowcount(self.session.execute(stmt.values(**values)))
        return inserted

    def delete_records(self, records: Collection[CrossReferenceRecord]) -> int:
        deleted = 0
        for record in records:
            stmt = delete(xdb_id_table).where(_identity_clause(*record.identity))
            deleted += self._rowcount(self.session.execute(stmt))
        return deleted

    def touch_modification_date(
        self,
        keys: Collection[IdentityKey],
        *,
        now: datetime | None = None,
    ) -> int:
        stamp = now or datetime.now(UTC)
        touched = 0
        for key in keys:
            stmt = (
                update(xdb_id_table)
                .where(_identity_clause(*key))
                .values(modification_date=stamp)
            )
            touched += self._rowcount(self.session.execute(stmt))
        return touched

    def _insert_ignoring_duplicates(self, record: CrossReferenceRecord) -> Insert | None:
        dialect_name = self.session.get_bind().dialect.name
        if dialect_name == "sqlite":
            return sqlite.insert(xdb_id_table).on_conflict_do_nothing()
        if dialect_name == "postgresql":
            return postgresql.insert(xdb_id_table).on_conflict_do_nothing()

        already_present = self.session.execute(
            select(exists().where(_identity_clause(*record.identity)))
        ).scalar_one()
        return None if already_present else insert(xdb_id_table)

    @staticmethod
    def _rowcount(result: object) -> int:
        return max(cast("CursorResult[Any]", result).rowcount, 0)


if TYPE_CHECKING:
    from rnaxref.domain.ports.persistence import CrossReferenceRepository, SubjectRepository

    _session_stub = cast("Session", object())
    _subject_repo: SubjectRepository = SqlAlchemySubjectRepository(_session_stub)
    _xref_repo: CrossReferenceRepository = SqlAlchemyCrossReferenceRepository(_session_stub)
