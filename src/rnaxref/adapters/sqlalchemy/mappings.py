"""SQLAlchemy table metadata for genes, transcripts and external ids."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Final

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    func,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

ACTIVE_STATUS: Final[str] = "ACTIVE"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

gene_table = Table(
    "gene",
    metadata,
    Column("rgd_id", Integer, primary_key=True, autoincrement=False),
    Column("symbol", String, nullable=False),
    Column("species_type_key", Integer, nullable=False),
    Column("object_status", String, nullable=False, default=ACTIVE_STATUS),
    Index("ix_gene_species", "species_type_key"),
)

transcript_table = Table(
    "transcript",
    metadata,
    Column("rgd_id", Integer, primary_key=True, autoincrement=False),
    Column("gene_rgd_id", Integer, ForeignKey("gene.rgd_id"), nullable=False),
    Column("acc_id", String, nullable=False),
    Index("ix_transcript_acc", "acc_id"),
)

# Holds both the gene ids used for lookups (GenBank, Ensembl, ...) and the
# cross references written by the pipeline, told apart by xdb_key/src_pipeline.
xdb_id_table = Table(
    "xdb_id",
    metadata,
    Column("acc_xdb_key", Integer, primary_key=True, autoincrement=True),
    Column("rgd_id", Integer, ForeignKey("gene.rgd_id"), nullable=False),
    Column("xdb_key", Integer, nullable=False),
    Column("acc_id", String, nullable=False),
    Column("src_pipeline", String, nullable=False),
    Column("creation_date", UTCDateTime(), nullable=False, server_default=func.now()),
    Column("modification_date", UTCDateTime(), nullable=False, server_default=func.now()),
    UniqueConstraint("rgd_id", "xdb_key", "acc_id", "src_pipeline"),
    Index("ix_xdb_id_lookup", "xdb_key", "acc_id"),
    Index("ix_xdb_id_pipeline", "src_pipeline", "xdb_key"),
)


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the metadata."""

    log.info("Creating all tables")
    metadata.create_all(engine)
