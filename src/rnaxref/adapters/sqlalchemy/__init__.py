"""SQLAlchemy adapter package for rnaxref."""

from __future__ import annotations

from .mappings import (
    ACTIVE_STATUS,
    create_all_tables,
    gene_table,
    metadata,
    transcript_table,
    xdb_id_table,
)
from .repositories import SqlAlchemyCrossReferenceRepository, SqlAlchemySubjectRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    connection_info,
    shutdown,
    startup,
)

__all__ = [
    "ACTIVE_STATUS",
    "SqlAlchemyCrossReferenceRepository",
    "SqlAlchemySubjectRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "connection_info",
    "create_all_tables",
    "gene_table",
    "metadata",
    "shutdown",
    "startup",
    "transcript_table",
    "xdb_id_table",
]
