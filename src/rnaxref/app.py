"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from rnaxref import __version__
from rnaxref.adapters.feeds import LocalFeedSource, download_feed
from rnaxref.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    connection_info,
    is_started,
    shares_single_connection,
    startup,
)
from rnaxref.config import get_pipeline_config, get_species_config, get_storage_config
from rnaxref.domain.orchestrator import RunSummary, log_run_summary, run_all_species
from rnaxref.domain.reconciliation import FeedDefinition, SpeciesReconciler

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rnaxref.config import PipelineConfig, StorageConfig
    from rnaxref.domain.model import Species
    from rnaxref.domain.ports import CrossReferenceUnitOfWork, FeedSource

UnitOfWorkFactory = Callable[[], "CrossReferenceUnitOfWork"]


log = getLogger(__name__)


def initialise_database(*, database_uri: str | None = None) -> str:
    """Create the schema if needed and return the connection description."""

    if not is_started():
        startup(database_uri=database_uri)
    return connection_info()


def feed_definitions(pipeline: PipelineConfig) -> tuple[FeedDefinition, ...]:
    return tuple(
        FeedDefinition(kind=location.kind, name=location.name, taxon_ids=location.taxon_ids)
        for location in pipeline.feeds
    )


def fetch_feeds(
    pipeline: PipelineConfig,
    *,
    storage: StorageConfig | None = None,
) -> LocalFeedSource:
    """Download remote feeds (once per day) and expose them as local files."""

    feeds_dir = (storage or get_storage_config()).feeds_dir()
    return LocalFeedSource(
        {
            location.name: download_feed(location.location, feeds_dir, name=location.name)
            for location in pipeline.feeds
        }
    )


def reconcile_cross_references(
    *,
    species_names: Sequence[str] | None = None,
    max_workers: int | None = None,
    pipeline: PipelineConfig | None = None,
    species: Sequence[Species] | None = None,
    feed_source: FeedSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> RunSummary:
    """Reconcile RNAcentral cross references for every selected species."""

    # configuration problems surface here, before any species task starts
    effective_pipeline = pipeline or get_pipeline_config()
    selected = tuple(species) if species is not None else get_species_config(species_names)

    workers = max_workers or effective_pipeline.max_workers
    if unit_of_work_factory is None:
        initialise_database()
        effective_uow: UnitOfWorkFactory = SqlAlchemyUnitOfWork
    else:
        effective_uow = unit_of_work_factory
    if shares_single_connection() and workers != 1:
        # sessions on one connection share a single transaction
        log.warning("Database uses a single shared connection; processing species one at a time")
        workers = 1

    log.info("RNAcentral cross-reference pipeline %s", __version__)
    log.info("   %s", connection_info())
    log.info("   started at %s", datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S"))
    log.info(
        "Starting reconciliation: pipeline=%s, xdb_key=%s, species=%s",
        effective_pipeline.source_pipeline,
        effective_pipeline.external_db_key,
        ", ".join(item.common_name for item in selected),
    )

    reconciler = SpeciesReconciler(
        feed_source=feed_source or fetch_feeds(effective_pipeline),
        unit_of_work_factory=effective_uow,
        feeds=feed_definitions(effective_pipeline),
        source_pipeline=effective_pipeline.source_pipeline,
        external_db_key=effective_pipeline.external_db_key,
    )
    summary = run_all_species(
        selected,
        reconciler,
        max_workers=workers,
    )
    log_run_summary(summary)
    return summary
