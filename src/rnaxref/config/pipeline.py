"""Pipeline settings: which feeds to read and where records are written."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from rnaxref.domain.model import FeedKind

from .env import optional_env_var, optional_int_env_var, require_env_vars
from .errors import ConfigurationError
from .species import RAT_TAXON_ID

DEFAULT_PIPELINE_NAME: Final[str] = "RNACentral"

RNACENTRAL_MAPPINGS_URL: Final[str] = (
    "https://ftp.ebi.ac.uk/pub/databases/RNAcentral/current_release/id_mapping/database_mappings"
)
DEFAULT_REFSEQ_FEED: Final[str] = f"{RNACENTRAL_MAPPINGS_URL}/refseq.tsv"
DEFAULT_RGD_FEED: Final[str] = f"{RNACENTRAL_MAPPINGS_URL}/rgd.tsv"


@dataclass(frozen=True, slots=True)
class FeedLocation:
    """Where a feed lives (URL or local path) and which species it covers."""

    kind: FeedKind
    location: str
    taxon_ids: frozenset[int] | None = None

    @property
    def name(self) -> str:
        return self.kind.value.lower()


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    source_pipeline: str
    external_db_key: int
    feeds: tuple[FeedLocation, ...]
    max_workers: int | None = None


def get_pipeline_config() -> PipelineConfig:
    values = require_env_vars(("RNAXREF_XDB_KEY",))
    try:
        external_db_key = int(values["RNAXREF_XDB_KEY"])
    except ValueError as exc:
        raise ConfigurationError(
            f"RNAXREF_XDB_KEY must be an integer, got {values['RNAXREF_XDB_KEY']!r}"
        ) from exc

    max_workers = optional_int_env_var("RNAXREF_WORKERS")
    if max_workers is not None and max_workers < 1:
        raise ConfigurationError("RNAXREF_WORKERS must be at least 1")

    feeds = [
        FeedLocation(
            kind=FeedKind.REFSEQ,
            location=optional_env_var("RNAXREF_REFSEQ_FEED") or DEFAULT_REFSEQ_FEED,
        ),
        FeedLocation(
            kind=FeedKind.RGD,
            location=optional_env_var("RNAXREF_RGD_FEED") or DEFAULT_RGD_FEED,
            taxon_ids=frozenset({RAT_TAXON_ID}),
        ),
    ]
    ensembl_feed = optional_env_var("RNAXREF_ENSEMBL_FEED")
    if ensembl_feed is not None:
        feeds.append(FeedLocation(kind=FeedKind.ENSEMBL, location=ensembl_feed))

    return PipelineConfig(
        source_pipeline=optional_env_var("RNAXREF_PIPELINE") or DEFAULT_PIPELINE_NAME,
        external_db_key=external_db_key,
        feeds=tuple(feeds),
        max_workers=max_workers,
    )
