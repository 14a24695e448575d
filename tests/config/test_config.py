from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rnaxref.config import (
    DEFAULT_SPECIES,
    ConfigurationError,
    MissingConfigurationError,
    get_database_config,
    get_pipeline_config,
    get_species_config,
    get_storage_config,
    optional_int_env_var,
    require_env_vars,
    select_species,
)
from rnaxref.config.pipeline import DEFAULT_REFSEQ_FEED, DEFAULT_RGD_FEED
from rnaxref.domain.model import FeedKind, Species

if TYPE_CHECKING:
    from pathlib import Path

PIPELINE_VARS = (
    "RNAXREF_XDB_KEY",
    "RNAXREF_PIPELINE",
    "RNAXREF_REFSEQ_FEED",
    "RNAXREF_RGD_FEED",
    "RNAXREF_ENSEMBL_FEED",
    "RNAXREF_WORKERS",
    "RNAXREF_SPECIES",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in PIPELINE_VARS:
        monkeypatch.delenv(name, raising=False)


def test_require_env_vars_reports_all_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RNAXREF_PIPELINE", "  ")

    with pytest.raises(MissingConfigurationError) as excinfo:
        require_env_vars(["RNAXREF_XDB_KEY", "RNAXREF_PIPELINE"])

    assert str(excinfo.value) == "Missing configuration for: RNAXREF_PIPELINE, RNAXREF_XDB_KEY"


def test_optional_int_env_var(monkeypatch: pytest.MonkeyPatch) -> None:
    assert optional_int_env_var("RNAXREF_WORKERS") is None
    monkeypatch.setenv("RNAXREF_WORKERS", "four")

    with pytest.raises(ConfigurationError):
        optional_int_env_var("RNAXREF_WORKERS")


def test_pipeline_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RNAXREF_XDB_KEY", "156")

    config = get_pipeline_config()

    assert config.source_pipeline == "RNACentral"
    assert config.external_db_key == 156
    assert config.max_workers is None
    assert [(feed.kind, feed.location) for feed in config.feeds] == [
        (FeedKind.REFSEQ, DEFAULT_REFSEQ_FEED),
        (FeedKind.RGD, DEFAULT_RGD_FEED),
    ]
    assert config.feeds[0].taxon_ids is None
    assert config.feeds[1].taxon_ids == frozenset({10116})
    assert config.feeds[1].name == "rgd"


def test_pipeline_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RNAXREF_XDB_KEY", "156")
    monkeypatch.setenv("RNAXREF_PIPELINE", "RNACentralTest")
    monkeypatch.setenv("RNAXREF_REFSEQ_FEED", str(tmp_path / "refseq.tsv"))
    monkeypatch.setenv("RNAXREF_ENSEMBL_FEED", str(tmp_path / "ensembl.tsv"))
    monkeypatch.setenv("RNAXREF_WORKERS", "3")

    config = get_pipeline_config()

    assert config.source_pipeline == "RNACentralTest"
    assert config.max_workers == 3
    assert config.feeds[0].location == str(tmp_path / "refseq.tsv")
    assert config.feeds[-1].kind is FeedKind.ENSEMBL


def test_pipeline_requires_xdb_key() -> None:
    with pytest.raises(MissingConfigurationError):
        get_pipeline_config()


@pytest.mark.parametrize(("name", "value"), [("RNAXREF_XDB_KEY", "abc"), ("RNAXREF_WORKERS", "0")])
def test_pipeline_rejects_invalid_values(
    monkeypatch: pytest.MonkeyPatch,
    name: str,
    value: str,
) -> None:
    monkeypatch.setenv("RNAXREF_XDB_KEY", "156")
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        get_pipeline_config()


def test_select_species_keeps_universe_order() -> None:
    selected = select_species(["Rat", " human "])

    assert [species.common_name for species in selected] == ["human", "rat"]


def test_select_species_defaults_to_searchable() -> None:
    universe = (
        Species(key=1, common_name="human", taxon_id=9606),
        Species(key=8, common_name="hidden", taxon_id=1, searchable=False),
    )

    assert select_species(None, universe=universe) == universe[:1]
    assert select_species(None) == DEFAULT_SPECIES


def test_select_species_rejects_unknown_names() -> None:
    with pytest.raises(ConfigurationError, match="unicorn"):
        select_species(["rat", "unicorn"])


def test_species_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RNAXREF_SPECIES", "mouse,rat")

    assert [species.common_name for species in get_species_config()] == ["mouse", "rat"]


def test_storage_and_database_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RNAXREF_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("DATABASE_URI", raising=False)

    storage = get_storage_config()

    assert storage.feeds_dir() == tmp_path.resolve() / "feeds"
    assert get_database_config().uri == f"sqlite+pysqlite:///{tmp_path.resolve() / 'rnaxref.db'}"

    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://rgd@db/rgd")
    assert get_database_config().uri == "postgresql+psycopg://rgd@db/rgd"
