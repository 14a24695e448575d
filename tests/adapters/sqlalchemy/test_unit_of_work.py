from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from rnaxref.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    build_engine,
    configured_engine,
    connection_info,
    is_started,
    shares_single_connection,
    shutdown,
    startup,
)
from tests.helpers.records import PIPELINE, XDB_KEY, make_record
from tests.helpers.store import seed_gene

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_startup_from_uri_creates_schema(tmp_path: Path) -> None:
    uri = f"sqlite+pysqlite:///{tmp_path / 'store.db'}"

    startup(database_uri=uri)

    assert is_started()
    assert connection_info().endswith("store.db")
    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.cross_references.list_for_species(3, PIPELINE, XDB_KEY) == []


def test_connection_info_hides_password() -> None:
    assert connection_info() == "not connected"

    engine = build_engine("sqlite+pysqlite:///:memory:")
    startup(engine=engine, force=True)

    assert connection_info() == "sqlite+pysqlite:///:memory:"


def test_unit_of_work_commits(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    seed_gene(sqlite_engine, 10, "Mir21", species_key=3)
    record = make_record("URS1", 10)

    with SqlAlchemyUnitOfWork() as uow:
        uow.repositories.cross_references.insert_records([record])
        uow.commit()

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.cross_references.list_for_species(3, PIPELINE, XDB_KEY) == [record]


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    seed_gene(sqlite_engine, 10, "Mir21", species_key=3)

    with pytest.raises(RuntimeError, match="boom"), SqlAlchemyUnitOfWork() as uow:
        uow.repositories.cross_references.insert_records([make_record("URS1", 10)])
        raise RuntimeError("boom")

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.cross_references.list_for_species(3, PIPELINE, XDB_KEY) == []


def test_repositories_unavailable_outside_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(StartupError):
        _ = SqlAlchemyUnitOfWork().repositories


def test_shares_single_connection_only_for_static_pool(tmp_path: Path) -> None:
    assert not shares_single_connection()

    startup(engine=build_engine("sqlite+pysqlite:///:memory:"), force=True)
    assert shares_single_connection()

    startup(engine=build_engine(f"sqlite+pysqlite:///{tmp_path / 'store.db'}"), force=True)
    assert not shares_single_connection()
