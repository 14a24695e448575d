from __future__ import annotations

import pytest

from rnaxref.config import MissingConfigurationError
from rnaxref.ui import cli


def test_run_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli, "reconcile_cross_references", fake_reconcile)

    cli.main(["run"])

    assert captured == {"species_names": None, "max_workers": None}


def test_run_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(**kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli, "reconcile_cross_references", fake_reconcile)

    cli.main(["-v", "run", "--species", "rat", "--species", "mouse", "--workers", "4"])

    assert captured == {"species_names": ["rat", "mouse"], "max_workers": 4}


def test_invalid_worker_count_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "reconcile_cross_references", lambda **_: None)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run", "--workers", "0"])

    assert excinfo.value.code == 2


def test_configuration_error_exits_with_2(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_reconcile(**_: object) -> None:
        raise MissingConfigurationError("Missing configuration for: RNAXREF_XDB_KEY")

    monkeypatch.setattr(cli, "reconcile_cross_references", fake_reconcile)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run"])

    assert excinfo.value.code == 2


def test_runtime_error_exits_with_1(
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    def fake_reconcile(**_: object) -> None:
        raise ConnectionError("store unreachable")

    monkeypatch.setattr(cli, "reconcile_cross_references", fake_reconcile)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run"])

    assert excinfo.value.code == 1
    assert "store unreachable" in caplog.text


def test_init_db(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_initialise() -> str:
        calls.append("init")
        return "sqlite+pysqlite:///:memory:"

    monkeypatch.setattr(cli, "initialise_database", fake_initialise)

    cli.main(["init-db"])

    assert calls == ["init"]
