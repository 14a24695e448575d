from __future__ import annotations

from datetime import UTC, datetime

from rnaxref.domain.counters import CounterPool
from rnaxref.domain.model import IdentityKey
from rnaxref.domain.reconciliation import IncomingRecords
from rnaxref.domain.reconciliation.deduplicate import DUPLICATE_WITHIN_RUN


def test_first_match_wins_and_duplicates_are_counted() -> None:
    counters = CounterPool()
    incoming = IncomingRecords(source_pipeline="RNACentral", external_db_key=156, counters=counters)
    first = datetime(2024, 1, 1, tzinfo=UTC)
    second = datetime(2024, 6, 1, tzinfo=UTC)

    assert incoming.add_match("URS1", 42, now=first)
    assert not incoming.add_match("URS1", 42, now=second)

    assert len(incoming) == 1
    assert counters.get(DUPLICATE_WITHIN_RUN) == 1
    (record,) = incoming
    assert record.created_at == first
    assert record.modified_at == first


def test_same_rna_for_different_subjects_is_kept() -> None:
    counters = CounterPool()
    incoming = IncomingRecords(source_pipeline="RNACentral", external_db_key=156, counters=counters)

    incoming.add_match("URS1", 42)
    incoming.add_match("URS1", 43)

    assert len(incoming.records()) == 2
    assert IdentityKey("URS1", "RNACentral", 156, 43) in incoming
    assert counters.get(DUPLICATE_WITHIN_RUN) == 0


def test_records_carry_pipeline_and_db_key() -> None:
    incoming = IncomingRecords(
        source_pipeline="RNACentral",
        external_db_key=156,
        counters=CounterPool(),
    )
    incoming.add_match("URS1", 42)

    (record,) = incoming.records()
    assert record.source_pipeline == "RNACentral"
    assert record.external_db_key == 156
    assert record.key is None
    assert record.created_at.tzinfo is UTC
