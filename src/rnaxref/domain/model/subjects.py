"""Local subjects (genes), their transcripts and the species they belong to."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class Gene:
    subject_id: int
    symbol: str
    species_key: int
    active: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class Transcript:
    """Transcript row; ``subject_id`` is the id of the owning gene."""

    transcript_id: int
    subject_id: int
    accession: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Species:
    key: int
    common_name: str
    taxon_id: int
    searchable: bool = True
