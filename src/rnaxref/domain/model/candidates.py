"""Transient values derived from a single feed line."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class IncomingCandidate:
    rna_central_id: str
    source_tag: str
    raw_accession: str
    taxon: str
    rna_type: str
    gene_symbol: str
    auxiliary_accession: str | None = None
    line_number: int = 0
