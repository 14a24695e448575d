"""Restrict feed processing to a single species."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rnaxref.domain.model import IncomingCandidate, Species


@dataclass(frozen=True, slots=True)
class SpeciesFilter:
    taxon_id: int

    @classmethod
    def for_species(cls, species: Species) -> SpeciesFilter:
        return cls(species.taxon_id)

    def accepts_taxon(self, taxon: str) -> bool:
        return taxon == str(self.taxon_id)

    def accepts(self, candidate: IncomingCandidate) -> bool:
        return self.accepts_taxon(candidate.taxon)
