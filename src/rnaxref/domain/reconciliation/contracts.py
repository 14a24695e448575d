"""Shared reconciliation contract components.

This module holds only:
- resolution outcome variants and the candidates they carry
- feed definitions binding a feed kind to its resolution strategy
- the exceptions raised by the line-level stages
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Literal

from rnaxref.domain.model import FeedKind, ResolutionStrategy


class ResolutionStatus(StrEnum):
    NO_MATCH = "no_match"
    UNIQUE_MATCH = "unique_match"
    MULTI_MATCH = "multi_match"


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """One gene or transcript a foreign accession could point to, by its own id."""

    label: str
    subject_id: int

    def describe(self) -> str:
        return f"{self.label} (RGD:{self.subject_id})"


@dataclass(frozen=True, slots=True, kw_only=True)
class NoMatch:
    status: Literal[ResolutionStatus.NO_MATCH] = ResolutionStatus.NO_MATCH


@dataclass(frozen=True, slots=True, kw_only=True)
class UniqueMatch:
    subject_id: int
    status: Literal[ResolutionStatus.UNIQUE_MATCH] = ResolutionStatus.UNIQUE_MATCH


@dataclass(frozen=True, slots=True, kw_only=True)
class MultiMatch:
    """Accession matched several subjects; kept for manual review only."""

    candidates: tuple[MatchCandidate, ...]
    kind: str = "genes"
    status: Literal[ResolutionStatus.MULTI_MATCH] = ResolutionStatus.MULTI_MATCH

    def __post_init__(self) -> None:
        if len(self.candidates) < 2:
            raise ValueError("Multi-match resolution needs at least two candidates")

    @property
    def subject_ids(self) -> tuple[int, ...]:
        return tuple(candidate.subject_id for candidate in self.candidates)

    def describe(self) -> str:
        return "  , ".join(candidate.describe() for candidate in self.candidates)


type ResolutionOutcome = NoMatch | UniqueMatch | MultiMatch


class MalformedLineError(ValueError):
    """Raised when a feed line cannot be turned into a candidate."""

    def __init__(self, message: str, *, line_number: int = 0) -> None:
        self.line_number = line_number
        super().__init__(message)


class UnexpectedTagError(MalformedLineError):
    """Raised when a line carries a db tag other than the feed's own."""

    def __init__(self, *, tag: str, expected: str, line_number: int = 0) -> None:
        self.tag = tag
        self.expected = expected
        super().__init__(
            f"unexpected db tag: {tag}; was expecting: {expected}",
            line_number=line_number,
        )


_STRATEGY_BY_KIND: Final[dict[FeedKind, ResolutionStrategy]] = {
    FeedKind.RGD: ResolutionStrategy.DIRECT_SUBJECT,
    FeedKind.REFSEQ: ResolutionStrategy.TRANSCRIPT_FIRST,
    FeedKind.ENSEMBL: ResolutionStrategy.EXTERNAL_GENE_ID,
}

_COUNTER_LABEL_BY_KIND: Final[dict[FeedKind, str]] = {
    FeedKind.RGD: "RgdId",
    FeedKind.REFSEQ: "RefSeq",
    FeedKind.ENSEMBL: "Ensembl",
}


@dataclass(frozen=True, slots=True, kw_only=True)
class FeedDefinition:
    """A feed to process: its kind, the name it is opened by, and who it applies to.

    ``taxon_ids`` restricts the feed to the given species; ``None`` means the
    feed carries lines for every species.
    """

    kind: FeedKind
    name: str
    taxon_ids: frozenset[int] | None = None

    @property
    def expected_tag(self) -> str:
        return self.kind.value

    @property
    def strategy(self) -> ResolutionStrategy:
        return _STRATEGY_BY_KIND[self.kind]

    @property
    def counter_label(self) -> str:
        return _COUNTER_LABEL_BY_KIND[self.kind]

    @property
    def resolves_auxiliary_accession(self) -> bool:
        return self.kind is FeedKind.ENSEMBL

    def applies_to(self, taxon_id: int) -> bool:
        return self.taxon_ids is None or taxon_id in self.taxon_ids

    def counter(self, prefix: str) -> str:
        """Per-feed counter name, e.g. ``matchByRefSeq``."""

        return f"{prefix}By{self.counter_label}"
