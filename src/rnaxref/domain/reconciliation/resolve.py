"""Resolve foreign accessions to local subjects.

Responsibilities of this stage:
- map one accession to zero, one or many subject ids through the lookup
  chain of the feed's resolution strategy
- classify the result as NO_MATCH / UNIQUE_MATCH / MULTI_MATCH
- count outcomes per feed and log ambiguous accessions for manual review

Out of scope for this stage:
- building cross-reference records (see ``deduplicate``)
- any write to the store
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from typing import TYPE_CHECKING, Final

from rnaxref.domain.model import ExternalDatabase, ResolutionStrategy

from .contracts import (
    MalformedLineError,
    MatchCandidate,
    MultiMatch,
    NoMatch,
    ResolutionOutcome,
    UniqueMatch,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rnaxref.domain.counters import CounterPool
    from rnaxref.domain.model import Gene, IncomingCandidate
    from rnaxref.domain.ports import SubjectRepository

    from .contracts import FeedDefinition

log = logging.getLogger(__name__)
log_multimatch = logging.getLogger("rnaxref.audit.multimatch")

MATCH: Final[str] = "match"
NO_MATCH: Final[str] = "noMatch"
MULTI_MATCH: Final[str] = "multimatch"

type Resolver = Callable[[str], ResolutionOutcome]


def strip_version(accession: str) -> str:
    """Drop a trailing ``.<version>`` suffix: ``ENSG00000258428.5`` -> ``ENSG00000258428``."""

    head, separator, _version = accession.rpartition(".")
    return head if separator else accession


def classify_genes(genes: Sequence[Gene]) -> ResolutionOutcome:
    if not genes:
        return NoMatch()
    if len(genes) == 1:
        return UniqueMatch(subject_id=genes[0].subject_id)
    return MultiMatch(
        candidates=tuple(MatchCandidate(gene.symbol, gene.subject_id) for gene in genes),
        kind="genes",
    )


def resolve_transcript_first(
    subjects: SubjectRepository,
    accession: str,
    *,
    fallback_db_key: int = ExternalDatabase.GENBANK_NUCLEOTIDE,
) -> ResolutionOutcome:
    """Match by transcript accession, falling back to genes carrying the accession."""

    transcripts = subjects.transcripts_by_accession(accession)
    if len(transcripts) == 1:
        return UniqueMatch(subject_id=transcripts[0].subject_id)
    if transcripts:
        return MultiMatch(
            candidates=tuple(
                MatchCandidate(transcript.accession, transcript.transcript_id)
                for transcript in transcripts
            ),
            kind="transcripts",
        )
    return classify_genes(subjects.active_genes_by_external_accession(fallback_db_key, accession))


def resolve_direct_subject(subjects: SubjectRepository, accession: str) -> ResolutionOutcome:
    """The accession is the local subject id itself."""

    try:
        subject_id = int(accession)
    except ValueError as exc:
        raise MalformedLineError(f"not a subject id: {accession!r}") from exc

    gene = subjects.gene_by_id(subject_id)
    if gene is None or not gene.active:
        return NoMatch()
    return UniqueMatch(subject_id=gene.subject_id)


def resolve_external_gene_id(subjects: SubjectRepository, accession: str) -> ResolutionOutcome:
    return classify_genes(subjects.active_genes_by_external_gene_id(strip_version(accession)))


def build_resolver(
    strategy: ResolutionStrategy,
    subjects: SubjectRepository,
    *,
    fallback_db_key: int = ExternalDatabase.GENBANK_NUCLEOTIDE,
) -> Resolver:
    match strategy:
        case ResolutionStrategy.TRANSCRIPT_FIRST:
            return partial(resolve_transcript_first, subjects, fallback_db_key=fallback_db_key)
        case ResolutionStrategy.DIRECT_SUBJECT:
            return partial(resolve_direct_subject, subjects)
        case ResolutionStrategy.EXTERNAL_GENE_ID:
            return partial(resolve_external_gene_id, subjects)


def record_outcome(
    outcome: ResolutionOutcome,
    *,
    feed: FeedDefinition,
    candidate: IncomingCandidate,
    accession: str,
    species_name: str,
    counters: CounterPool,
) -> None:
    """Count the outcome under the feed's label and log what needs review."""

    match outcome:
        case UniqueMatch():
            counters.increment(feed.counter(MATCH))
        case NoMatch():
            counters.increment(feed.counter(NO_MATCH))
            log.debug(
                "-- no match for %s gene %s  species %s",
                accession,
                candidate.gene_symbol,
                species_name,
            )
        case MultiMatch():
            counters.increment(feed.counter(MULTI_MATCH))
            log_multimatch.info(
                "%s: %s matches multiple %s: %s",
                species_name,
                accession,
                outcome.kind,
                outcome.describe(),
            )
