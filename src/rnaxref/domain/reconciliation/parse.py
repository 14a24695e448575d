"""Turn tab-delimited RNAcentral id-mapping lines into incoming candidates.

All id-mapping feeds share one six-column layout::

    URS0000008E6C   REFSEQ   NR_113675           7      rRNA    <empty>
    URS0000013967   RGD      2325598             10116  pre_miRNA  Mir21
    URS00000B9D9D   ENSEMBL  ENST00000516887.1   9606   snRNA   ENSG00000252696.1

Empty fields, including trailing ones, are significant and preserved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from rnaxref.domain.model import IncomingCandidate

from .contracts import MalformedLineError, UnexpectedTagError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rnaxref.domain.counters import CounterPool

    from .contracts import FeedDefinition
    from .species_filter import SpeciesFilter

log = logging.getLogger(__name__)

FEED_COLUMN_COUNT: Final[int] = 6
TAXON_COLUMN: Final[int] = 3

LINES_PROCESSED: Final[str] = "linesProcessedForSpecies"
MALFORMED_LINES: Final[str] = "malformedLines"
UNEXPECTED_TAG: Final[str] = "unexpectedTag"


def split_record(line: str) -> list[str]:
    """Split on literal tabs, dropping only the line terminator."""

    return line.rstrip("\r\n").split("\t")


def parse_line(
    line: str,
    *,
    line_number: int = 0,
    auxiliary_accession: bool = False,
) -> IncomingCandidate:
    """Parse one feed line; the db tag is carried through unchecked."""

    cols = split_record(line)
    if len(cols) != FEED_COLUMN_COUNT:
        raise MalformedLineError(
            f"expected {FEED_COLUMN_COUNT} columns, got {len(cols)}",
            line_number=line_number,
        )

    rna_central_id, tag, accession, taxon, rna_type, last = cols
    if not taxon.isdigit():
        raise MalformedLineError(f"unparsable taxon: {taxon!r}", line_number=line_number)

    return IncomingCandidate(
        rna_central_id=rna_central_id,
        source_tag=tag,
        raw_accession=accession,
        taxon=taxon,
        rna_type=rna_type,
        gene_symbol="" if auxiliary_accession else last,
        auxiliary_accession=last if auxiliary_accession else None,
        line_number=line_number,
    )


def ensure_expected_tag(candidate: IncomingCandidate, expected: str) -> None:
    if candidate.source_tag != expected:
        raise UnexpectedTagError(
            tag=candidate.source_tag,
            expected=expected,
            line_number=candidate.line_number,
        )


def lookup_accession(candidate: IncomingCandidate, feed: FeedDefinition) -> str:
    """Return the accession the feed's resolution strategy works on."""

    if feed.resolves_auxiliary_accession:
        return candidate.auxiliary_accession or ""
    return candidate.raw_accession


def read_candidates(
    lines: Iterable[str],
    *,
    feed: FeedDefinition,
    species_filter: SpeciesFilter,
    counters: CounterPool,
) -> Iterator[IncomingCandidate]:
    """Yield the candidates of ``feed`` that belong to the filtered species.

    Lines of other species are skipped without being counted, even when they
    are malformed. Malformed lines and lines with a foreign db tag of the
    filtered species are logged, counted and skipped.
    """

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        cols = split_record(line)
        if len(cols) > TAXON_COLUMN and not species_filter.accepts_taxon(cols[TAXON_COLUMN]):
            continue
        try:
            candidate = parse_line(
                line,
                line_number=line_number,
                auxiliary_accession=feed.resolves_auxiliary_accession,
            )
        except MalformedLineError as exc:
            counters.increment(MALFORMED_LINES)
            log.error("*** %s line %d: %s", feed.name, line_number, exc)
            continue

        try:
            ensure_expected_tag(candidate, feed.expected_tag)
        except UnexpectedTagError as exc:
            counters.increment(UNEXPECTED_TAG)
            log.warning("*** %s line %d: %s", feed.name, line_number, exc)
            continue

        counters.increment(LINES_PROCESSED)
        yield candidate
