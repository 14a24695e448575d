"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class FeedKind(StrEnum):
    """RNAcentral id-mapping feeds; the value is the db tag found in column 2."""

    RGD = "RGD"
    REFSEQ = "REFSEQ"
    ENSEMBL = "ENSEMBL"


class ResolutionStrategy(StrEnum):
    TRANSCRIPT_FIRST = "transcript_first"
    DIRECT_SUBJECT = "direct_subject"
    EXTERNAL_GENE_ID = "external_gene_id"


class ExternalDatabase(IntEnum):
    """Well-known external database keys of the local store."""

    GENBANK_NUCLEOTIDE = 1
    ENSEMBL_GENES = 20


# local authority first, then catalog feeds
FEED_PROCESSING_ORDER: tuple[FeedKind, ...] = (FeedKind.RGD, FeedKind.REFSEQ, FeedKind.ENSEMBL)
