"""Domain model for RNAcentral cross-reference reconciliation."""

from __future__ import annotations

from .candidates import IncomingCandidate
from .cross_reference import CrossReferenceRecord, IdentityKey
from .enums import FEED_PROCESSING_ORDER, ExternalDatabase, FeedKind, ResolutionStrategy
from .subjects import Gene, Species, Transcript

__all__ = [
    "FEED_PROCESSING_ORDER",
    "CrossReferenceRecord",
    "ExternalDatabase",
    "FeedKind",
    "Gene",
    "IdentityKey",
    "IncomingCandidate",
    "ResolutionStrategy",
    "Species",
    "Transcript",
]
