"""Reconciliation core for RNAcentral cross references.

Layered flow for one species:
1) parse feed lines into incoming candidates
2) keep the lines of the species being processed
3) resolve each accession to zero, one or many local subjects
4) collect unique matches into a deduplicated incoming set
5) diff the incoming set against the records already in the store
6) submit insert, delete and touch batches
"""

from __future__ import annotations

from .contracts import (
    FeedDefinition,
    MalformedLineError,
    MatchCandidate,
    MultiMatch,
    NoMatch,
    ResolutionOutcome,
    ResolutionStatus,
    UnexpectedTagError,
    UniqueMatch,
)
from .deduplicate import IncomingRecords
from .engine import SpeciesReconciler, SpeciesRunResult
from .persist import PersistenceResult, apply_plan
from .plan import ReconciliationPlan, plan_reconciliation
from .species_filter import SpeciesFilter

__all__ = [
    "FeedDefinition",
    "IncomingRecords",
    "MalformedLineError",
    "MatchCandidate",
    "MultiMatch",
    "NoMatch",
    "PersistenceResult",
    "ReconciliationPlan",
    "ResolutionOutcome",
    "ResolutionStatus",
    "SpeciesFilter",
    "SpeciesReconciler",
    "SpeciesRunResult",
    "UnexpectedTagError",
    "UniqueMatch",
    "apply_plan",
    "plan_reconciliation",
]
