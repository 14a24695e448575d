"""Domain port definitions for adapters."""

from __future__ import annotations

from .feeds import FeedSource
from .persistence import CrossReferenceRepository, SubjectRepository
from .unit_of_work import (
    CrossReferenceRepositories,
    CrossReferenceUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CrossReferenceRepositories",
    "CrossReferenceRepository",
    "CrossReferenceUnitOfWork",
    "FeedSource",
    "RepositoryCollection",
    "SubjectRepository",
    "UnitOfWork",
]
