"""Validated CRUD, cascading deletes and statistics over the collections.

Example:
    >>> from tracker.repository import Repository
    >>> from tracker.store import MemoryStore
    >>> repository = Repository(MemoryStore())
    >>> await repository.initialize()
    >>> idea = await repository.ideas.add(
    ...     {"topic": "Tooling", "name": "CLI", "planDueDate": "2025-03-01"}
    ... )
    >>> idea["id"]
    'idea_001'
"""

from tracker.repository._cascade import CascadePlan, CascadeStep, StepKind, plan_cascade
from tracker.repository._ids import ID_PREFIXES, IdCounters, format_id, parse_id
from tracker.repository._repository import (
    EXPORT_COLLECTIONS,
    Repository,
    resolve_collection,
    strip_markup,
)
from tracker.repository._statistics import (
    EventStatistics,
    LinkStatistics,
    Statistics,
    SubtaskStatistics,
    TaskStatistics,
    compute_statistics,
)
from tracker.repository._views import CollectionView

__all__ = [
    "EXPORT_COLLECTIONS",
    "ID_PREFIXES",
    "CascadePlan",
    "CascadeStep",
    "CollectionView",
    "EventStatistics",
    "IdCounters",
    "LinkStatistics",
    "Repository",
    "StepKind",
    "Statistics",
    "SubtaskStatistics",
    "TaskStatistics",
    "compute_statistics",
    "format_id",
    "parse_id",
    "plan_cascade",
    "resolve_collection",
    "strip_markup",
]
