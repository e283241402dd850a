"""The reference graph between collections.

Each edge names an array field of a source collection holding IDs of a
target collection, and what deleting either end does to the other.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from tracker.enums import Collection


class OnDelete(StrEnum):
    """Effect of deleting one end of a reference on the other end."""

    KEEP = "keep"
    """Leave the other record untouched."""

    STRIP = "strip"
    """Remove the deleted ID from the referencing array."""

    CASCADE = "cascade"
    """Delete every referenced record as well."""


@dataclass(frozen=True, slots=True)
class Reference:
    """One edge of the reference graph.

    Attributes:
        source: Collection holding the reference array.
        field: Name of the array field in ``source``.
        target: Collection whose IDs the array holds.
        on_source_delete: What happens to referenced targets when a source
            record is deleted.
        on_target_delete: What happens to referencing sources when a target
            record is deleted.
    """

    source: str
    field: str
    target: str
    on_source_delete: OnDelete = OnDelete.KEEP
    on_target_delete: OnDelete = OnDelete.KEEP


REFERENCES: Final[tuple[Reference, ...]] = (
    Reference(Collection.PROJECTS, "ideaId", Collection.IDEAS),
    Reference(Collection.PROJECTS, "eventId", Collection.EVENTS),
    Reference(
        Collection.PROJECTS,
        "taskId",
        Collection.TASKS,
        on_target_delete=OnDelete.STRIP,
    ),
    Reference(
        Collection.IDEAS,
        "taskIds",
        Collection.TASKS,
        on_source_delete=OnDelete.CASCADE,
        on_target_delete=OnDelete.STRIP,
    ),
    Reference(
        Collection.TASKS,
        "subtaskIds",
        Collection.SUBTASKS,
        on_source_delete=OnDelete.CASCADE,
        on_target_delete=OnDelete.STRIP,
    ),
)


def references_from(collection: str) -> tuple[Reference, ...]:
    """Edges whose source is ``collection``."""
    return tuple(ref for ref in REFERENCES if ref.source == collection)


def references_to(collection: str) -> tuple[Reference, ...]:
    """Edges whose target is ``collection``."""
    return tuple(ref for ref in REFERENCES if ref.target == collection)


def referenced_collections(collection: str) -> tuple[str, ...]:
    """Distinct target collections referenced by ``collection``, in edge order."""
    return tuple(dict.fromkeys(ref.target for ref in references_from(collection)))
