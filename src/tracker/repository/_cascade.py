"""Planning cascading deletes over the reference graph.

Deleting a record walks the graph depth first: children reached through
``cascade`` edges are deleted before their parent, and the deleted ID is
stripped from every array reaching it through a ``strip`` edge before the
record itself is removed. Planning is pure; the repository executes the
steps in order.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from tracker.relations import OnDelete, references_from, references_to

if TYPE_CHECKING:
    from collections.abc import Callable

    from tracker._types import Record


class StepKind(StrEnum):
    STRIP = "strip"
    REMOVE = "remove"


@dataclass(frozen=True, slots=True)
class CascadeStep:
    """One write of a cascading delete.

    Attributes:
        kind: Whether the step strips a reference or removes a record.
        collection: Collection written by the step.
        record_id: The deleted record's ID.
        field: Array field stripped, for strip steps.
    """

    kind: StepKind
    collection: str
    record_id: str
    field: str | None = None

    def describe(self) -> str:
        if self.kind is StepKind.STRIP:
            return f"stripped {self.record_id} from {self.collection}.{self.field}"
        return f"removed {self.collection}/{self.record_id}"


@dataclass(frozen=True, slots=True)
class CascadePlan:
    """Ordered steps of a cascading delete.

    Attributes:
        steps: Writes to perform, in order.
        skipped: (collection, id) pairs of referenced children that no longer
            exist and are therefore not deleted.
    """

    steps: tuple[CascadeStep, ...]
    skipped: tuple[tuple[str, str], ...] = field(default=())

    @property
    def removed(self) -> tuple[tuple[str, str], ...]:
        """(collection, id) of every record the plan removes."""
        return tuple((s.collection, s.record_id) for s in self.steps if s.kind is StepKind.REMOVE)


def plan_cascade(
    collection: str,
    record_id: str,
    find: Callable[[str, str], Record | None],
) -> CascadePlan:
    """Plan the deletion of a record and everything that depends on it.

    Args:
        collection: Collection of the record to delete.
        record_id: ID of the record to delete.
        find: Returns a record by collection and ID, or None if absent.

    Returns:
        The plan. The root record is assumed to exist; if it does not, it is
        reported as skipped and the plan has no steps.
    """
    steps: list[CascadeStep] = []
    skipped: list[tuple[str, str]] = []
    visited: set[tuple[str, str]] = set()

    def visit(current: str, current_id: str) -> None:
        if (current, current_id) in visited:
            return
        visited.add((current, current_id))

        record = find(current, current_id)
        if record is None:
            skipped.append((current, current_id))
            return

        for ref in references_from(current):
            if ref.on_source_delete is not OnDelete.CASCADE:
                continue
            children = record.get(ref.field)
            if not isinstance(children, list):
                continue
            for child_id in children:
                if isinstance(child_id, str):
                    visit(ref.target, child_id)

        for ref in references_to(current):
            if ref.on_target_delete is OnDelete.STRIP:
                steps.append(CascadeStep(StepKind.STRIP, ref.source, current_id, ref.field))

        steps.append(CascadeStep(StepKind.REMOVE, current, current_id))

    visit(collection, record_id)
    return CascadePlan(steps=tuple(steps), skipped=tuple(skipped))


def strip_reference(records: list[Record], field: str, record_id: str) -> list[int]:
    """Remove ``record_id`` from ``field`` of every record, in place.

    Returns:
        Indexes of the records that changed.
    """
    changed: list[int] = []
    for index, record in enumerate(records):
        ids = record.get(field)
        if isinstance(ids, list) and record_id in ids:
            record[field] = [ref_id for ref_id in ids if ref_id != record_id]
            changed.append(index)
    return changed
