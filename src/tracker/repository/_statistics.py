"""Read-side statistics over the five collections.

Every reducer is a pure function of the records and a fixed ``now``, so the
same data and the same ``now`` always give the same numbers. Records whose
date cannot be parsed are left out of the time-based counts.
"""

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tracker.enums import Collection, EventStatus, SchemaVersion
from tracker.schema import (
    DONE_TASK_STATUSES,
    EVENT_STATUSES,
    LEGACY_TASK_STATUSES,
    SUBTASK_STAGES,
    WORKFLOW_TASK_STATUSES,
    parse_date,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    import pendulum

    from tracker._types import Record


@dataclass(frozen=True, slots=True)
class LinkStatistics:
    """Totals for projects and ideas."""

    total: int
    with_tasks: int


@dataclass(frozen=True, slots=True)
class EventStatistics:
    total: int
    upcoming: int
    completed: int
    overdue: int
    by_status: dict[str, int]


@dataclass(frozen=True, slots=True)
class TaskStatistics:
    total: int
    with_subtasks: int
    past_due: int
    by_status: dict[str, int]


@dataclass(frozen=True, slots=True)
class SubtaskStatistics:
    total: int
    by_stage: dict[str, int]


@dataclass(frozen=True, slots=True)
class Statistics:
    """Aggregate counts across all collections.

    Attributes:
        projects: Project totals.
        ideas: Idea totals.
        events: Event totals and date-based counts.
        tasks: Task totals per status of the active schema version.
        subtasks: Subtask totals per stage.
        now: The reference time the date-based counts were computed for.
    """

    projects: LinkStatistics
    ideas: LinkStatistics
    events: EventStatistics
    tasks: TaskStatistics
    subtasks: SubtaskStatistics
    now: str

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return dataclasses.asdict(self)


def count_by(records: Iterable[Record], field: str, choices: Sequence[str]) -> dict[str, int]:
    """Count records per value of ``field``; values outside ``choices`` are ignored."""
    counts = dict.fromkeys(choices, 0)
    for record in records:
        value = record.get(field)
        if isinstance(value, str) and value in counts:
            counts[value] += 1
    return counts


def count_linked(records: Iterable[Record], field: str) -> int:
    """Count records whose array ``field`` is non-empty."""
    return sum(1 for record in records if isinstance(record.get(field), list) and record[field])


def link_statistics(records: Sequence[Record], field: str) -> LinkStatistics:
    return LinkStatistics(total=len(records), with_tasks=count_linked(records, field))


def event_statistics(events: Sequence[Record], now: pendulum.DateTime) -> EventStatistics:
    upcoming = 0
    overdue = 0
    for event in events:
        when = parse_date(event.get("eventDate"))
        if when is None:
            continue
        if when > now:
            upcoming += 1
        elif when < now and event.get("status") != EventStatus.COMPLETED:
            overdue += 1

    return EventStatistics(
        total=len(events),
        upcoming=upcoming,
        completed=sum(1 for event in events if event.get("status") == EventStatus.COMPLETED),
        overdue=overdue,
        by_status=count_by(events, "status", EVENT_STATUSES),
    )


def task_statistics(
    tasks: Sequence[Record],
    version: SchemaVersion,
    now: pendulum.DateTime,
) -> TaskStatistics:
    statuses = WORKFLOW_TASK_STATUSES if version == SchemaVersion.V2 else LEGACY_TASK_STATUSES
    done = DONE_TASK_STATUSES[version]

    past_due = 0
    for task in tasks:
        status = task.get("doneStatus")
        if isinstance(status, str) and status in done:
            continue
        due = parse_date(task.get("dueDate"))
        if due is not None and due < now:
            past_due += 1

    return TaskStatistics(
        total=len(tasks),
        with_subtasks=count_linked(tasks, "subtaskIds"),
        past_due=past_due,
        by_status=count_by(tasks, "doneStatus", statuses),
    )


def subtask_statistics(subtasks: Sequence[Record]) -> SubtaskStatistics:
    return SubtaskStatistics(total=len(subtasks), by_stage=count_by(subtasks, "taskType", SUBTASK_STAGES))


def compute_statistics(
    data: Mapping[str, Sequence[Record]],
    *,
    version: SchemaVersion,
    now: pendulum.DateTime,
) -> Statistics:
    """Compute statistics over all collections.

    Args:
        data: Records keyed by collection name. Missing collections count
            as empty.
        version: Schema version deciding which task statuses exist.
        now: Reference time for upcoming, overdue and past-due counts.

    Returns:
        The aggregated statistics.
    """

    def records(collection: Collection) -> Sequence[Record]:
        return data.get(collection.value, [])

    return Statistics(
        projects=link_statistics(records(Collection.PROJECTS), "taskId"),
        ideas=link_statistics(records(Collection.IDEAS), "taskIds"),
        events=event_statistics(records(Collection.EVENTS), now),
        tasks=task_statistics(records(Collection.TASKS), version, now),
        subtasks=subtask_statistics(records(Collection.SUBTASKS)),
        now=now.to_iso8601_string(),
    )
