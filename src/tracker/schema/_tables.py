"""Declarative schema tables for every collection and schema version."""

from typing import Final

from tracker.enums import (
    Collection,
    EventStatus,
    LegacyTaskStatus,
    SchemaVersion,
    SubtaskStage,
    TaskWorkflowStatus,
)
from tracker.schema._fields import CollectionSchema, FieldSpec, anything, array, date, enum, text

SUBTASK_STAGES: Final = tuple(stage.value for stage in SubtaskStage)
LEGACY_TASK_STATUSES: Final = tuple(status.value for status in LegacyTaskStatus)
WORKFLOW_TASK_STATUSES: Final = tuple(status.value for status in TaskWorkflowStatus)
EVENT_STATUSES: Final = tuple(status.value for status in EventStatus)

_TIMESTAMPS: Final = (date("createdAt"), date("updatedAt"))


def _schema(collection: Collection, *fields: FieldSpec) -> CollectionSchema:
    return CollectionSchema(collection=collection.value, fields=fields)


_V1_PROJECTS = _schema(
    Collection.PROJECTS,
    text("id", required=True),
    text("topic", required=True),
    date("planDueDate", required=True),
    text("name", required=True),
    array("keywords"),
    array("ideaId"),
    array("eventId"),
    text("goal"),
    text("objective"),
    array("taskId"),
)

_V1_IDEAS = _schema(
    Collection.IDEAS,
    text("id", required=True),
    text("topic", required=True),
    date("planDueDate", required=True),
    text("name", required=True),
    array("keywords"),
    text("goals"),
    text("objectives"),
    array("taskIds"),
)

_V1_EVENTS = _schema(
    Collection.EVENTS,
    text("id", required=True),
    text("name", required=True),
    text("type", required=True),
    date("eventDate", required=True),
    anything("duration"),
    text("location"),
    text("description"),
    enum("status", EVENT_STATUSES),
)

_V1_TASKS = _schema(
    Collection.TASKS,
    text("id", required=True),
    text("name", required=True),
    date("dueDate", required=True),
    enum("doneStatus", LEGACY_TASK_STATUSES, required=True),
    text("notes"),
    array("subtaskIds"),
)

_V1_SUBTASKS = _schema(
    Collection.SUBTASKS,
    text("id", required=True),
    text("name", required=True),
    date("dueDate", required=True),
    enum("taskType", SUBTASK_STAGES, required=True),
    text("assignee"),
)

_V2_PROJECTS = _schema(Collection.PROJECTS, *_V1_PROJECTS.fields, *_TIMESTAMPS)

_V2_IDEAS = _schema(Collection.IDEAS, *_V1_IDEAS.fields, *_TIMESTAMPS)

_V2_EVENTS = _schema(
    Collection.EVENTS,
    *_V1_EVENTS.fields,
    array("resources"),
    *_TIMESTAMPS,
)

_V2_TASKS = _schema(
    Collection.TASKS,
    text("id", required=True),
    text("name", required=True),
    date("dueDate", required=True),
    enum("doneStatus", WORKFLOW_TASK_STATUSES, required=True),
    text("notes"),
    array("subtaskIds"),
    *_TIMESTAMPS,
)

_V2_SUBTASKS = _schema(
    Collection.SUBTASKS,
    *_V1_SUBTASKS.fields,
    text("description"),
    array("comments"),
    array("efforts"),
    *_TIMESTAMPS,
)

SCHEMAS: Final[dict[SchemaVersion, dict[str, CollectionSchema]]] = {
    SchemaVersion.V1: {
        s.collection: s
        for s in (_V1_PROJECTS, _V1_IDEAS, _V1_EVENTS, _V1_TASKS, _V1_SUBTASKS)
    },
    SchemaVersion.V2: {
        s.collection: s
        for s in (_V2_PROJECTS, _V2_IDEAS, _V2_EVENTS, _V2_TASKS, _V2_SUBTASKS)
    },
}

# Statuses that count a task as finished, per version
DONE_TASK_STATUSES: Final[dict[SchemaVersion, frozenset[str]]] = {
    SchemaVersion.V1: frozenset({LegacyTaskStatus.COMPLETE.value}),
    SchemaVersion.V2: frozenset({TaskWorkflowStatus.PRODUCTION_DONE.value}),
}

# Default doneStatus for new tasks, per version
DEFAULT_TASK_STATUS: Final[dict[SchemaVersion, str]] = {
    SchemaVersion.V1: LegacyTaskStatus.PENDING.value,
    SchemaVersion.V2: TaskWorkflowStatus.READY_TO_ANALYZE.value,
}
