"""Enumeration types for the tracker."""

from enum import IntEnum, StrEnum


class Collection(StrEnum):
    """Named record collections, one per entity kind."""

    PROJECTS = "projects"
    IDEAS = "ideas"
    EVENTS = "events"
    TASKS = "tasks"
    SUBTASKS = "subtasks"


class SchemaVersion(IntEnum):
    """Schema revisions of the stored data.

    Version 1 uses the four-value task status; version 2 uses the eight-stage
    task workflow and adds timestamps.
    """

    V1 = 1
    V2 = 2


class SubtaskStage(StrEnum):
    """Forward-only subtask stages, in lifecycle order."""

    ANALYZE = "Analyze"
    DEVELOPMENT = "Development"
    TEST = "Test"
    PRODUCTION = "Production"


class LegacyTaskStatus(StrEnum):
    """Task ``doneStatus`` values of schema version 1."""

    PENDING = "pending"
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"
    OVERDUE = "overdue"


class TaskWorkflowStatus(StrEnum):
    """Task ``doneStatus`` values of schema version 2, in workflow order."""

    READY_TO_ANALYZE = "ready_to_analyze"
    COMPLETE_ANALYZE = "complete_analyze"
    READY_TO_DEVELOPMENT = "ready_to_development"
    COMPLETE_DEVELOPMENT = "complete_development"
    READY_TO_TEST = "ready_to_test"
    TEST_DONE = "test_done"
    READY_TO_PRODUCTION = "ready_to_production"
    PRODUCTION_DONE = "production_done"


class EventStatus(StrEnum):
    """Event ``status`` values."""

    PLANNING = "planning"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ChannelName(StrEnum):
    """Persistence channels, from highest to lowest fidelity."""

    REMOTE = "remote"
    FILE = "file"
    MEMORY = "memory"
