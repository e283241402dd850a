"""Declarative collection schemas and the generic record validator."""

from tracker.schema._dates import is_valid_date, parse_date, utc_now_iso
from tracker.schema._fields import CollectionSchema, FieldKind, FieldSpec
from tracker.schema._tables import (
    DEFAULT_TASK_STATUS,
    DONE_TASK_STATUSES,
    EVENT_STATUSES,
    LEGACY_TASK_STATUSES,
    SCHEMAS,
    SUBTASK_STAGES,
    WORKFLOW_TASK_STATUSES,
)
from tracker.schema._validator import allowed_fields, get_schema, validate_record

__all__ = [
    "DEFAULT_TASK_STATUS",
    "DONE_TASK_STATUSES",
    "EVENT_STATUSES",
    "LEGACY_TASK_STATUSES",
    "SCHEMAS",
    "SUBTASK_STAGES",
    "WORKFLOW_TASK_STATUSES",
    "CollectionSchema",
    "FieldKind",
    "FieldSpec",
    "allowed_fields",
    "get_schema",
    "is_valid_date",
    "parse_date",
    "utc_now_iso",
    "validate_record",
]
