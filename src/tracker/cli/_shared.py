# pyright: reportExplicitAny=false, reportAny=false
"""Shared CLI utilities: exit codes, field parsing and output formatting."""

from contextlib import asynccontextmanager
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

import orjson
from rich.table import Table

from tracker.config import parse_string_value
from tracker.exceptions import SchemaError
from tracker.repository import Repository, resolve_collection
from tracker.schema import get_schema
from tracker.store import build_store

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Sequence

    from rich.console import Console

    from tracker._types import Record
    from tracker.cli._context import CLIContext

# Columns shown by ``tracker list`` per collection, after the ID
LIST_COLUMNS: dict[str, tuple[str, ...]] = {
    "projects": ("name", "topic", "planDueDate", "taskId"),
    "ideas": ("name", "topic", "planDueDate", "taskIds"),
    "events": ("name", "type", "eventDate", "status"),
    "tasks": ("name", "dueDate", "doneStatus", "subtaskIds"),
    "subtasks": ("name", "dueDate", "taskType", "assignee"),
}


class ExitCode(IntEnum):
    """Exit codes of tracker commands."""

    SUCCESS = 0
    ERROR = 1


def exit_with_error(message: str, *, console: Console) -> Never:
    """Print an error message in red and exit with ExitCode.ERROR.

    Raises:
        SystemExit: Always.
    """
    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(ExitCode.ERROR)


def format_json(data: Any) -> str:
    """Format data as indented JSON."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")


def parse_fields(collection: str, assignments: Sequence[str], version: int) -> Record:
    """Turn ``key=value`` tokens into a partial record.

    Array fields accept a JSON array or a comma-separated list; other values
    go through the same type inference as environment variables.

    Raises:
        SchemaError: If a token has no ``=``.
    """
    schema = get_schema(collection, version)
    record: Record = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        if not sep or not key:
            msg = f"Expected key=value, received: {assignment!r}"
            raise SchemaError(msg, collection=collection, expected="key=value")
        if key in schema.array_fields:
            record[key] = _parse_array(raw)
        elif key == "id" or (spec := schema.field(key)) is None or spec.kind != "any":
            record[key] = raw
        else:
            record[key] = parse_string_value(raw)
    return record


def _parse_array(raw: str) -> list[Any]:
    stripped = raw.strip()
    if stripped.startswith("["):
        parsed = parse_string_value(stripped)
        if isinstance(parsed, list):
            return parsed
    return [item.strip() for item in stripped.split(",") if item.strip()]


def records_table(collection: str, records: Sequence[Record]) -> Table:
    """Render records of a collection as a rich table."""
    name = resolve_collection(collection)
    columns = LIST_COLUMNS[name]
    table = Table(title=f"{name} ({len(records)})")
    table.add_column("id", style="cyan", no_wrap=True)
    for column in columns:
        table.add_column(column)

    for record in records:
        cells = [_cell(record.get(column)) for column in columns]
        table.add_row(str(record.get("id", "")), *cells)
    return table


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


@asynccontextmanager
async def open_repository(ctx: CLIContext, *, check_version: bool = True) -> AsyncGenerator[Repository]:
    """Build the configured store and repository, closing the store afterwards.

    Args:
        ctx: CLI context holding configuration and logger.
        check_version: Verify (or establish) the schema version tag first.
    """
    store = build_store(ctx.config.storage, logger=ctx.logger)
    repository = Repository(store, schema_version=ctx.config.schema_version, logger=ctx.logger)
    try:
        if check_version:
            _ = await repository.initialize()
        yield repository
    finally:
        await store.aclose()
