# pyright: reportUnusedCallResult=false, reportUnusedFunction=false, reportAny=false
# ruff: noqa: D415, FBT002
"""Record commands: list, show, add, update, delete and advance."""

from typing import TYPE_CHECKING, Annotated, Any, Literal

import anyio
import orjson
from cyclopts import App, Parameter

from tracker.cli._context import CLIContext
from tracker.cli._shared import exit_with_error, format_json, open_repository, parse_fields, records_table
from tracker.enums import Collection
from tracker.exceptions import SchemaError, TrackerError

if TYPE_CHECKING:
    from tracker._types import Record

OutputFormat = Literal["table", "json"]


def _collect_fields(collection: str, fields: tuple[str, ...], json_text: str | None, version: int) -> Record:
    record: Record = {}
    if json_text is not None:
        try:
            parsed: Any = orjson.loads(json_text)
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON for --json: {e}"
            raise SchemaError(msg, collection=collection, expected="JSON object") from e
        if not isinstance(parsed, dict):
            msg = f"--json must be a JSON object, received: {type(parsed).__name__}"
            raise SchemaError(msg, collection=collection, expected="JSON object")
        record.update(parsed)
    record.update(parse_fields(collection, fields, version))
    return record


def register(app: App) -> None:
    """Register record commands on the root app."""

    @app.command(name="list")
    def _list(
        collection: Collection,
        /,
        *,
        format: Annotated[OutputFormat, Parameter(name=["--format", "-f"], help="Output format")] = "table",  # noqa: A002
    ) -> None:
        """List every record of a collection"""
        ctx = CLIContext.get_current()

        async def run() -> list[Record]:
            async with open_repository(ctx) as repository:
                return await repository.get_all(collection)

        try:
            records = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)

        if format == "json":
            ctx.console.print_json(format_json(records))
        else:
            ctx.console.print(records_table(collection, records))

    @app.command(name="show")
    def _show(collection: Collection, record_id: str, /) -> None:
        """Show one record as JSON"""
        ctx = CLIContext.get_current()

        async def run() -> Record:
            async with open_repository(ctx) as repository:
                return await repository.get(collection, record_id)

        try:
            record = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)
        ctx.console.print_json(format_json(record))

    @app.command(name="add")
    def _add(
        collection: Collection,
        /,
        *fields: str,
        json: Annotated[str | None, Parameter(name="--json", help="Record fields as a JSON object")] = None,
    ) -> None:
        """Add a record

        Fields are given as key=value tokens, a JSON object via --json, or
        both. Array fields accept a JSON array or a comma-separated list.
        """
        ctx = CLIContext.get_current()

        async def run() -> Record:
            async with open_repository(ctx) as repository:
                record = _collect_fields(collection, fields, json, repository.schema_version)
                return await repository.add(collection, record)

        try:
            added = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)
        ctx.console.print(f"[green]Added[/green] {added['id']}")

    @app.command(name="update")
    def _update(
        collection: Collection,
        record_id: str,
        /,
        *fields: str,
        json: Annotated[str | None, Parameter(name="--json", help="Changed fields as a JSON object")] = None,
    ) -> None:
        """Update fields of a record"""
        ctx = CLIContext.get_current()

        async def run() -> Record:
            async with open_repository(ctx) as repository:
                changes = _collect_fields(collection, fields, json, repository.schema_version)
                return await repository.update(collection, record_id, changes)

        try:
            updated = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)
        ctx.console.print(f"[green]Updated[/green] {updated['id']}")

    @app.command(name="delete")
    def _delete(collection: Collection, record_id: str, /) -> None:
        """Delete a record and cascade to the records it owns"""
        ctx = CLIContext.get_current()

        async def run() -> list[tuple[str, str]]:
            async with open_repository(ctx) as repository:
                return await repository.delete(collection, record_id)

        try:
            removed = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)

        for removed_collection, removed_id in removed:
            ctx.console.print(f"[yellow]Deleted[/yellow] {removed_collection}/{removed_id}")

    @app.command(name="advance")
    def _advance(collection: Literal["tasks", "subtasks"], record_id: str, /) -> None:
        """Move a subtask to its next stage, or a task to its next status"""
        ctx = CLIContext.get_current()

        async def run() -> Record:
            async with open_repository(ctx) as repository:
                if collection == "subtasks":
                    return await repository.advance_subtask_stage(record_id)
                return await repository.advance_task_status(record_id)

        try:
            record = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)

        value = record["taskType"] if collection == "subtasks" else record["doneStatus"]
        ctx.console.print(f"[green]{record['id']}[/green] is now {value}")
