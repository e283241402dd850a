# pyright: reportUnusedCallResult=false, reportUnusedFunction=false, reportAny=false
# ruff: noqa: D415, FBT002, TC003
"""Whole-dataset commands: stats, export, import, clear and tag-version."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any, Literal

import anyio
from cyclopts import App, Parameter
from rich.table import Table

from tracker.cli._context import CLIContext
from tracker.cli._shared import exit_with_error, format_json, open_repository
from tracker.exceptions import TrackerError
from tracker.utils import atomic_write, dump_json

if TYPE_CHECKING:
    from tracker.repository import Statistics

OutputFormat = Literal["table", "json"]


def _statistics_table(stats: Statistics) -> Table:
    table = Table(title=f"Statistics at {stats.now}")
    table.add_column("collection", style="cyan")
    table.add_column("metric")
    table.add_column("count", justify="right")

    table.add_row("projects", "total", str(stats.projects.total))
    table.add_row("projects", "with task", str(stats.projects.with_tasks))
    table.add_row("ideas", "total", str(stats.ideas.total))
    table.add_row("ideas", "with tasks", str(stats.ideas.with_tasks))
    table.add_row("events", "total", str(stats.events.total))
    table.add_row("events", "upcoming", str(stats.events.upcoming))
    table.add_row("events", "completed", str(stats.events.completed))
    table.add_row("events", "overdue", str(stats.events.overdue))
    table.add_row("tasks", "total", str(stats.tasks.total))
    table.add_row("tasks", "with subtasks", str(stats.tasks.with_subtasks))
    table.add_row("tasks", "past due", str(stats.tasks.past_due))
    for status, count in stats.tasks.by_status.items():
        table.add_row("tasks", status, str(count))
    table.add_row("subtasks", "total", str(stats.subtasks.total))
    for stage, count in stats.subtasks.by_stage.items():
        table.add_row("subtasks", stage, str(count))
    return table


def register(app: App) -> None:
    """Register whole-dataset commands on the root app."""

    @app.command(name="stats")
    def _stats(
        *,
        format: Annotated[OutputFormat, Parameter(name=["--format", "-f"], help="Output format")] = "table",  # noqa: A002
    ) -> None:
        """Show counts across every collection"""
        ctx = CLIContext.get_current()

        async def run() -> Statistics:
            async with open_repository(ctx) as repository:
                return await repository.get_statistics()

        try:
            stats = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)

        if format == "json":
            ctx.console.print_json(format_json(stats.to_dict()))
        else:
            ctx.console.print(_statistics_table(stats))

    @app.command(name="export")
    def _export(
        output: Annotated[Path | None, Parameter(help="File to write; prints to stdout when omitted")] = None,
        /,
    ) -> None:
        """Export every collection as one JSON document"""
        ctx = CLIContext.get_current()

        async def run() -> dict[str, Any]:
            async with open_repository(ctx) as repository:
                return await repository.export_all()

        try:
            document = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)

        if output is None:
            ctx.console.print_json(format_json(document))
            return
        try:
            atomic_write(output, dump_json(document))
        except OSError as e:
            exit_with_error(f"Cannot write {output}: {e}", console=ctx.error_console)
        ctx.console.print(f"[green]Exported[/green] to {output}")

    @app.command(name="import")
    def _import(source: Path, /) -> None:
        """Replace collections with the contents of an export file

        Only the collections present in the file are replaced.
        """
        ctx = CLIContext.get_current()
        try:
            content = source.read_bytes()
        except OSError as e:
            exit_with_error(f"Cannot read {source}: {e}", console=ctx.error_console)

        async def run() -> dict[str, int]:
            async with open_repository(ctx) as repository:
                return await repository.import_all(content)

        try:
            counts = anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)

        for collection, count in counts.items():
            ctx.console.print(f"[green]Imported[/green] {count} {collection}")

    @app.command(name="clear")
    def _clear(
        *,
        yes: Annotated[bool, Parameter(name=["--yes", "-y"], help="Confirm deleting every record")] = False,
    ) -> None:
        """Delete every record and reset the ID counters"""
        ctx = CLIContext.get_current()
        if not yes:
            exit_with_error("Refusing to clear all data without --yes", console=ctx.error_console)

        async def run() -> None:
            async with open_repository(ctx) as repository:
                await repository.clear_all()

        try:
            anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)
        ctx.console.print("[yellow]Cleared[/yellow] all collections")

    @app.command(name="tag-version")
    def _tag_version(version: int, /) -> None:
        """Stamp existing data with a schema version

        Needed once for data written before version tagging existed.
        """
        ctx = CLIContext.get_current()

        async def run() -> None:
            async with open_repository(ctx, check_version=False) as repository:
                await repository.tag_schema_version(version)

        try:
            anyio.run(run)
        except TrackerError as e:
            exit_with_error(str(e), console=ctx.error_console)
        ctx.console.print(f"[green]Tagged[/green] data with schema version {version}")
