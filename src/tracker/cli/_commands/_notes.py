# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415
"""Subtask comment and effort commands."""

from typing import TYPE_CHECKING, Annotated

import anyio
from cyclopts import App, Parameter

from tracker.cli._context import CLIContext
from tracker.cli._shared import exit_with_error, open_repository
from tracker.exceptions import TrackerError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from tracker.repository import Repository

comment_app = App(name="comment", help="Manage subtask comments", help_on_error=True)
effort_app = App(name="effort", help="Manage subtask effort entries", help_on_error=True)


def _run[T](action: Callable[[Repository], Awaitable[T]]) -> T:
    ctx = CLIContext.get_current()

    async def run() -> T:
        async with open_repository(ctx) as repository:
            return await action(repository)

    try:
        return anyio.run(run)
    except TrackerError as e:
        exit_with_error(str(e), console=ctx.error_console)


@comment_app.command(name="add")
def _comment_add(subtask_id: str, text: str, /) -> None:
    """Add a comment to a subtask"""
    comment = _run(lambda repository: repository.add_comment(subtask_id, text))
    CLIContext.get_current().console.print(f"[green]Added[/green] {comment['id']}")


@comment_app.command(name="edit")
def _comment_edit(subtask_id: str, comment_id: str, text: str, /) -> None:
    """Replace the text of a comment"""
    comment = _run(lambda repository: repository.edit_comment(subtask_id, comment_id, text))
    CLIContext.get_current().console.print(f"[green]Updated[/green] {comment['id']}")


@comment_app.command(name="delete")
def _comment_delete(subtask_id: str, comment_id: str, /) -> None:
    """Delete a comment"""
    _run(lambda repository: repository.delete_comment(subtask_id, comment_id))
    CLIContext.get_current().console.print(f"[yellow]Deleted[/yellow] {comment_id}")


@effort_app.command(name="log")
def _effort_log(
    subtask_id: str,
    hours: float,
    /,
    *,
    date: Annotated[str, Parameter(name=["--date", "-d"], help="Day the work happened (ISO 8601)")],
    notes: Annotated[str, Parameter(name=["--notes", "-n"], help="What was done")] = "",
) -> None:
    """Log hours spent on a subtask"""
    effort = _run(lambda repository: repository.log_effort(subtask_id, hours, date, notes))
    CLIContext.get_current().console.print(f"[green]Logged[/green] {effort['id']} ({effort['hours']}h)")


@effort_app.command(name="delete")
def _effort_delete(subtask_id: str, effort_id: str, /) -> None:
    """Delete an effort entry"""
    _run(lambda repository: repository.delete_effort(subtask_id, effort_id))
    CLIContext.get_current().console.print(f"[yellow]Deleted[/yellow] {effort_id}")
