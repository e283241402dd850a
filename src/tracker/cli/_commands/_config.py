# pyright: reportUnusedCallResult=false, reportUnusedFunction=false, reportAny=false
# ruff: noqa: D415
"""Config commands for inspecting the effective configuration."""

from typing import Annotated, Literal

from cyclopts import App, Parameter
from rich.table import Table

from tracker.cli._context import CLIContext
from tracker.cli._shared import exit_with_error, format_json

app = App(name="config", help="Inspect the effective configuration", help_on_error=True)

_MISSING = object()


@app.command(name="show")
def _show(
    *,
    format: Annotated[Literal["toml", "json"], Parameter(name=["--format", "-f"], help="Output format")] = "toml",  # noqa: A002
) -> None:
    """Print the merged configuration"""
    ctx = CLIContext.get_current()
    if format == "json":
        ctx.console.print_json(format_json(ctx.config.to_dict()))
    else:
        ctx.console.print(ctx.config.to_toml(), markup=False, highlight=False)


@app.command(name="get")
def _get(key: str, /) -> None:
    """Print one value by dotted key, e.g. storage.channels"""
    ctx = CLIContext.get_current()
    value = ctx.config.get(key, _MISSING)
    if value is _MISSING:
        exit_with_error(f"Unknown configuration key: {key}", console=ctx.error_console)
    ctx.console.print_json(format_json(value))


@app.command(name="sources")
def _sources() -> None:
    """List configuration sources from highest to lowest precedence"""
    ctx = CLIContext.get_current()
    table = Table(title="Configuration sources")
    table.add_column("source", style="cyan")
    table.add_column("path")
    table.add_column("loaded", justify="center")

    for source in ctx.config.sources:
        path = str(source.path) if source.path is not None else ""
        table.add_row(source.name.value, path, "yes" if source.exists else "no")
    ctx.console.print(table)
