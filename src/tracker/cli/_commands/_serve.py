# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, TC003
"""File server command."""

from pathlib import Path
from typing import Annotated, Literal

from cyclopts import App, Parameter

from tracker.cli._context import CLIContext

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


def register(app: App) -> None:
    """Register the serve command on the root app."""

    @app.command(name="serve")
    def _serve(
        *,
        host: Annotated[str | None, Parameter(help="Bind socket to this host.")] = None,
        port: Annotated[int | None, Parameter(help="Bind socket to this port.")] = None,
        data_dir: Annotated[
            Path | None, Parameter(name="--data-dir", help="Directory holding the collection files.")
        ] = None,
        log_level: Annotated[LogLevel, Parameter(help="Uvicorn log level.")] = "info",
    ) -> None:
        """Run the HTTP file server

        Unset options fall back to the [server] section of the configuration.
        """
        import uvicorn  # noqa: PLC0415

        from tracker.server import create_app  # noqa: PLC0415

        ctx = CLIContext.get_current()
        settings = ctx.config.server
        application = create_app(data_dir or settings.data_dir, logger=ctx.logger)
        uvicorn.run(
            application,
            host=host or settings.host,
            port=port or settings.port,
            log_level=log_level,
        )
