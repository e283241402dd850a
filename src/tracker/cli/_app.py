"""The command-line interface for the tracker."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from tracker.cli._commands import register_commands
from tracker.cli._context import CLIContext
from tracker.cli._shared import exit_with_error
from tracker.config import load_config
from tracker.exceptions import ConfigError
from tracker.utils import create_logger

APP_HELP = "Plan ideas, projects, events, tasks and subtasks from the terminal."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the tracker CLI.

    Args:
        console: Console for regular output.
        error_console: Console for errors.
        exit_on_error: Exit on parse errors instead of raising.

    Returns:
        The root cyclopts App with its meta launcher.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="tracker",
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[Path | None, Parameter(name="--config", help="Path to config file")] = None,
    ) -> None:
        """Launch the tracker CLI with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
        """
        try:
            loaded_config = load_config(config_path=config)
        except ConfigError as e:
            exit_with_error(str(e), console=error_console)

        logger = create_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,
            log_file=loaded_config.logging.file,
        )

        ctx = CLIContext(
            config=loaded_config,
            logger=logger,
            console=console,
            error_console=error_console,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    app = create_app()
    app.meta()
