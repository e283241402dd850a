# pyright: reportUnusedCallResult=false
"""CLI context for global state.

The context is set once at CLI startup by the meta command and made
available to every command via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from tracker.config import TrackerConfig

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

_current_cli_context: contextvars.ContextVar[CLIContext | None] = contextvars.ContextVar(
    "cli_context", default=None
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and consoles.

    Attributes:
        config: Loaded configuration.
        logger: Structured logger built from the logging section.
        console: Console for regular output.
        error_console: Console for error output.
    """

    config: TrackerConfig = field(repr=False)
    logger: FilteringBoundLogger | None = field(default=None, repr=False)
    console: Console = field(default_factory=Console, repr=False)
    error_console: Console = field(default_factory=lambda: Console(stderr=True), repr=False)

    @classmethod
    def get_current(cls) -> CLIContext:
        """Current CLIContext, or a default one with built-in configuration."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=TrackerConfig())

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to the default context; mostly useful between tests."""
        _current_cli_context.set(None)
