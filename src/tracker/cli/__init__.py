"""Command-line interface of the tracker."""

from ._app import create_app, main
from ._context import CLIContext

__all__ = ["CLIContext", "create_app", "main"]
