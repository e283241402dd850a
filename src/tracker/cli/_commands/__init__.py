"""Tracker CLI commands."""

from typing import TYPE_CHECKING

from . import _data, _records, _serve
from ._config import app as config_app
from ._notes import comment_app, effort_app

if TYPE_CHECKING:
    from cyclopts import App

__all__ = ["register_commands"]


def register_commands(app: App) -> None:
    """Register every command and sub-app on the root app."""
    _records.register(app)
    _data.register(app)
    _serve.register(app)
    app.command(comment_app)
    app.command(effort_app)
    app.command(config_app)
