"""HTTP file server exposing the collection store contract."""

from tracker.server._app import create_app

__all__ = ["create_app"]
