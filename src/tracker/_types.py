"""Shared type aliases."""

from typing import Any

type Record = dict[str, Any]  # pyright: ignore[reportExplicitAny]
"""A flat JSON object stored in a collection."""

type RecordId = str
