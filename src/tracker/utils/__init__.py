"""Shared utilities: logger factory and JSON file helpers."""

from tracker.utils._io import atomic_write, dump_json, load_json_bytes
from tracker.utils._logging import LogFormatType, create_logger

__all__ = [
    "LogFormatType",
    "atomic_write",
    "create_logger",
    "dump_json",
    "load_json_bytes",
]
