"""Shared test fixtures for tracker tests."""

from collections.abc import Callable

import pendulum
import pytest
import structlog
from rich.console import Console

from tracker.enums import SchemaVersion
from tracker.repository import Repository
from tracker.store import MemoryStore

FIXED_NOW = pendulum.datetime(2025, 6, 1, 12, 0, 0, tz="UTC")

Clock = Callable[[], pendulum.DateTime]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def console() -> Console:
    """Console writing to the captured stdout, wide enough to avoid wrapping."""
    return Console(width=200, no_color=True, highlight=False, soft_wrap=True)


@pytest.fixture
def clock() -> Clock:
    return lambda: FIXED_NOW


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repository(store: MemoryStore, clock: Clock) -> Repository:
    """Schema version 2 repository over an empty in-memory store."""
    return Repository(store, logger=structlog.get_logger(), clock=clock)


@pytest.fixture
def legacy_repository(store: MemoryStore, clock: Clock) -> Repository:
    """Schema version 1 repository over an empty in-memory store."""
    return Repository(store, schema_version=SchemaVersion.V1, clock=clock)
