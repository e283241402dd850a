"""Process-local in-memory channel."""

import copy
from typing import TYPE_CHECKING

from tracker.enums import ChannelName
from tracker.store._protocol import remove_record

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tracker._types import Record


class MemoryStore:
    """Collections held in a dictionary for the lifetime of the process.

    The lowest fidelity channel: nothing survives a restart. Also the
    natural fixture store for tests.
    """

    def __init__(self, initial: Mapping[str, list[Record]] | None = None) -> None:
        self._data: dict[str, list[Record]] = copy.deepcopy(dict(initial or {}))

    @property
    def name(self) -> str:
        return ChannelName.MEMORY.value

    async def get(self, collection: str) -> list[Record]:
        return copy.deepcopy(self._data.get(collection, []))

    async def set(self, collection: str, records: list[Record]) -> None:
        self._data[collection] = copy.deepcopy(records)

    async def delete(self, collection: str, record_id: str) -> None:
        records = self._data.get(collection, [])
        self._data[collection] = remove_record(collection, records, record_id, channel=self.name)

    async def aclose(self) -> None:
        return None

    def snapshot(self) -> dict[str, list[Record]]:
        """Copy of everything stored, keyed by collection."""
        return copy.deepcopy(self._data)
