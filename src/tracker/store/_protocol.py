"""Protocol shared by every persistence channel."""

from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

from tracker.enums import Collection
from tracker.exceptions import NotFoundError

if TYPE_CHECKING:
    from tracker._types import Record

META_COLLECTION: Final = "meta"
"""Collection holding the schema version tag and ID counters."""

STORED_COLLECTIONS: Final[tuple[str, ...]] = (*(c.value for c in Collection), META_COLLECTION)
"""Every collection name a channel may be asked to persist."""


@runtime_checkable
class CollectionStore(Protocol):
    """Key-value persistence of named JSON collections.

    A collection is persisted and returned in full; there are no partial
    writes. Implementations return copies so that callers can never mutate
    the persisted data without going through ``set``.
    """

    @property
    def name(self) -> str:
        """Channel name used in log lines and errors."""
        ...

    async def get(self, collection: str) -> list[Record]:
        """Return a copy of a collection, or ``[]`` when it was never written.

        Raises:
            StoreError: If the channel cannot be read.
        """
        ...

    async def set(self, collection: str, records: list[Record]) -> None:
        """Replace a collection in full.

        Raises:
            StoreError: If the channel cannot be written.
        """
        ...

    async def delete(self, collection: str, record_id: str) -> None:
        """Remove one record by ID and persist the remainder.

        Raises:
            NotFoundError: If no record has that ID.
            StoreError: If the channel cannot be read or written.
        """
        ...

    async def aclose(self) -> None:
        """Release any resources held by the channel."""
        ...


def remove_record(collection: str, records: list[Record], record_id: str, *, channel: str) -> list[Record]:
    """Return ``records`` without the record whose ID is ``record_id``.

    Raises:
        NotFoundError: If no record has that ID.
    """
    remaining = [record for record in records if record.get("id") != record_id]
    if len(remaining) == len(records):
        msg = f"Record {record_id} not found in {collection} ({channel})"
        raise NotFoundError(msg, collection=collection, record_id=record_id)
    return remaining
