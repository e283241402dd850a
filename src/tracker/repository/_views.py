"""Per-collection views over a repository."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from tracker._types import Record
    from tracker.repository._repository import Repository


class CollectionView:
    """The repository's CRUD surface bound to one collection.

    Example:
        >>> task = await repository.tasks.add({"name": "Write docs", "dueDate": "2025-01-01"})
        >>> await repository.tasks.get(task["id"])
    """

    def __init__(self, repository: Repository, collection: str) -> None:
        self._repository: Repository = repository
        self.collection: str = str(collection)

    async def get_all(self) -> list[Record]:
        return await self._repository.get_all(self.collection)

    async def get(self, record_id: str) -> Record:
        return await self._repository.get(self.collection, record_id)

    async def find(self, record_id: str) -> Record | None:
        return await self._repository.find(self.collection, record_id)

    async def get_by_ids(self, record_ids: Iterable[str]) -> list[Record]:
        return await self._repository.get_by_ids(self.collection, record_ids)

    async def add(self, record: Mapping[str, Any]) -> Record:  # pyright: ignore[reportExplicitAny]
        return await self._repository.add(self.collection, record)

    async def update(self, record_id: str, partial: Mapping[str, Any]) -> Record:  # pyright: ignore[reportExplicitAny]
        return await self._repository.update(self.collection, record_id, partial)

    async def delete(self, record_id: str) -> list[tuple[str, str]]:
        return await self._repository.delete(self.collection, record_id)
