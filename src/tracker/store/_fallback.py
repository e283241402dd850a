"""Ordered channel chain with one-way demotion."""

from typing import TYPE_CHECKING

import structlog

from tracker.exceptions import StoreError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from structlog.typing import FilteringBoundLogger

    from tracker._types import Record
    from tracker.store._protocol import CollectionStore


class FallbackStore:
    """Channels tried from highest to lowest fidelity.

    Every operation runs on the active channel. When it fails with a
    StoreError the chain demotes to the next channel for the rest of its
    lifetime and retries the operation there once. Demotion is never undone.

    A failure on the last channel, or a second failure right after demoting,
    propagates to the caller.
    """

    def __init__(
        self,
        channels: Sequence[CollectionStore],
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the chain.

        Args:
            channels: Channels in order of preference. Must not be empty.
            logger: Logger for demotion warnings.

        Raises:
            ValueError: If no channels are given.
        """
        if not channels:
            msg = "FallbackStore requires at least one channel"
            raise ValueError(msg)
        self._channels: tuple[CollectionStore, ...] = tuple(channels)
        self._active_index: int = 0
        self.logger: FilteringBoundLogger = logger or structlog.get_logger()

    @property
    def name(self) -> str:
        return self.active_channel.name

    @property
    def channels(self) -> tuple[CollectionStore, ...]:
        return self._channels

    @property
    def active_channel_index(self) -> int:
        """Index of the channel currently serving operations."""
        return self._active_index

    @property
    def active_channel(self) -> CollectionStore:
        return self._channels[self._active_index]

    async def get(self, collection: str) -> list[Record]:
        return await self._run("get", collection, lambda channel: channel.get(collection))

    async def set(self, collection: str, records: list[Record]) -> None:
        await self._run("set", collection, lambda channel: channel.set(collection, records))

    async def delete(self, collection: str, record_id: str) -> None:
        await self._run("delete", collection, lambda channel: channel.delete(collection, record_id))

    async def aclose(self) -> None:
        for channel in self._channels:
            await channel.aclose()

    async def _run[T](
        self,
        operation: str,
        collection: str,
        call: Callable[[CollectionStore], Awaitable[T]],
    ) -> T:
        try:
            return await call(self.active_channel)
        except StoreError as e:
            if self._active_index + 1 >= len(self._channels):
                raise
            self._demote(operation, collection, e)
        return await call(self.active_channel)

    def _demote(self, operation: str, collection: str, error: StoreError) -> None:
        failed = self.active_channel.name
        self._active_index += 1
        self.logger.warning(
            "store_demoted",
            from_channel=failed,
            to_channel=self.active_channel.name,
            active_channel_index=self._active_index,
            operation=operation,
            collection=collection,
            error=str(error),
        )
