"""Building the channel chain from configuration."""

from typing import TYPE_CHECKING

from tracker.enums import ChannelName
from tracker.store._fallback import FallbackStore
from tracker.store._file import FileStore
from tracker.store._memory import MemoryStore
from tracker.store._remote import RemoteStore

if TYPE_CHECKING:
    import httpx
    from structlog.typing import FilteringBoundLogger

    from tracker.config import StorageConfig
    from tracker.store._protocol import CollectionStore


def build_channel(
    name: ChannelName,
    config: StorageConfig,
    *,
    client: httpx.AsyncClient | None = None,
) -> CollectionStore:
    """Construct a single channel.

    Args:
        name: Which channel to build.
        config: Storage settings.
        client: HTTP client for the remote channel.
    """
    match name:
        case ChannelName.REMOTE:
            return RemoteStore(
                config.api_url,
                timeout=config.timeout,
                retry_attempts=config.retry_attempts,
                client=client,
            )
        case ChannelName.FILE:
            return FileStore(config.data_dir)
        case ChannelName.MEMORY:
            return MemoryStore()


def build_store(
    config: StorageConfig,
    *,
    client: httpx.AsyncClient | None = None,
    logger: FilteringBoundLogger | None = None,
) -> FallbackStore:
    """Construct the fallback chain of the configured channels, in order.

    Args:
        config: Storage settings.
        client: HTTP client for the remote channel.
        logger: Logger for demotion warnings.

    Returns:
        A FallbackStore starting on the first configured channel.
    """
    channels = [build_channel(name, config, client=client) for name in config.channels]
    return FallbackStore(channels, logger=logger)
