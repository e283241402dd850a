"""Persistence channels for named JSON collections.

Example:
    >>> from tracker.store import FallbackStore, FileStore, MemoryStore
    >>> store = FallbackStore([FileStore("data"), MemoryStore()])
    >>> store.active_channel_index
    0
"""

from tracker.store._factory import build_channel, build_store
from tracker.store._fallback import FallbackStore
from tracker.store._file import FileStore
from tracker.store._memory import MemoryStore
from tracker.store._protocol import META_COLLECTION, STORED_COLLECTIONS, CollectionStore
from tracker.store._remote import DEFAULT_API_URL, RemoteStore

__all__ = [
    "DEFAULT_API_URL",
    "META_COLLECTION",
    "STORED_COLLECTIONS",
    "CollectionStore",
    "FallbackStore",
    "FileStore",
    "MemoryStore",
    "RemoteStore",
    "build_channel",
    "build_store",
]
