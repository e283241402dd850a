# pyright: reportAny=false
"""Channel persisting each collection as a JSON file on disk."""

from pathlib import Path
from typing import TYPE_CHECKING

import anyio.to_thread
import orjson

from tracker.enums import ChannelName
from tracker.exceptions import StoreError
from tracker.store._protocol import remove_record
from tracker.utils import atomic_write, dump_json, load_json_bytes

if TYPE_CHECKING:
    from tracker._types import Record


class FileStore:
    """One ``<collection>.json`` file per collection in a data directory.

    Files are UTF-8 JSON arrays with 2-space indentation and are replaced
    atomically on every write. Blocking file I/O runs in a worker thread.

    Attributes:
        data_dir: Directory holding the collection files.
    """

    def __init__(self, data_dir: Path | str) -> None:
        self.data_dir: Path = Path(data_dir)

    @property
    def name(self) -> str:
        return ChannelName.FILE.value

    def path_for(self, collection: str) -> Path:
        """Path of a collection's file.

        Raises:
            StoreError: If the collection name could escape the data directory.
        """
        if not collection.isidentifier():
            msg = f"Invalid collection name: {collection!r}"
            raise StoreError(msg, channel=self.name, operation="path", collection=collection)
        return self.data_dir / f"{collection}.json"

    async def get(self, collection: str) -> list[Record]:
        return await anyio.to_thread.run_sync(self._read, collection)

    async def set(self, collection: str, records: list[Record]) -> None:
        await anyio.to_thread.run_sync(self._write, collection, records)

    async def delete(self, collection: str, record_id: str) -> None:
        await anyio.to_thread.run_sync(self._delete, collection, record_id)

    async def aclose(self) -> None:
        return None

    def _read(self, collection: str) -> list[Record]:
        path = self.path_for(collection)
        try:
            content = path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as e:
            msg = f"Failed to read {path}: {e}"
            raise StoreError(msg, channel=self.name, operation="get", collection=collection, cause=e) from e

        try:
            data = load_json_bytes(content)
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in {path}: {e}"
            raise StoreError(msg, channel=self.name, operation="get", collection=collection, cause=e) from e

        if not isinstance(data, list):
            msg = f"Expected a JSON array in {path}, found {type(data).__name__}"
            raise StoreError(msg, channel=self.name, operation="get", collection=collection)
        return data

    def _write(self, collection: str, records: list[Record]) -> None:
        path = self.path_for(collection)
        try:
            atomic_write(path, dump_json(records))
        except (OSError, TypeError) as e:
            msg = f"Failed to write {path}: {e}"
            raise StoreError(msg, channel=self.name, operation="set", collection=collection, cause=e) from e

    def _delete(self, collection: str, record_id: str) -> None:
        records = self._read(collection)
        self._write(collection, remove_record(collection, records, record_id, channel=self.name))
