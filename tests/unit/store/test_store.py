from pathlib import Path

import orjson
import pytest
from structlog.testing import capture_logs

from tracker._types import Record
from tracker.config import StorageConfig
from tracker.enums import ChannelName
from tracker.exceptions import NotFoundError, StoreError
from tracker.store import CollectionStore, FallbackStore, FileStore, MemoryStore, RemoteStore, build_store

pytestmark = pytest.mark.anyio


class BrokenStore:
    """Channel whose every operation fails."""

    def __init__(self, name: str = "remote") -> None:
        self._name = name
        self.calls = 0

    @property
    def name(self) -> str:
        return self._name

    async def get(self, collection: str) -> list[Record]:
        raise self._error("get", collection)

    async def set(self, collection: str, records: list[Record]) -> None:
        raise self._error("set", collection)

    async def delete(self, collection: str, record_id: str) -> None:
        raise self._error("delete", collection)

    async def aclose(self) -> None:
        return None

    def _error(self, operation: str, collection: str) -> StoreError:
        self.calls += 1
        return StoreError("channel unavailable", channel=self._name, operation=operation, collection=collection)


class TestMemoryStore:
    async def test_unknown_collection_reads_empty(self) -> None:
        assert await MemoryStore().get("ideas") == []

    async def test_set_then_get(self) -> None:
        store = MemoryStore()

        await store.set("ideas", [{"id": "idea_001"}])

        assert await store.get("ideas") == [{"id": "idea_001"}]

    async def test_returns_copies(self) -> None:
        store = MemoryStore({"ideas": [{"id": "idea_001"}]})

        records = await store.get("ideas")
        records[0]["id"] = "changed"

        assert store.snapshot() == {"ideas": [{"id": "idea_001"}]}

    async def test_delete_removes_record(self) -> None:
        store = MemoryStore({"ideas": [{"id": "idea_001"}, {"id": "idea_002"}]})

        await store.delete("ideas", "idea_001")

        assert await store.get("ideas") == [{"id": "idea_002"}]

    async def test_delete_missing_record_raises(self) -> None:
        with pytest.raises(NotFoundError):
            await MemoryStore().delete("ideas", "idea_404")

    def test_satisfies_protocol(self) -> None:
        assert isinstance(MemoryStore(), CollectionStore)


class TestFileStore:
    async def test_missing_file_reads_empty(self, tmp_path: Path) -> None:
        assert await FileStore(tmp_path).get("tasks") == []

    async def test_writes_indented_json_array(self, tmp_path: Path) -> None:
        store = FileStore(tmp_path / "data")

        await store.set("tasks", [{"id": "task_001"}])

        path = tmp_path / "data" / "tasks.json"
        assert orjson.loads(path.read_bytes()) == [{"id": "task_001"}]
        assert path.read_text().startswith("[\n  {")

    async def test_delete_rewrites_file(self, tmp_path: Path) -> None:
        store = FileStore(tmp_path)
        await store.set("tasks", [{"id": "task_001"}, {"id": "task_002"}])

        await store.delete("tasks", "task_001")

        assert await store.get("tasks") == [{"id": "task_002"}]

    async def test_delete_missing_record_raises(self, tmp_path: Path) -> None:
        with pytest.raises(NotFoundError):
            await FileStore(tmp_path).delete("tasks", "task_404")

    async def test_invalid_json_raises_store_error(self, tmp_path: Path) -> None:
        (tmp_path / "tasks.json").write_text("{not json")

        with pytest.raises(StoreError, match="Invalid JSON") as exc_info:
            await FileStore(tmp_path).get("tasks")

        assert exc_info.value.operation == "get"
        assert exc_info.value.channel == "file"

    async def test_non_array_raises_store_error(self, tmp_path: Path) -> None:
        (tmp_path / "tasks.json").write_text('{"id": "task_001"}')

        with pytest.raises(StoreError, match="Expected a JSON array"):
            await FileStore(tmp_path).get("tasks")

    def test_rejects_path_like_collection_names(self, tmp_path: Path) -> None:
        with pytest.raises(StoreError, match="Invalid collection name"):
            FileStore(tmp_path).path_for("../secrets")


class TestFallbackStore:
    def test_requires_a_channel(self) -> None:
        with pytest.raises(ValueError, match="at least one channel"):
            FallbackStore([])

    async def test_uses_first_channel_while_healthy(self) -> None:
        first, second = MemoryStore(), MemoryStore()
        store = FallbackStore([first, second])

        await store.set("ideas", [{"id": "idea_001"}])

        assert store.active_channel_index == 0
        assert first.snapshot() == {"ideas": [{"id": "idea_001"}]}
        assert second.snapshot() == {}

    async def test_demotes_and_retries_on_store_error(self) -> None:
        broken = BrokenStore()
        fallback = MemoryStore()
        store = FallbackStore([broken, fallback])

        with capture_logs() as logs:
            await store.set("ideas", [{"id": "idea_001"}])

        assert store.active_channel_index == 1
        assert store.active_channel is fallback
        assert fallback.snapshot() == {"ideas": [{"id": "idea_001"}]}
        assert logs[0]["event"] == "store_demoted"
        assert logs[0]["from_channel"] == "remote"
        assert logs[0]["to_channel"] == "memory"

    async def test_demotion_is_permanent(self) -> None:
        broken = BrokenStore()
        store = FallbackStore([broken, MemoryStore()])

        _ = await store.get("ideas")
        _ = await store.get("ideas")

        assert broken.calls == 1
        assert store.name == "memory"

    async def test_last_channel_failure_propagates(self) -> None:
        store = FallbackStore([BrokenStore("file")])

        with pytest.raises(StoreError, match="channel unavailable"):
            await store.get("ideas")

    async def test_failure_after_demotion_propagates(self) -> None:
        store = FallbackStore([BrokenStore("remote"), BrokenStore("file"), MemoryStore()])

        with pytest.raises(StoreError):
            await store.get("ideas")

        assert store.active_channel_index == 1

    async def test_not_found_does_not_demote(self) -> None:
        store = FallbackStore([MemoryStore(), MemoryStore()])

        with pytest.raises(NotFoundError):
            await store.delete("ideas", "idea_404")

        assert store.active_channel_index == 0


class TestBuildStore:
    def test_builds_channels_in_configured_order(self, tmp_path: Path) -> None:
        config = StorageConfig(
            channels=(ChannelName.REMOTE, ChannelName.FILE, ChannelName.MEMORY),
            data_dir=str(tmp_path),
        )

        store = build_store(config)

        remote, file, memory = store.channels
        assert isinstance(remote, RemoteStore)
        assert isinstance(file, FileStore)
        assert file.data_dir == tmp_path
        assert isinstance(memory, MemoryStore)

    def test_default_config_is_file_then_memory(self) -> None:
        store = build_store(StorageConfig())

        assert [channel.name for channel in store.channels] == ["file", "memory"]
