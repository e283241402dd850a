# pyright: reportAny=false
from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import orjson
import pytest
from fastapi import FastAPI

from tracker.server import create_app

pytestmark = pytest.mark.anyio


@pytest.fixture
def app(tmp_path: Path) -> FastAPI:
    return create_app(tmp_path / "data")


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealth:
    async def test_reports_running(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "Server is running"
        assert body["timestamp"]


class TestCollections:
    async def test_missing_collection_is_empty(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/ideas")

        assert response.status_code == 200
        assert response.json() == []

    async def test_post_array_replaces_collection(self, client: httpx.AsyncClient, tmp_path: Path) -> None:
        response = await client.post("/api/ideas", json=[{"id": "idea_001"}, {"id": "idea_002"}])

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "ideas data updated successfully"}
        assert orjson.loads((tmp_path / "data" / "ideas.json").read_bytes()) == [
            {"id": "idea_001"},
            {"id": "idea_002"},
        ]

    async def test_post_object_upserts_by_id(self, client: httpx.AsyncClient) -> None:
        _ = await client.post("/api/tasks", json=[{"id": "task_001", "name": "old"}])

        _ = await client.post("/api/tasks", json={"id": "task_001", "name": "new"})
        _ = await client.post("/api/tasks", json={"id": "task_002", "name": "added"})

        response = await client.get("/api/tasks")
        assert response.json() == [{"id": "task_001", "name": "new"}, {"id": "task_002", "name": "added"}]

    async def test_meta_collection_is_served(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/api/meta", json=[{"id": "meta", "schemaVersion": 2}])

        assert response.status_code == 200

    async def test_invalid_collection(self, client: httpx.AsyncClient) -> None:
        for response in (
            await client.get("/api/widgets"),
            await client.post("/api/widgets", json=[]),
            await client.delete("/api/widgets/w1"),
        ):
            assert response.status_code == 400
            assert response.json() == {"error": "Invalid data type"}

    async def test_delete_record(self, client: httpx.AsyncClient) -> None:
        _ = await client.post("/api/events", json=[{"id": "event_001"}, {"id": "event_002"}])

        response = await client.delete("/api/events/event_001")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "events item deleted successfully"}
        assert (await client.get("/api/events")).json() == [{"id": "event_002"}]

    async def test_delete_missing_record(self, client: httpx.AsyncClient) -> None:
        response = await client.delete("/api/events/event_404")

        assert response.status_code == 404
        assert response.json() == {"error": "Item not found"}

    async def test_corrupt_file_is_a_read_failure(self, client: httpx.AsyncClient, tmp_path: Path) -> None:
        data_dir = tmp_path / "data"
        data_dir.mkdir()
        (data_dir / "ideas.json").write_text("{broken")

        response = await client.get("/api/ideas")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to read data"}

    async def test_cors_headers(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/api/ideas", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "*"
