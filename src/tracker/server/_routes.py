# pyright: reportAny=false, reportExplicitAny=false
"""Collection endpoints of the file server."""

from typing import TYPE_CHECKING, Annotated, Any, cast

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from tracker.exceptions import NotFoundError, StoreError
from tracker.schema import utc_now_iso
from tracker.server._schemas import ErrorResponse, HealthResponse, WriteResponse
from tracker.store import STORED_COLLECTIONS

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from tracker.store import FileStore


def _store(request: Request) -> FileStore:
    return cast("FileStore", request.app.state.store)


def _logger(request: Request) -> FilteringBoundLogger:
    return cast("FilteringBoundLogger", request.app.state.logger)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _invalid_collection(collection: str) -> JSONResponse | None:
    if collection not in STORED_COLLECTIONS:
        return _error(400, "Invalid data type")
    return None


def create_router() -> APIRouter:
    """Build the ``/api`` collection router and the health endpoint."""
    router = APIRouter()

    @router.get("/health", tags=["health"])
    async def get_health() -> HealthResponse:
        return HealthResponse(status="Server is running", timestamp=utc_now_iso())

    @router.get("/api/{collection}", tags=["collections"], response_model=None)
    async def get_collection(collection: str, request: Request) -> list[dict[str, Any]] | JSONResponse:
        if (invalid := _invalid_collection(collection)) is not None:
            return invalid
        try:
            return await _store(request).get(collection)
        except StoreError as e:
            _logger(request).error("collection_read_failed", collection=collection, error=str(e))
            return _error(500, "Failed to read data")

    @router.post("/api/{collection}", tags=["collections"], response_model=None)
    async def post_collection(
        collection: str,
        payload: Annotated[list[dict[str, Any]] | dict[str, Any], Body()],
        request: Request,
    ) -> WriteResponse | JSONResponse:
        if (invalid := _invalid_collection(collection)) is not None:
            return invalid

        store = _store(request)
        try:
            if isinstance(payload, list):
                records = payload
            else:
                records = await store.get(collection)
                index = next((i for i, r in enumerate(records) if r.get("id") == payload.get("id")), None)
                if index is None:
                    records.append(payload)
                else:
                    records[index] = payload
            await store.set(collection, records)
        except StoreError as e:
            _logger(request).error("collection_write_failed", collection=collection, error=str(e))
            return _error(500, "Failed to save data")

        _logger(request).info("collection_written", collection=collection, records=len(records))
        return WriteResponse(message=f"{collection} data updated successfully")

    @router.delete("/api/{collection}/{record_id}", tags=["collections"], response_model=None)
    async def delete_record(collection: str, record_id: str, request: Request) -> WriteResponse | JSONResponse:
        if (invalid := _invalid_collection(collection)) is not None:
            return invalid
        try:
            await _store(request).delete(collection, record_id)
        except NotFoundError:
            return _error(404, "Item not found")
        except StoreError as e:
            _logger(request).error("record_delete_failed", collection=collection, record_id=record_id, error=str(e))
            return _error(500, "Failed to delete data")

        _logger(request).info("record_deleted", collection=collection, record_id=record_id)
        return WriteResponse(message=f"{collection} item deleted successfully")

    return router
