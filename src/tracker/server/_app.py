"""FastAPI application serving collections from JSON files on disk."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.server._routes import create_router
from tracker.store import FileStore

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from structlog.typing import FilteringBoundLogger


def create_app(
    data_dir: Path | str = "data",
    *,
    logger: FilteringBoundLogger | None = None,
) -> FastAPI:
    """Create the file server application.

    Args:
        data_dir: Directory holding one ``<collection>.json`` per collection.
        logger: Logger for write and failure events.

    Returns:
        The configured FastAPI application.
    """
    store = FileStore(data_dir)
    log = logger or structlog.get_logger()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        log.info("server_started", data_dir=str(Path(data_dir).resolve()))
        yield
        await app.state.store.aclose()

    app = FastAPI(title="Tracker file server", docs_url=None, redoc_url="/api-docs", lifespan=lifespan)
    app.state.store = store
    app.state.logger = log
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.include_router(create_router())
    return app
