"""
Findash — FastAPI app factory.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from findash.config import configure_logging
from findash.data.store import DataStore
from findash.api.dependencies import set_store
from findash.api.router_meta import router as meta_router
from findash.api.router_upload import router as upload_router
from findash.api.router_dashboard import router as dashboard_router
from findash.api.router_export import router as export_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start with an empty store; optionally preload FINDASH_PRELOAD_FILE."""
    configure_logging()
    store = DataStore()
    set_store(store)

    preload = os.environ.get("FINDASH_PRELOAD_FILE")
    if preload:
        store.load_path(Path(preload))
        logger.info("Preloaded %d transactions from %s", store.row_count(), preload)
    else:
        logger.info("Findash ready — no data yet. Upload a spreadsheet via /api/upload.")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Findash API",
        description="Personal finance dashboard — spreadsheet ingestion, summaries, exports",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(upload_router)
    app.include_router(dashboard_router)
    app.include_router(export_router)

    return app


app = create_app()
