"""
Upload endpoints: ingest a spreadsheet, clear the active transactions.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from findash.analytics.common import format_file_size
from findash.api.dependencies import get_store_or_empty
from findash.api.response_models import UploadResponse
from findash.data.errors import IngestionError, UnsupportedFileTypeError
from findash.data.loader import read_upload, validate_file_type
from findash.data.store import DataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])


def _raise_http(exc: IngestionError) -> None:
    status = 415 if isinstance(exc, UnsupportedFileTypeError) else 400
    raise HTTPException(status, exc.message) from exc


@router.post("/upload", response_model=UploadResponse)
async def upload_spreadsheet(
    file: UploadFile = File(...),
    store: DataStore = Depends(get_store_or_empty),
):
    """Parse an uploaded spreadsheet and replace the active transactions."""
    if not file.filename:
        raise HTTPException(400, "Missing filename")

    try:
        # Type check happens before any bytes are parsed
        validate_file_type(file.filename, file.content_type)
        content = await read_upload(file)
        # Parsing runs in the threadpool
        result = await run_in_threadpool(store.load_bytes, content, file.filename, file.content_type)
    except IngestionError as exc:
        logger.warning("Upload of %s failed: %s", file.filename, exc.message)
        _raise_http(exc)

    return UploadResponse(status="loaded", file_size=format_file_size(len(content)), **result.to_dict())


@router.delete("/transactions")
def clear_transactions(store: DataStore = Depends(get_store_or_empty)):
    """Drop the active record set."""
    store.clear()
    return {"status": "cleared"}
