"""
DataStore — the single active record set, replaced wholesale on each ingestion.

Loaded from an upload (API) or a file path (CLI), queried on every request.
"""
from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Optional

from findash.data.loader import load_file, load_workbook_bytes
from findash.data.query import apply_filters
from findash.data.schemas import FilterCriteria, IngestionResult, TransactionRecord

logger = logging.getLogger(__name__)


class DataStore:
    """In-memory transactions with filter-aware accessors."""

    def __init__(self) -> None:
        self.records: list[TransactionRecord] = []
        self.last_result: Optional[IngestionResult] = None
        self.loaded_at: Optional[dt.datetime] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def replace(self, result: IngestionResult) -> IngestionResult:
        """Swap in a new record set. Never merges with the previous one."""
        self.records = list(result.records)
        self.last_result = result
        self.loaded_at = dt.datetime.now()
        logger.info("Active record set replaced: %d transactions", len(self.records))
        return result

    def load_bytes(
        self,
        content: bytes,
        file_name: str,
        content_type: Optional[str] = None,
    ) -> IngestionResult:
        """Ingest uploaded bytes. On failure the current records are kept."""
        return self.replace(load_workbook_bytes(content, file_name, content_type))

    def load_path(self, filepath: Path) -> "DataStore":
        self.replace(load_file(filepath))
        return self

    def clear(self) -> None:
        self.records = []
        self.last_result = None
        self.loaded_at = None

    @property
    def is_loaded(self) -> bool:
        return bool(self.records)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_transactions(self, criteria: FilterCriteria | None = None) -> list[TransactionRecord]:
        """Full record set, or the subset matching ``criteria``."""
        return apply_filters(self.records, criteria)

    def row_count(self) -> int:
        return len(self.records)
