"""Spreadsheet ingestion, normalization, and the in-memory record store."""
from .loader import ingest, load_file, load_workbook_bytes, read_sheet, validate_file_type
from .store import DataStore
from .schemas import FilterCriteria, IngestionResult, TransactionRecord, TransactionType
from .normalize import map_columns, normalize_row
from .query import apply_filters
