"""
Spreadsheet reading and the ingestion pipeline: bytes → 2-D sheet → IngestionResult.
"""
from __future__ import annotations

import io
import logging
import warnings
import zipfile
from pathlib import Path
from typing import Any, Optional, Sequence

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from findash.config import SPREADSHEET_EXTENSIONS, SPREADSHEET_MIME_FORMATS, SPREADSHEET_MIME_TYPES
from findash.data.errors import (
    EmptySheetError, NoValidTransactionsError, UnreadableFileError, UnsupportedFileTypeError,
)
from findash.data.normalize import is_empty_row, map_columns, normalize_row
from findash.data.parsing import is_blank, to_cell
from findash.data.schemas import Accepted, IngestionResult, RejectReason, TransactionRecord

logger = logging.getLogger(__name__)

RawSheet = Sequence[Sequence[Any]]


# ---------------------------------------------------------------------------
# File-type validation
# ---------------------------------------------------------------------------

def file_extension(file_name: str) -> str:
    return Path(file_name or "").suffix.lower()


def is_spreadsheet(file_name: str, content_type: Optional[str] = None) -> bool:
    """Accept when either the MIME type or the extension is a known spreadsheet format."""
    if content_type and content_type.split(";")[0].strip().lower() in SPREADSHEET_MIME_TYPES:
        return True
    return file_extension(file_name) in SPREADSHEET_EXTENSIONS


def validate_file_type(file_name: str, content_type: Optional[str] = None) -> None:
    if not is_spreadsheet(file_name, content_type):
        accepted = ", ".join(sorted(SPREADSHEET_EXTENSIONS))
        raise UnsupportedFileTypeError(
            f"Please upload a valid spreadsheet ({accepted}); got '{file_name}'"
        )


# ---------------------------------------------------------------------------
# Reading — first worksheet only
# ---------------------------------------------------------------------------

def _is_empty_raw_row(values) -> bool:
    return all(is_blank(to_cell(v)) for v in values)


def _trim_empty_edges(rows: list[list]) -> list[list]:
    """Drop all-empty rows above the header and below the last data row."""
    start = 0
    while start < len(rows) and _is_empty_raw_row(rows[start]):
        start += 1
    end = len(rows)
    while end > start and _is_empty_raw_row(rows[end - 1]):
        end -= 1
    return rows[start:end]


def _read_openpyxl(content: bytes) -> tuple[str, list[list]]:
    try:
        wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
        raise UnreadableFileError(f"Failed to parse Excel file: {exc}") from exc
    try:
        if not wb.worksheets:
            raise UnreadableFileError("Workbook contains no worksheets")
        ws = wb.worksheets[0]
        rows = [list(r) for r in ws.iter_rows(values_only=True)]
        return ws.title, rows
    finally:
        wb.close()


def _read_xls(content: bytes) -> tuple[str, list[list]]:
    try:
        with pd.ExcelFile(io.BytesIO(content), engine="xlrd") as xls:
            sheet_name = xls.sheet_names[0]
            df = xls.parse(sheet_name, header=None)
    except Exception as exc:
        raise UnreadableFileError(f"Failed to parse Excel file: {exc}") from exc
    df = df.astype(object).where(df.notna(), None)
    return str(sheet_name), df.values.tolist()


def _read_csv(content: bytes, file_name: str) -> tuple[str, list[list]]:
    # Column count comes from the first non-blank line; wider rows lose their extra cells
    try:
        text = content.decode("utf-8-sig").lstrip("\r\n")
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            df = pd.read_csv(
                io.StringIO(text),
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
                engine="python",
                on_bad_lines=lambda fields: fields,
            )
    except pd.errors.EmptyDataError:
        return Path(file_name or "sheet").stem, []
    except (UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise UnreadableFileError(f"Failed to parse CSV file: {exc}") from exc
    df = df.astype(object).where(df.notna(), None)
    return Path(file_name or "sheet").stem, df.values.tolist()


_EXTENSION_FORMATS = {".csv": "csv", ".xls": "xls", ".xlsx": "xlsx", ".xlsm": "xlsx"}


def sheet_format(file_name: str, content_type: Optional[str] = None) -> str:
    """Pick the reader: extension first, then MIME type, then xlsx."""
    ext = file_extension(file_name)
    if ext in _EXTENSION_FORMATS:
        return _EXTENSION_FORMATS[ext]
    mime = (content_type or "").split(";")[0].strip().lower()
    return SPREADSHEET_MIME_FORMATS.get(mime, "xlsx")


def read_sheet(
    content: bytes,
    file_name: str,
    content_type: Optional[str] = None,
) -> tuple[str, list[list]]:
    """Decode spreadsheet bytes into ``(sheet_name, rows)``; row 0 is the header."""
    if not content:
        raise UnreadableFileError("Failed to read file: no content")
    fmt = sheet_format(file_name, content_type)
    if fmt == "csv":
        sheet_name, rows = _read_csv(content, file_name)
    elif fmt == "xls":
        sheet_name, rows = _read_xls(content)
    else:
        sheet_name, rows = _read_openpyxl(content)
    return sheet_name, _trim_empty_edges(rows)


# ---------------------------------------------------------------------------
# Ingestion pipeline
# ---------------------------------------------------------------------------

def ingest(
    raw_sheet: RawSheet,
    *,
    file_name: Optional[str] = None,
    sheet_name: Optional[str] = None,
) -> IngestionResult:
    """Map columns from row 0, normalize every data row, collect accepted records.

    Raises EmptySheetError for fewer than 2 rows and NoValidTransactionsError
    when nothing survives normalization. ``raw_sheet`` is not modified.
    """
    if len(raw_sheet) < 2:
        raise EmptySheetError("File appears to be empty or has no data rows")

    column_map = map_columns(raw_sheet[0] or [])

    records: list[TransactionRecord] = []
    rejections: list[tuple[int, RejectReason]] = []
    skipped_empty = 0

    for index in range(1, len(raw_sheet)):
        row = [to_cell(v) for v in (raw_sheet[index] or [])]
        if is_empty_row(row):
            skipped_empty += 1
            continue
        outcome = normalize_row(row, column_map, index)
        if isinstance(outcome, Accepted):
            records.append(outcome.record)
        else:
            rejections.append((index, outcome.reason))
            logger.debug("Row %d rejected: %s", index, outcome.reason.value)

    source_rows = len(raw_sheet) - 1
    logger.info(
        "Ingested %s: %d/%d rows accepted (%d rejected, %d empty), columns=%s",
        file_name or "sheet", len(records), source_rows, len(rejections), skipped_empty,
        column_map.detected_columns,
    )

    if not records:
        raise NoValidTransactionsError(
            "No valid transactions found. Make sure the file has Date and Amount columns."
        )

    return IngestionResult(
        records=records,
        source_row_count=source_rows,
        accepted_row_count=len(records),
        detected_columns=column_map.detected_columns,
        file_name=file_name,
        sheet_name=sheet_name,
        skipped_empty_count=skipped_empty,
        rejections=rejections,
    )


def load_workbook_bytes(
    content: bytes,
    file_name: str,
    content_type: Optional[str] = None,
) -> IngestionResult:
    """Validate type, decode the first sheet and ingest it."""
    validate_file_type(file_name, content_type)
    sheet_name, rows = read_sheet(content, file_name, content_type)
    return ingest(rows, file_name=file_name, sheet_name=sheet_name)


def load_file(filepath: Path) -> IngestionResult:
    """Load a spreadsheet from disk (CLI entry point)."""
    filepath = Path(filepath)
    validate_file_type(filepath.name)
    try:
        content = filepath.read_bytes()
    except OSError as exc:
        raise UnreadableFileError(f"Failed to read file: {exc}") from exc
    return load_workbook_bytes(content, filepath.name)


async def read_upload(upload) -> bytes:
    """Await the complete byte buffer of an upload (anything with async ``read()``)."""
    try:
        return await upload.read()
    except OSError as exc:
        raise UnreadableFileError("Failed to read file") from exc
