"""
Column mapping and row normalization: raw sheet rows → TransactionRecord.
"""
from __future__ import annotations

import logging
from typing import Sequence

from findash.config import CANONICAL_FIELDS, COLUMN_ALIASES, DEFAULT_CATEGORY, INCOME_TYPE_KEYWORDS
from findash.data.parsing import cell_text, is_blank, parse_date, clean_amount, to_cell
from findash.data.schemas import (
    EMPTY, NOT_FOUND, Accepted, Cell, ColumnMap, DateCell, NumberCell, Rejected,
    RejectReason, RowOutcome, TransactionRecord, TransactionType,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------

def normalize_header(value) -> str:
    """Lower-cased, trimmed header text ('' for empty header cells)."""
    if value is None:
        return ""
    return cell_text(to_cell(value)).strip().lower()


def map_columns(headers: Sequence) -> ColumnMap:
    """Map header cells to canonical fields by alias substring.

    Headers are scanned left to right. Each header goes to the first field
    (in CANONICAL_FIELDS order) whose aliases match and that is still
    unmapped; the first column claimed for a field is kept.
    """
    found = {f: NOT_FOUND for f in CANONICAL_FIELDS}

    for index, raw in enumerate(headers):
        header = normalize_header(raw)
        if not header:
            continue
        for field_name in CANONICAL_FIELDS:
            if found[field_name] != NOT_FOUND:
                continue
            if any(alias in header for alias in COLUMN_ALIASES[field_name]):
                found[field_name] = index
                break

    return ColumnMap(**found)


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def _cell_at(row: Sequence[Cell], index: int) -> Cell:
    if index == NOT_FOUND or index >= len(row):
        return EMPTY
    return row[index]


def is_empty_row(row: Sequence[Cell]) -> bool:
    return all(is_blank(c) for c in row)


def _read_amount(cell: Cell) -> float:
    if isinstance(cell, NumberCell):
        return cell.value
    return clean_amount(cell_text(cell))


def _classify_type(type_cell: Cell, raw_amount: float, type_mapped: bool) -> TransactionType:
    if type_mapped:
        text = cell_text(type_cell).lower()
        if any(kw in text for kw in INCOME_TYPE_KEYWORDS):
            return TransactionType.INCOME
        return TransactionType.EXPENSE
    return TransactionType.INCOME if raw_amount > 0 else TransactionType.EXPENSE


def normalize_row(row: Sequence[Cell], column_map: ColumnMap, row_index: int) -> RowOutcome:
    """Turn one data row into ``Accepted(record)`` or ``Rejected(reason)``.

    ``row_index`` is the row's position in the sheet (header = 0) and becomes
    the record id.
    """
    # Date (required)
    date_cell = _cell_at(row, column_map.date)
    if is_blank(date_cell):
        return Rejected(RejectReason.MISSING_DATE)
    if isinstance(date_cell, DateCell):
        date = date_cell.value
    else:
        date = parse_date(cell_text(date_cell))
    if date is None:
        return Rejected(RejectReason.INVALID_DATE)

    description = cell_text(_cell_at(row, column_map.description)).strip()
    category = cell_text(_cell_at(row, column_map.category)).strip() or DEFAULT_CATEGORY

    # Amount (required, non-zero)
    amount_cell = _cell_at(row, column_map.amount)
    if is_blank(amount_cell):
        return Rejected(RejectReason.MISSING_AMOUNT)
    raw_amount = _read_amount(amount_cell)
    if raw_amount == 0:
        return Rejected(RejectReason.ZERO_AMOUNT)

    tx_type = _classify_type(
        _cell_at(row, column_map.type), raw_amount, column_map.is_mapped("type"),
    )

    return Accepted(TransactionRecord(
        id=row_index,
        date=date,
        description=description,
        category=category,
        amount=abs(raw_amount),
        type=tx_type,
    ))
