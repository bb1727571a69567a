"""
Cell coercion, date parsing and amount cleanup primitives.
"""
from __future__ import annotations

import datetime as dt
import math
import numbers
import re
from typing import Callable, Optional

import pandas as pd

from findash.data.schemas import EMPTY, Cell, DateCell, EmptyCell, NumberCell, TextCell


# ---------------------------------------------------------------------------
# Raw value → tagged cell
# ---------------------------------------------------------------------------

def to_cell(raw) -> Cell:
    """Wrap a value from a sheet reader (openpyxl / pandas) in a tagged cell."""
    if raw is None:
        return EMPTY
    if isinstance(raw, (TextCell, NumberCell, DateCell, EmptyCell)):
        return raw
    if isinstance(raw, bool):
        return TextCell("true" if raw else "false")
    if isinstance(raw, dt.datetime):
        if pd.isna(raw):
            return EMPTY
        return DateCell(raw.date())
    if isinstance(raw, dt.date):
        return DateCell(raw)
    if isinstance(raw, numbers.Number):
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return TextCell(str(raw))
        if math.isnan(value) or math.isinf(value):
            return EMPTY
        return NumberCell(value)
    if isinstance(raw, str):
        return TextCell(raw)
    return TextCell(str(raw))


def is_blank(cell: Cell) -> bool:
    if isinstance(cell, EmptyCell):
        return True
    return isinstance(cell, TextCell) and cell.text == ""


def cell_text(cell: Cell) -> str:
    """Stringify a cell the way it reads in the sheet (``150`` not ``150.0``)."""
    if isinstance(cell, TextCell):
        return cell.text
    if isinstance(cell, NumberCell):
        if cell.value.is_integer():
            return str(int(cell.value))
        return str(cell.value)
    if isinstance(cell, DateCell):
        return cell.value.isoformat()
    return ""


# ---------------------------------------------------------------------------
# Dates — ordered strategies, first valid calendar date wins
# ---------------------------------------------------------------------------

DateStrategy = Callable[[str], Optional[dt.date]]

_TEXTUAL_FORMATS = (
    "%b %d, %Y",     # Jan 2, 2026
    "%B %d, %Y",     # January 2, 2026
    "%b %d %Y",
    "%B %d %Y",
    "%d %b %Y",      # 2 Jan 2026
    "%d %B %Y",
    "%a %b %d %Y",   # Fri Jan 02 2026
)


_ISO_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")


def _parse_iso(text: str) -> Optional[dt.date]:
    if not _ISO_PREFIX_RE.match(text):
        return None
    ts = pd.to_datetime(text, format="ISO8601", errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def _parse_textual(text: str) -> Optional[dt.date]:
    for fmt in _TEXTUAL_FORMATS:
        try:
            return dt.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _positional(pattern: str, year_first: bool) -> DateStrategy:
    regex = re.compile(pattern)

    def parse(text: str) -> Optional[dt.date]:
        m = regex.match(text)
        if not m:
            return None
        a, b, c = (int(g) for g in m.groups())
        year, month, day = (a, b, c) if year_first else (c, a, b)
        try:
            return dt.date(year, month, day)
        except ValueError:
            return None

    return parse


# Order is part of the contract: MM/DD is never re-read as DD/MM.
DATE_STRATEGIES: tuple[DateStrategy, ...] = (
    _parse_iso,
    _parse_textual,
    _positional(r"^(\d{1,2})/(\d{1,2})/(\d{4})$", year_first=False),   # MM/DD/YYYY
    _positional(r"^(\d{1,2})-(\d{1,2})-(\d{4})$", year_first=False),   # MM-DD-YYYY
    _positional(r"^(\d{4})/(\d{1,2})/(\d{1,2})$", year_first=True),    # YYYY/MM/DD
    _positional(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", year_first=True),    # YYYY-MM-DD
)


def parse_date(text: str) -> Optional[dt.date]:
    """Parse a date string; ``None`` if no strategy yields a valid date."""
    if not text:
        return None
    text = text.strip()
    if not text:
        return None
    for strategy in DATE_STRATEGIES:
        result = strategy(text)
        if result is not None:
            return result
    return None


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-+]")
_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)")


def clean_amount(text: str) -> float:
    """Strip currency symbols/separators and read the leading number.

    ``"$1,234.50"`` → 1234.5, ``"-$45"`` → -45.0; anything unreadable → 0.0.
    """
    cleaned = _NON_NUMERIC_RE.sub("", text or "")
    m = _LEADING_NUMBER_RE.match(cleaned)
    if not m:
        return 0.0
    return float(m.group(0))
