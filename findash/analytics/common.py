"""
Safe math, JSON sanitizing and display formatting helpers.
"""
from __future__ import annotations

import datetime as dt
import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """``numerator / denominator``, or ``default`` for a zero/NaN denominator or result."""
    if not denominator or pd.isna(denominator):
        return default
    quotient = numerator / denominator
    if pd.isna(quotient):
        return default
    return quotient


def pct_of_total(part: float, total: float) -> float:
    """Share of ``total`` on a 0-100 scale."""
    return 100 * safe_divide(part, total)


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def sanitize_for_json(obj):
    """Make report payloads JSON-safe: numpy scalars to builtins, dates to ISO, NaN/inf to 0."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, dt.date):
        return obj.isoformat()
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        return _finite(float(obj))
    return obj


# ---------------------------------------------------------------------------
# Display formatting
# ---------------------------------------------------------------------------

_SHORT_MONTHS = [
    "", "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def format_currency(amount: float, symbol: str = "$") -> str:
    """``-1234.5`` → ``-$1,234.50``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Value is a fraction: ``0.25`` → ``25.0%``."""
    return f"{value * 100:.{decimals}f}%"


def format_number(num: float, decimals: int = 0) -> str:
    return f"{num:,.{decimals}f}"


def format_file_size(num_bytes: int) -> str:
    if num_bytes == 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = 0
    while num_bytes >= 1024 ** (i + 1) and i < len(units) - 1:
        i += 1
    value = round(num_bytes / 1024 ** i, 2)
    return f"{value:g} {units[i]}"


def month_label(month_key: str) -> str:
    """``2026-01`` → ``Jan 26`` (chart axis label)."""
    year, month = month_key.split("-")
    return f"{_SHORT_MONTHS[int(month)]} {year[2:]}"
