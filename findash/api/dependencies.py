"""
FastAPI dependencies — DataStore singleton, filter parsing.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from fastapi import HTTPException, Query

from findash.data.store import DataStore
from findash.data.schemas import ALL, FilterCriteria, TransactionType

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore) -> None:
    global _store
    _store = store


def get_store_or_empty() -> DataStore:
    """Return the store even if it holds no transactions (upload/health endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


def get_store() -> DataStore:
    store = get_store_or_empty()
    if not store.is_loaded:
        raise HTTPException(409, "No transactions loaded. Upload a spreadsheet first.")
    return store


# ---------------------------------------------------------------------------
# Filter parsing from query params
# ---------------------------------------------------------------------------

def _parse_date(value: Optional[str], name: str) -> Optional[dt.date]:
    if not value:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise HTTPException(400, f"Invalid {name}: {value} (expected YYYY-MM-DD)")


def parse_type(value: Optional[str], name: str = "type") -> str:
    if not value or value.lower() == ALL:
        return ALL
    try:
        return TransactionType.parse(value).value
    except ValueError:
        raise HTTPException(400, f"Invalid {name}: {value} (expected income|expense|all)")


def parse_filters(
    search: Optional[str] = Query(None, description="Text in description or category"),
    category: Optional[str] = Query(None, description="Exact category, or 'all'"),
    type: Optional[str] = Query(None, description="income|expense|all"),
    date_from: Optional[str] = Query(None, description="YYYY-MM-DD"),
    date_to: Optional[str] = Query(None, description="YYYY-MM-DD"),
) -> FilterCriteria:
    """Parse filter query parameters into FilterCriteria."""
    return FilterCriteria(
        search_text=search or "",
        category=category or ALL,
        type=parse_type(type),
        date_from=_parse_date(date_from, "date_from"),
        date_to=_parse_date(date_to, "date_to"),
    )
