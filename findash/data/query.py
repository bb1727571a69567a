"""
Composable record filters: search → category → type → date range.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional, Sequence

from findash.data.schemas import ALL, FilterCriteria, TransactionRecord


def search_transactions(records: Sequence[TransactionRecord], query: str) -> list[TransactionRecord]:
    """Case-insensitive substring match on description or category."""
    if not query:
        return list(records)
    q = query.lower()
    return [r for r in records if q in r.description.lower() or q in r.category.lower()]


def filter_by_category(records: Sequence[TransactionRecord], category: str) -> list[TransactionRecord]:
    if not category or category == ALL:
        return list(records)
    return [r for r in records if r.category == category]


def _type_key(tx_type) -> str:
    return str(getattr(tx_type, "value", tx_type) or "").strip().lower()


def filter_by_type(records: Sequence[TransactionRecord], tx_type: str) -> list[TransactionRecord]:
    wanted = _type_key(tx_type)
    if not wanted or wanted == ALL:
        return list(records)
    return [r for r in records if r.type.value.lower() == wanted]


def filter_by_date_range(
    records: Sequence[TransactionRecord],
    start: Optional[dt.date],
    end: Optional[dt.date],
) -> list[TransactionRecord]:
    """Inclusive on both ends; a missing bound is open."""
    start = start or dt.date.min
    end = end or dt.date.max
    return [r for r in records if start <= r.date <= end]


def apply_filters(
    records: Sequence[TransactionRecord],
    criteria: FilterCriteria | None,
) -> list[TransactionRecord]:
    """Apply every active criterion in a fixed order. Input order is preserved."""
    filtered = list(records)
    if criteria is None:
        return filtered

    if criteria.search_text:
        filtered = search_transactions(filtered, criteria.search_text)
    if criteria.category and criteria.category != ALL:
        filtered = filter_by_category(filtered, criteria.category)
    if _type_key(criteria.type) not in ("", ALL):
        filtered = filter_by_type(filtered, criteria.type)
    if criteria.date_from is not None or criteria.date_to is not None:
        filtered = filter_by_date_range(filtered, criteria.date_from, criteria.date_to)

    return filtered
