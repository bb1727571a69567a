"""
Aggregation engine — totals, savings rate, category and monthly breakdowns.

All functions are pure over a list of TransactionRecord; type comparisons
are case-insensitive.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from findash.analytics.common import safe_divide, pct_of_total
from findash.data.schemas import (
    ALL, CategoryTotal, DateRange, MonthTotal, SummaryTotals, TransactionRecord,
)

_FRAME_COLUMNS = ["id", "date", "description", "category", "amount", "type_key", "month_key"]


def _type_key(value) -> str:
    return str(getattr(value, "value", value)).lower()


def _of_type(records: Sequence[TransactionRecord], type_filter: str) -> list[TransactionRecord]:
    wanted = _type_key(type_filter)
    if wanted == ALL:
        return list(records)
    return [r for r in records if r.type.value.lower() == wanted]


def records_frame(records: Sequence[TransactionRecord]) -> pd.DataFrame:
    """One row per record, plus ``type_key`` (lower-cased) and ``month_key`` (YYYY-MM)."""
    if not records:
        return pd.DataFrame(columns=_FRAME_COLUMNS)
    return pd.DataFrame([
        {
            "id": r.id,
            "date": r.date,
            "description": r.description,
            "category": r.category,
            "amount": float(r.amount),
            "type_key": r.type.value.lower(),
            "month_key": f"{r.date.year}-{r.date.month:02d}",
        }
        for r in records
    ], columns=_FRAME_COLUMNS)


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

def total_income(records: Sequence[TransactionRecord]) -> float:
    return float(sum(abs(r.amount) for r in _of_type(records, "income")))


def total_expenses(records: Sequence[TransactionRecord]) -> float:
    return float(sum(abs(r.amount) for r in _of_type(records, "expense")))


def balance(records: Sequence[TransactionRecord]) -> float:
    return total_income(records) - total_expenses(records)


def savings_rate(records: Sequence[TransactionRecord]) -> float:
    """Share of income kept, as a fraction in [0, 1]. Zero when there is no income."""
    income = total_income(records)
    if income == 0:
        return 0.0
    return max(0.0, safe_divide(income - total_expenses(records), income))


def average_amount(records: Sequence[TransactionRecord], type_filter: str = ALL) -> float:
    subset = _of_type(records, type_filter)
    if not subset:
        return 0.0
    return sum(abs(r.amount) for r in subset) / len(subset)


def summary_totals(records: Sequence[TransactionRecord]) -> SummaryTotals:
    income = total_income(records)
    expenses = total_expenses(records)
    return SummaryTotals(
        total_income=income,
        total_expenses=expenses,
        balance=income - expenses,
        savings_rate=savings_rate(records),
        transaction_count=len(records),
    )


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------

def by_category(records: Sequence[TransactionRecord], type_filter: str = ALL) -> dict[str, float]:
    """Category → summed amount, in first-appearance order."""
    df = records_frame(_of_type(records, type_filter))
    if df.empty:
        return {}
    totals = df.groupby("category", sort=False)["amount"].sum()
    return {str(cat): float(amt) for cat, amt in totals.items()}


def category_breakdown(
    records: Sequence[TransactionRecord],
    type_filter: str = "expense",
) -> list[CategoryTotal]:
    """Category totals with share of the filtered total, largest first."""
    totals = by_category(records, type_filter)
    grand_total = sum(totals.values())
    rows = [
        CategoryTotal(category=cat, amount=amt, percentage=pct_of_total(amt, grand_total))
        for cat, amt in totals.items()
    ]
    return sorted(rows, key=lambda c: c.amount, reverse=True)


def by_month(records: Sequence[TransactionRecord]) -> list[MonthTotal]:
    """Income/expenses per calendar month, ascending by ``YYYY-MM``."""
    df = records_frame(records)
    if df.empty:
        return []
    is_income = df["type_key"] == "income"
    df = df.assign(
        income=df["amount"].where(is_income, 0.0),
        expenses=df["amount"].where(~is_income, 0.0),
    )
    grouped = (
        df.groupby("month_key")
        .agg(income=("income", "sum"), expenses=("expenses", "sum"))
        .reset_index()
        .sort_values("month_key")
    )
    return [
        MonthTotal(month_key=str(r.month_key), income=float(r.income), expenses=float(r.expenses))
        for r in grouped.itertuples(index=False)
    ]


def unique_categories(records: Sequence[TransactionRecord]) -> list[str]:
    return sorted({r.category for r in records})


def date_range(records: Sequence[TransactionRecord]) -> DateRange:
    if not records:
        return DateRange(None, None)
    dates = [r.date for r in records]
    return DateRange(min(dates), max(dates))


# ---------------------------------------------------------------------------
# Sorting (transaction table)
# ---------------------------------------------------------------------------

SORT_KEYS = {
    "date": lambda r: r.date,
    "description": lambda r: (r.description or "").lower(),
    "category": lambda r: r.category.lower(),
    "amount": lambda r: r.amount,
}


def sort_transactions(
    records: Sequence[TransactionRecord],
    column: str = "date",
    direction: str = "desc",
) -> list[TransactionRecord]:
    """Stable sort by a table column; unknown columns keep the input order."""
    key = SORT_KEYS.get(column)
    if key is None:
        return list(records)
    return sorted(records, key=key, reverse=direction.lower() == "desc")
