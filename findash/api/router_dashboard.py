"""
Dashboard endpoints — summary cards, category and monthly charts, transaction table.
"""
from __future__ import annotations

import math
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from findash.analytics.common import month_label
from findash.analytics.summary import (
    SORT_KEYS, by_month, category_breakdown, sort_transactions, summary_totals,
)
from findash.api.dependencies import get_store, parse_filters, parse_type
from findash.api.response_models import (
    CategoryTotalResponse, MonthTotalResponse, SummaryResponse, TransactionPage,
)
from findash.config import DEFAULT_PAGE_SIZE, PAGE_SIZES
from findash.data.schemas import FilterCriteria
from findash.data.store import DataStore

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/summary", response_model=SummaryResponse)
def summary(
    store: DataStore = Depends(get_store),
    criteria: FilterCriteria = Depends(parse_filters),
):
    """Income, expenses, balance, savings rate for the filtered transactions."""
    totals = summary_totals(store.get_transactions(criteria))
    return SummaryResponse(**asdict(totals))


@router.get("/by-category", response_model=list[CategoryTotalResponse])
def categories_breakdown(
    breakdown_type: Optional[str] = Query("expense", alias="breakdown", description="income|expense|all"),
    store: DataStore = Depends(get_store),
    criteria: FilterCriteria = Depends(parse_filters),
):
    """Category totals (largest first) with percentage of the breakdown total."""
    rows = category_breakdown(store.get_transactions(criteria), parse_type(breakdown_type, "breakdown"))
    return [
        CategoryTotalResponse(category=c.category, amount=c.amount, percentage=round(c.percentage, 1))
        for c in rows
    ]


@router.get("/by-month", response_model=list[MonthTotalResponse])
def monthly(
    store: DataStore = Depends(get_store),
    criteria: FilterCriteria = Depends(parse_filters),
):
    """Monthly income vs expenses, oldest month first."""
    return [
        MonthTotalResponse(
            month=m.month_key, label=month_label(m.month_key),
            income=m.income, expenses=m.expenses, net=m.net,
        )
        for m in by_month(store.get_transactions(criteria))
    ]


@router.get("/transactions", response_model=TransactionPage)
def transactions(
    sort: str = Query("date", description="date|description|category|amount"),
    direction: str = Query("desc", description="asc|desc"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE),
    store: DataStore = Depends(get_store),
    criteria: FilterCriteria = Depends(parse_filters),
):
    """Sorted, paginated transaction table."""
    if sort not in SORT_KEYS:
        raise HTTPException(400, f"Invalid sort column: {sort}. Valid: {list(SORT_KEYS)}")
    if direction.lower() not in ("asc", "desc"):
        raise HTTPException(400, f"Invalid direction: {direction}")
    if page_size not in PAGE_SIZES:
        raise HTTPException(400, f"Invalid page_size: {page_size}. Valid: {list(PAGE_SIZES)}")

    rows = sort_transactions(store.get_transactions(criteria), sort, direction)
    total_pages = max(1, math.ceil(len(rows) / page_size))
    start = (page - 1) * page_size

    return TransactionPage(
        transactions=[r.to_dict() for r in rows[start:start + page_size]],
        total=len(rows),
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )
