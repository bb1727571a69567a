"""
Meta endpoints: health, categories, date range.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from findash.analytics.summary import date_range, unique_categories
from findash.api.dependencies import get_store_or_empty
from findash.api.response_models import CategoriesResponse, DateRangeResponse, HealthResponse
from findash.data.store import DataStore

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store_or_empty)):
    return HealthResponse(
        status="ok",
        transactions=store.row_count(),
        file_name=store.last_result.file_name if store.last_result else None,
        loaded_at=store.loaded_at.isoformat() if store.loaded_at else None,
    )


@router.get("/categories", response_model=CategoriesResponse)
def list_categories(store: DataStore = Depends(get_store_or_empty)):
    return CategoriesResponse(categories=unique_categories(store.records))


@router.get("/date-range", response_model=DateRangeResponse)
def get_date_range(store: DataStore = Depends(get_store_or_empty)):
    rng = date_range(store.records)
    return DateRangeResponse(
        min=rng.min.isoformat() if rng.min else None,
        max=rng.max.isoformat() if rng.max else None,
    )
