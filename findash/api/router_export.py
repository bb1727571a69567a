"""
Export endpoints — summary report, transaction list, sample template.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from findash.api.dependencies import get_store, parse_filters
from findash.config import XLSX_MEDIA_TYPE
from findash.data.schemas import FilterCriteria
from findash.data.store import DataStore
from findash.reports import summary_report, transactions_export

router = APIRouter(prefix="/api", tags=["export"])


def _attachment(content: bytes | str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export/report")
def export_report(
    store: DataStore = Depends(get_store),
    criteria: FilterCriteria = Depends(parse_filters),
):
    """Summary / By Category / By Month workbook for the filtered transactions."""
    records = store.get_transactions(criteria)
    if not records:
        raise HTTPException(404, "No data to export")
    return _attachment(summary_report.generate_excel_bytes(records), "finance_report.xlsx", XLSX_MEDIA_TYPE)


@router.get("/export/transactions")
def export_transactions(
    format: str = Query("xlsx", description="xlsx|csv"),
    store: DataStore = Depends(get_store),
    criteria: FilterCriteria = Depends(parse_filters),
):
    records = store.get_transactions(criteria)
    if not records:
        raise HTTPException(404, "No data to export")
    if format == "csv":
        return _attachment(transactions_export.generate_csv(records), "finance_export.csv", "text/csv; charset=utf-8")
    if format == "xlsx":
        return _attachment(transactions_export.generate_excel_bytes(records), "finance_export.xlsx", XLSX_MEDIA_TYPE)
    raise HTTPException(400, f"Invalid format: {format}. Valid: ['xlsx', 'csv']")


@router.get("/template")
def download_template():
    """Sample spreadsheet with the expected columns."""
    return _attachment(transactions_export.generate_template_bytes(), "finance_template.xlsx", XLSX_MEDIA_TYPE)
