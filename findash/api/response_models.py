"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    transactions: int
    file_name: Optional[str] = None
    loaded_at: Optional[str] = None


class UploadResponse(BaseModel):
    status: str
    file_name: Optional[str] = None
    sheet_name: Optional[str] = None
    file_size: Optional[str] = None
    source_row_count: int
    accepted_row_count: int
    rejected_row_count: int
    skipped_empty_count: int
    detected_columns: list[str]


class CategoriesResponse(BaseModel):
    categories: list[str]


class DateRangeResponse(BaseModel):
    min: Optional[str] = None
    max: Optional[str] = None


class SummaryResponse(BaseModel):
    total_income: float
    total_expenses: float
    balance: float
    savings_rate: float
    transaction_count: int


class CategoryTotalResponse(BaseModel):
    category: str
    amount: float
    percentage: float


class MonthTotalResponse(BaseModel):
    month: str
    label: str
    income: float
    expenses: float
    net: float


class TransactionResponse(BaseModel):
    id: int
    date: str
    description: str
    category: str
    amount: float
    type: str


class TransactionPage(BaseModel):
    transactions: list[TransactionResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
