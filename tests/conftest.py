"""Shared test fixtures."""

from __future__ import annotations

import datetime as dt
import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from findash.config import SAMPLE_TEMPLATE_ROWS, XLSX_MEDIA_TYPE
from findash.data.schemas import TransactionRecord, TransactionType

HEADER = ["Date", "Description", "Category", "Amount", "Type"]

# Totals for SAMPLE_TEMPLATE_ROWS
TEMPLATE_INCOME = 5800.0
TEMPLATE_EXPENSES = 702.0


def make_xlsx(rows, title="Transactions") -> bytes:
    """Build an in-memory .xlsx with ``rows`` on the first sheet."""
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def rec(id, date, amount, type="Expense", category="Food", description="item") -> TransactionRecord:
    if isinstance(date, str):
        date = dt.date.fromisoformat(date)
    return TransactionRecord(
        id=id,
        date=date,
        description=description,
        category=category,
        amount=float(amount),
        type=TransactionType(type),
    )


@pytest.fixture
def template_rows():
    return [list(r) for r in SAMPLE_TEMPLATE_ROWS]


@pytest.fixture
def template_xlsx(template_rows) -> bytes:
    return make_xlsx(template_rows)


@pytest.fixture
def records():
    return [
        rec(1, "2026-01-01", 5000, "Income", "Salary", "Monthly Salary"),
        rec(2, "2026-01-02", 150, "Expense", "Food & Dining", "Grocery Store"),
        rec(3, "2026-01-15", 50, "Expense", "Health", "Gym Membership"),
        rec(4, "2026-02-03", 120, "Expense", "Utilities", "Electric Bill"),
        rec(5, "2026-02-05", 800, "Income", "Side Income", "Freelance Project"),
        rec(6, "2026-02-20", 12, "Expense", "Food & Dining", "Coffee Shop"),
    ]


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("FINDASH_PRELOAD_FILE", raising=False)
    from findash.main import create_app
    with TestClient(create_app()) as c:
        yield c


@pytest.fixture
def loaded_client(client, template_xlsx):
    resp = client.post(
        "/api/upload",
        files={"file": ("finance_template.xlsx", template_xlsx, XLSX_MEDIA_TYPE)},
    )
    assert resp.status_code == 200, resp.text
    return client
