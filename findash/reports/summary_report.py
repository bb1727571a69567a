"""
Finance Summary Report — KPIs, expense breakdown by category, monthly income vs expenses.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from findash.analytics.common import sanitize_for_json
from findash.analytics.summary import by_month, category_breakdown, date_range, summary_totals
from findash.data.schemas import TransactionRecord
from findash.excel.writer import ExcelWriter


CATEGORY_COLS = [
    ("category", "text", "Category"),
    ("amount", "currency", "Amount"),
    ("percentage", "percent", "Percentage"),
]

MONTH_COLS = [
    ("month", "text", "Month"),
    ("income", "currency", "Income"),
    ("expenses", "currency", "Expenses"),
    ("net", "currency", "Net"),
]


def _date_range_label(records: Sequence[TransactionRecord]) -> str:
    rng = date_range(records)
    if rng.min is None:
        return "N/A"
    return f"{rng.min} to {rng.max}"


def generate_json(records: Sequence[TransactionRecord]) -> dict:
    totals = summary_totals(records)
    return sanitize_for_json({
        "date_range": _date_range_label(records),
        "summary": {
            "total_income": totals.total_income,
            "total_expenses": totals.total_expenses,
            "balance": totals.balance,
            "savings_rate": totals.savings_rate,
            "transaction_count": totals.transaction_count,
        },
        "by_category": [
            {"category": c.category, "amount": c.amount, "percentage": round(c.percentage, 1)}
            for c in category_breakdown(records, "expense")
        ],
        "by_month": [
            {"month": m.month_key, "income": m.income, "expenses": m.expenses, "net": m.net}
            for m in by_month(records)
        ],
    })


def build_workbook(records: Sequence[TransactionRecord]) -> ExcelWriter:
    data = generate_json(records)
    s = data["summary"]
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    ew.write_title(ws, "Personal Finance Summary Report",
                   f"{data['date_range']}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 4, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (s["total_income"], "TOTAL INCOME", "currency"),
        (s["total_expenses"], "TOTAL EXPENSES", "currency"),
    ])
    ew.write_signed_kpi(ws, row, 1, s["balance"], "NET BALANCE")
    row = ew.write_kpi_row(ws, row, [
        (s["savings_rate"] * 100, "SAVINGS RATE", "percent"),
        (s["transaction_count"], "TRANSACTIONS", "number"),
    ], start_col=3)

    if data["by_category"]:
        ws_c = ew.add_sheet("By Category")
        ew.write_table(ws_c, 1, CATEGORY_COLS, data["by_category"], totals=True)

    if data["by_month"]:
        ws_m = ew.add_sheet("By Month")
        ew.write_table(ws_m, 1, MONTH_COLS, data["by_month"], totals=True)

    return ew


def generate_excel(records: Sequence[TransactionRecord], output_path: str | Path) -> Path:
    return build_workbook(records).save(output_path)


def generate_excel_bytes(records: Sequence[TransactionRecord]) -> bytes:
    return build_workbook(records).to_bytes()
