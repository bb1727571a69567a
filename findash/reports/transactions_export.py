"""
Transaction exports (xlsx / csv) and the downloadable sample template.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from findash.config import SAMPLE_TEMPLATE_ROWS
from findash.data.schemas import TransactionRecord, TransactionType
from findash.excel.writer import ExcelWriter

EXPORT_HEADERS = ["Date", "Description", "Category", "Amount", "Type"]

TRANSACTION_COLS = [
    ("date", "date", "Date"),
    ("description", "text", "Description"),
    ("category", "text", "Category"),
    ("amount", "currency", "Amount"),
    ("type", "text", "Type"),
]


def transactions_frame(records: Sequence[TransactionRecord]) -> pd.DataFrame:
    """Records as a DataFrame with the template's column headers."""
    return pd.DataFrame(
        [[r.date, r.description, r.category, r.amount, r.type.value] for r in records],
        columns=EXPORT_HEADERS,
    )


def _highlight(row: dict) -> str:
    return "income" if row["type"] == TransactionType.INCOME.value else "expense"


def build_workbook(records: Sequence[TransactionRecord]) -> ExcelWriter:
    ew = ExcelWriter()
    ws = ew.add_sheet("Transactions")
    rows = [
        {
            "date": r.date,
            "description": r.description,
            "category": r.category,
            "amount": r.amount,
            "type": r.type.value,
        }
        for r in records
    ]
    ew.write_table(ws, 1, TRANSACTION_COLS, rows, highlight=_highlight)
    return ew


def generate_excel(records: Sequence[TransactionRecord], output_path: str | Path) -> Path:
    return build_workbook(records).save(output_path)


def generate_excel_bytes(records: Sequence[TransactionRecord]) -> bytes:
    return build_workbook(records).to_bytes()


def generate_csv(records: Sequence[TransactionRecord]) -> str:
    """CSV text with ISO dates and unsigned amounts."""
    df = transactions_frame(records)
    df["Date"] = df["Date"].map(lambda d: d.isoformat())
    return df.to_csv(index=False)


# ---------------------------------------------------------------------------
# Sample template
# ---------------------------------------------------------------------------

def build_template() -> ExcelWriter:
    ew = ExcelWriter()
    ws = ew.add_sheet("Transactions")
    ew.write_rows(ws, SAMPLE_TEMPLATE_ROWS)
    for letter, width in zip("ABCDE", (12, 30, 18, 10, 10)):
        ws.column_dimensions[letter].width = width
    return ew


def generate_template(output_path: str | Path) -> Path:
    return build_template().save(output_path)


def generate_template_bytes() -> bytes:
    return build_template().to_bytes()
