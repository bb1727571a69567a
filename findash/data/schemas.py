"""
Transaction records, raw cells, ingestion results, filter and aggregate schemas.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from findash.config import CANONICAL_FIELDS


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: str) -> "TransactionType":
        """Case-insensitive lookup: 'income', 'EXPENSE', ..."""
        for member in cls:
            if member.value.lower() == str(value).strip().lower():
                return member
        raise ValueError(f"Unknown transaction type: {value!r}")


@dataclass(frozen=True)
class TransactionRecord:
    """One normalized transaction. ``amount`` is a magnitude; ``type`` carries direction."""
    id: int
    date: dt.date
    description: str
    category: str
    amount: float
    type: TransactionType

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "type": self.type.value,
        }


# ---------------------------------------------------------------------------
# Raw cells — tagged variant produced at the reader boundary
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextCell:
    text: str


@dataclass(frozen=True)
class NumberCell:
    value: float


@dataclass(frozen=True)
class DateCell:
    value: dt.date


@dataclass(frozen=True)
class EmptyCell:
    pass


Cell = Union[TextCell, NumberCell, DateCell, EmptyCell]
EMPTY = EmptyCell()


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------

NOT_FOUND = -1


@dataclass(frozen=True)
class ColumnMap:
    """Canonical field → zero-based column index (``NOT_FOUND`` when absent)."""
    date: int = NOT_FOUND
    description: int = NOT_FOUND
    category: int = NOT_FOUND
    amount: int = NOT_FOUND
    type: int = NOT_FOUND

    def index_of(self, field_name: str) -> int:
        return getattr(self, field_name)

    def is_mapped(self, field_name: str) -> bool:
        return self.index_of(field_name) != NOT_FOUND

    @property
    def detected_columns(self) -> list[str]:
        return [f for f in CANONICAL_FIELDS if self.is_mapped(f)]


# ---------------------------------------------------------------------------
# Row outcomes
# ---------------------------------------------------------------------------

class RejectReason(str, Enum):
    MISSING_DATE = "missing_date"
    INVALID_DATE = "invalid_date"
    MISSING_AMOUNT = "missing_amount"
    ZERO_AMOUNT = "zero_amount"


@dataclass(frozen=True)
class Accepted:
    record: TransactionRecord


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason


RowOutcome = Union[Accepted, Rejected]


@dataclass(frozen=True)
class IngestionResult:
    """Read-only output of one ingestion pass."""
    records: list[TransactionRecord]
    source_row_count: int
    accepted_row_count: int
    detected_columns: list[str]
    file_name: Optional[str] = None
    sheet_name: Optional[str] = None
    skipped_empty_count: int = 0
    rejections: list[tuple[int, RejectReason]] = field(default_factory=list)

    @property
    def rejected_row_count(self) -> int:
        return len(self.rejections)

    def to_dict(self) -> dict:
        return {
            "file_name": self.file_name,
            "sheet_name": self.sheet_name,
            "source_row_count": self.source_row_count,
            "accepted_row_count": self.accepted_row_count,
            "rejected_row_count": self.rejected_row_count,
            "skipped_empty_count": self.skipped_empty_count,
            "detected_columns": list(self.detected_columns),
        }


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

ALL = "all"


@dataclass
class FilterCriteria:
    """Current query state. Defaults (empty / "all" / None) mean no constraint."""
    search_text: str = ""
    category: str = ALL
    type: str = ALL
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None

    @property
    def is_default(self) -> bool:
        return (
            not self.search_text
            and (not self.category or self.category == ALL)
            and (not self.type or self.type == ALL)
            and self.date_from is None
            and self.date_to is None
        )


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: float
    percentage: float = 0.0


@dataclass(frozen=True)
class MonthTotal:
    month_key: str          # YYYY-MM
    income: float = 0.0
    expenses: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expenses


@dataclass(frozen=True)
class SummaryTotals:
    total_income: float
    total_expenses: float
    balance: float
    savings_rate: float
    transaction_count: int


@dataclass(frozen=True)
class DateRange:
    min: Optional[dt.date] = None
    max: Optional[dt.date] = None
