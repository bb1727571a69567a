"""
Findash — Configuration: paths, column aliases, file types, logging.
"""
import logging
import os
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with FINDASH_DATA_DIR env var for deployment
# ---------------------------------------------------------------------------
BASE_FOLDER = Path(os.environ.get("FINDASH_DATA_DIR", str(Path.home() / "Desktop" / "Findash")))
EXPORTS_FOLDER = BASE_FOLDER / "exports"

# ---------------------------------------------------------------------------
# Canonical fields + header aliases (substring match on lower-cased headers)
# Field order matters: a header is claimed by the first field that matches.
# ---------------------------------------------------------------------------
CANONICAL_FIELDS = ("date", "description", "category", "amount", "type")

COLUMN_ALIASES = {
    "date": ("date", "transaction date", "trans date", "posting date"),
    "description": ("description", "desc", "memo", "narrative", "details", "transaction"),
    "category": ("category", "type", "transaction type", "group"),
    "amount": ("amount", "value", "sum", "total", "debit", "credit"),
    "type": ("income/expense", "transaction kind", "in/out", "direction"),
}

DEFAULT_CATEGORY = "Uncategorized"

# Type-column text containing any of these marks the row as income
INCOME_TYPE_KEYWORDS = ("income", "in", "credit")

# ---------------------------------------------------------------------------
# Accepted upload formats
# ---------------------------------------------------------------------------
SPREADSHEET_EXTENSIONS = {".xlsx", ".xls", ".xlsm", ".csv"}
# MIME type → reader, used when the file name has no known extension
SPREADSHEET_MIME_FORMATS = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "application/vnd.ms-excel.sheet.macroenabled.12": "xlsx",
    "application/vnd.ms-excel": "xls",
    "application/excel": "xls",
    "application/x-excel": "xls",
    "text/csv": "csv",
}
SPREADSHEET_MIME_TYPES = set(SPREADSHEET_MIME_FORMATS)
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# ---------------------------------------------------------------------------
# Sample template (header row + a few realistic rows)
# ---------------------------------------------------------------------------
SAMPLE_TEMPLATE_ROWS = [
    ["Date", "Description", "Category", "Amount", "Type"],
    ["2026-01-01", "Monthly Salary", "Salary", 5000, "Income"],
    ["2026-01-02", "Grocery Store", "Food & Dining", -150, "Expense"],
    ["2026-01-03", "Electric Bill", "Utilities", -120, "Expense"],
    ["2026-01-05", "Freelance Project", "Side Income", 800, "Income"],
    ["2026-01-07", "Restaurant Dinner", "Food & Dining", -65, "Expense"],
    ["2026-01-10", "Gas Station", "Transportation", -45, "Expense"],
    ["2026-01-12", "Online Shopping", "Shopping", -200, "Expense"],
    ["2026-01-15", "Gym Membership", "Health & Fitness", -50, "Expense"],
    ["2026-01-18", "Internet Bill", "Utilities", -60, "Expense"],
    ["2026-01-20", "Coffee Shop", "Food & Dining", -12, "Expense"],
]

# ---------------------------------------------------------------------------
# Transaction table paging
# ---------------------------------------------------------------------------
DEFAULT_PAGE_SIZE = 10
PAGE_SIZES = (10, 25, 50, 100)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("FINDASH_LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(level: str | int | None = None) -> None:
    """Attach a single stream handler to the ``findash`` logger.

    Safe to call more than once; later calls only adjust the level.
    """
    logger = logging.getLogger("findash")
    resolved = level if level is not None else LOG_LEVEL
    logger.setLevel(resolved)
    if not any(getattr(h, "_findash", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._findash = True
        logger.addHandler(handler)
        logger.propagate = False
