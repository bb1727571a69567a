"""
Cell-level writers for report workbooks: headers, data cells, KPI cards.
"""
from __future__ import annotations

from openpyxl.styles import PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from findash.excel.styles import (
    ALTERNATE_FILL, CENTER, DATA_FONT, HEADER_BORDER, HEADER_FILL, HEADER_FONT,
    KPI_LABEL_FONT, KPI_VALUE_FONT, LEFT, RIGHT, THIN_BORDER, TOTAL_BORDER,
    TOTAL_FILL, TOTAL_FONT,
)

# Column type → Excel number format. "text" has none.
NUMBER_FORMATS = {
    "currency": '"$"#,##0.00',
    "percent": '0.0"%"',
    "number": "#,##0",
    "date": "yyyy-mm-dd",
}

NUMERIC_TYPES = frozenset({"currency", "percent", "number"})


def style_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    """Write column labels across ``row`` with the header look."""
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col, value=label)
        cell.font, cell.fill, cell.border, cell.alignment = HEADER_FONT, HEADER_FILL, HEADER_BORDER, CENTER


def write_cell(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    col_type: str = "text",
    *,
    total: bool = False,
    fill: PatternFill | None = None,
) -> None:
    cell = ws.cell(row=row, column=col, value=value)
    cell.alignment = RIGHT if col_type in NUMERIC_TYPES else LEFT
    if col_type in NUMBER_FORMATS:
        cell.number_format = NUMBER_FORMATS[col_type]

    if total:
        cell.font, cell.border, cell.fill = TOTAL_FONT, TOTAL_BORDER, TOTAL_FILL
        return
    cell.font, cell.border = DATA_FONT, THIN_BORDER
    if fill is not None:
        cell.fill = fill
    elif row % 2 == 0:
        cell.fill = ALTERNATE_FILL


def fit_columns(ws: Worksheet, min_width: int = 10, max_width: int = 50) -> None:
    """Size each column to its longest value, within bounds."""
    for column in ws.iter_cols():
        longest = max((len(str(c.value)) for c in column if c.value is not None), default=0)
        letter = get_column_letter(column[0].column)
        ws.column_dimensions[letter].width = max(min_width, min(longest + 2, max_width))


def kpi_card(ws: Worksheet, row: int, col: int, value, label: str, fmt: str = "currency", font=None) -> None:
    """Big number with a small caption underneath."""
    value_cell = ws.cell(row=row, column=col, value=value)
    value_cell.font = font or KPI_VALUE_FONT
    value_cell.alignment = CENTER
    if fmt in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[fmt]

    caption = ws.cell(row=row + 1, column=col, value=label)
    caption.font = KPI_LABEL_FONT
    caption.alignment = CENTER
