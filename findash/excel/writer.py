"""
ExcelWriter — builds the styled workbooks behind every xlsx download.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Optional

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from findash.excel.formatters import fit_columns, kpi_card, style_header, write_cell
from findash.excel.styles import (
    HIGHLIGHT_FILLS, NEGATIVE_KPI_FONT, POSITIVE_KPI_FONT, SECTION_FONT, SUBTITLE_FONT, TITLE_FONT,
)

ColSpec = tuple[str, str, str]  # (key, col_type, label)
HighlightFn = Callable[[dict], Optional[str]]


class ExcelWriter:
    """One workbook, sheets added in order."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self.wb.remove(self.wb.active)

    def add_sheet(self, title: str) -> Worksheet:
        return self.wb.create_sheet(title=title)

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, width: int = 6) -> int:
        """Merged title + subtitle across ``width`` columns. Returns the first free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=width)
        for col in range(1, width + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18
        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        ws.cell(row=row, column=1, value=title).font = SECTION_FONT
        return row + 2

    # ------------------------------------------------------------------
    # KPI cards
    # ------------------------------------------------------------------

    def write_kpi_row(
        self,
        ws: Worksheet,
        row: int,
        cards: list[tuple],  # [(value, label, fmt), ...]
        start_col: int = 1,
        step: int = 2,
    ) -> int:
        for offset, (value, label, fmt) in enumerate(cards):
            kpi_card(ws, row, start_col + offset * step, value, label, fmt)
        return row + 3

    def write_signed_kpi(self, ws: Worksheet, row: int, col: int, value: float, label: str) -> None:
        """Currency card colored by sign (net balance)."""
        font = POSITIVE_KPI_FONT if value >= 0 else NEGATIVE_KPI_FONT
        kpi_card(ws, row, col, value, label, "currency", font=font)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        rows: list[dict],
        highlight: HighlightFn | None = None,
        totals: bool = False,
        total_label: str = "TOTAL",
        freeze: bool = True,
    ) -> int:
        """Header + one row per dict (+ optional totals row).

        ``highlight(row_data)`` may return a key of HIGHLIGHT_FILLS to tint
        the whole row. Returns the row after the table.
        """
        style_header(ws, start_row, [label for _, _, label in columns])

        row = start_row + 1
        for row_data in rows:
            fill = HIGHLIGHT_FILLS.get(highlight(row_data)) if highlight else None
            for col, (key, col_type, _) in enumerate(columns, 1):
                write_cell(ws, row, col, row_data.get(key, ""), col_type, fill=fill)
            row += 1

        if totals and rows:
            write_cell(ws, row, 1, total_label, total=True)
            for col, (key, col_type, _) in enumerate(columns[1:], 2):
                # Percent columns don't add up
                summable = col_type in ("currency", "number")
                value = sum(r.get(key) or 0 for r in rows) if summable else ""
                write_cell(ws, row, col, value, col_type if summable else "text", total=True)
            row += 1

        fit_columns(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return row

    def write_rows(self, ws: Worksheet, rows: list[list]) -> None:
        """Unstyled rows (templates)."""
        for values in rows:
            ws.append(list(values))

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.wb.save(buf)
        return buf.getvalue()
