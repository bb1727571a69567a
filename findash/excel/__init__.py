"""Styled xlsx output: palette, cell writers, and the workbook builder."""
from .formatters import NUMBER_FORMATS, fit_columns, kpi_card, style_header, write_cell
from .writer import ExcelWriter
