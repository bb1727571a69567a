"""
Single source of truth for Excel colors, fonts, fills, borders, alignments.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------
DARK_INDIGO = "283593"
HEADER_BG = "283593"
ALTERNATE_ROW = "F5F5F5"
WHITE = "FFFFFF"
BLACK = "000000"
INCOME_GREEN = "2E7D32"
LIGHT_GREEN = "E8F5E9"
EXPENSE_RED = "C62828"
LIGHT_RED = "FFEBEE"
TOTAL_ROW_BG = "E8EAF6"
GRAY_666 = "666666"
BORDER_GRAY = "CCCCCC"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=20, bold=True, color=DARK_INDIGO)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=GRAY_666)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=BLACK)
TOTAL_FONT = Font(name="Calibri", size=10, bold=True, color=BLACK)
SECTION_FONT = Font(name="Calibri", size=13, bold=True, color=DARK_INDIGO)
KPI_VALUE_FONT = Font(name="Calibri", size=22, bold=True, color=DARK_INDIGO)
KPI_LABEL_FONT = Font(name="Calibri", size=9, color=GRAY_666)
POSITIVE_KPI_FONT = Font(name="Calibri", size=22, bold=True, color=INCOME_GREEN)
NEGATIVE_KPI_FONT = Font(name="Calibri", size=22, bold=True, color=EXPENSE_RED)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=HEADER_BG, end_color=HEADER_BG, fill_type="solid")
ALTERNATE_FILL = PatternFill(start_color=ALTERNATE_ROW, end_color=ALTERNATE_ROW, fill_type="solid")
TOTAL_FILL = PatternFill(start_color=TOTAL_ROW_BG, end_color=TOTAL_ROW_BG, fill_type="solid")
INCOME_FILL = PatternFill(start_color=LIGHT_GREEN, end_color=LIGHT_GREEN, fill_type="solid")
EXPENSE_FILL = PatternFill(start_color=LIGHT_RED, end_color=LIGHT_RED, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color=BORDER_GRAY),
    right=Side(style="thin", color=BORDER_GRAY),
    top=Side(style="thin", color=BORDER_GRAY),
    bottom=Side(style="thin", color=BORDER_GRAY),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=DARK_INDIGO),
    right=Side(style="thin", color=DARK_INDIGO),
    top=Side(style="thin", color=DARK_INDIGO),
    bottom=Side(style="medium", color=DARK_INDIGO),
)
TOTAL_BORDER = Border(
    left=Side(style="thin", color="999999"),
    right=Side(style="thin", color="999999"),
    top=Side(style="medium", color="999999"),
    bottom=Side(style="medium", color="999999"),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

# ---------------------------------------------------------------------------
# Highlight name → fill mapping
# ---------------------------------------------------------------------------
HIGHLIGHT_FILLS = {
    "income": INCOME_FILL,
    "expense": EXPENSE_FILL,
}
