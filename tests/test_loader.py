"""Tests for findash.data.loader — file validation, sheet reading, ingestion."""

import asyncio
import copy
import datetime as dt

import pytest

from findash.config import XLSX_MEDIA_TYPE
from findash.data.errors import (
    EmptySheetError, IngestionError, NoValidTransactionsError, UnreadableFileError,
    UnsupportedFileTypeError,
)
from findash.data.loader import (
    ingest, is_spreadsheet, load_file, load_workbook_bytes, read_sheet, read_upload,
    sheet_format, validate_file_type,
)
from findash.data.schemas import RejectReason, TransactionType
from tests.conftest import HEADER, TEMPLATE_EXPENSES, TEMPLATE_INCOME, make_xlsx


class TestFileType:
    @pytest.mark.parametrize("name", ["a.xlsx", "B.XLS", "c.xlsm", "d.csv"])
    def test_accepts_by_extension(self, name):
        assert is_spreadsheet(name)

    def test_accepts_by_mime_type(self):
        assert is_spreadsheet("upload", XLSX_MEDIA_TYPE)
        assert is_spreadsheet("upload", "text/csv; charset=utf-8")

    def test_rejects_other_files(self):
        with pytest.raises(UnsupportedFileTypeError, match="valid spreadsheet"):
            validate_file_type("notes.txt", "text/plain")

    def test_errors_share_a_base(self):
        assert issubclass(UnsupportedFileTypeError, IngestionError)
        assert issubclass(NoValidTransactionsError, IngestionError)


class TestIngest:
    def test_single_row(self):
        result = ingest([HEADER, ["2026-01-02", "Grocery Store", "Food & Dining", -150, "Expense"]])
        assert result.source_row_count == 1
        assert result.accepted_row_count == 1
        assert result.rejected_row_count == 0
        r = result.records[0]
        assert (r.id, r.amount, r.type) == (1, 150.0, TransactionType.EXPENSE)

    def test_zero_amount_row_is_dropped(self):
        result = ingest([
            HEADER,
            ["2026-01-02", "Grocery Store", "Food & Dining", -150, "Expense"],
            ["2026-01-03", "Nothing", "Misc", 0, "Expense"],
        ])
        assert result.source_row_count == 2
        assert result.accepted_row_count == 1
        assert result.rejections == [(2, RejectReason.ZERO_AMOUNT)]

    def test_ids_keep_sheet_positions(self):
        result = ingest([
            HEADER,
            ["bad date", "x", "y", 10, ""],
            ["2026-01-02", "x", "y", 10, ""],
        ])
        assert [r.id for r in result.records] == [2]

    def test_empty_rows_are_skipped_not_rejected(self):
        result = ingest([
            HEADER,
            [],
            ["2026-01-02", "x", "y", 10, ""],
            [None, "", None],
        ])
        assert result.source_row_count == 3
        assert result.accepted_row_count == 1
        assert result.skipped_empty_count == 2
        assert result.rejected_row_count == 0

    def test_row_counts_add_up(self, template_rows):
        rows = template_rows + [["", "", "", "", ""], ["2026-02-30", "x", "y", 1, ""]]
        result = ingest(rows)
        assert result.source_row_count == (
            result.accepted_row_count + result.rejected_row_count + result.skipped_empty_count
        )

    def test_template_totals(self, template_rows):
        result = ingest(template_rows)
        assert result.accepted_row_count == 10
        income = sum(r.amount for r in result.records if r.type == TransactionType.INCOME)
        expenses = sum(r.amount for r in result.records if r.type == TransactionType.EXPENSE)
        assert income == pytest.approx(TEMPLATE_INCOME)
        assert expenses == pytest.approx(TEMPLATE_EXPENSES)

    def test_every_amount_is_positive(self, template_rows):
        assert all(r.amount > 0 for r in ingest(template_rows).records)

    def test_input_is_not_modified(self, template_rows):
        before = copy.deepcopy(template_rows)
        ingest(template_rows)
        assert template_rows == before

    def test_result_metadata(self, template_rows):
        result = ingest(template_rows, file_name="jan.xlsx", sheet_name="Sheet1")
        d = result.to_dict()
        assert d["file_name"] == "jan.xlsx"
        assert d["sheet_name"] == "Sheet1"
        assert d["detected_columns"] == ["date", "description", "category", "amount"]

    @pytest.mark.parametrize("rows", [[], [HEADER]])
    def test_no_data_rows(self, rows):
        with pytest.raises(EmptySheetError, match="empty or has no data rows"):
            ingest(rows)

    def test_nothing_valid(self):
        with pytest.raises(NoValidTransactionsError):
            ingest([HEADER, ["2026-01-02", "x", "y", 0, ""], [None, "x", "y", 5, ""]])

    def test_unrecognized_headers(self):
        with pytest.raises(NoValidTransactionsError):
            ingest([["Foo", "Bar"], ["2026-01-02", 5]])


class TestReadSheet:
    def test_xlsx_first_sheet(self):
        content = make_xlsx(
            [HEADER, [dt.datetime(2026, 1, 2), "Grocery Store", "Food", -10.5, "Expense"]],
            title="January",
        )
        sheet_name, rows = read_sheet(content, "jan.xlsx")
        assert sheet_name == "January"
        assert rows[0] == HEADER
        assert rows[1][0].date() == dt.date(2026, 1, 2)
        assert rows[1][3] == -10.5

    def test_trailing_empty_rows_trimmed(self):
        content = make_xlsx([HEADER, ["2026-01-02", "x", "y", 1, ""], [None] * 5, [None] * 5])
        _, rows = read_sheet(content, "jan.xlsx")
        assert len(rows) == 2

    def test_csv(self):
        content = "Date,Description,Amount\n2026-01-05,Coffee,-4.50\n".encode()
        sheet_name, rows = read_sheet(content, "statement.csv")
        assert sheet_name == "statement"
        assert rows == [["Date", "Description", "Amount"], ["2026-01-05", "Coffee", "-4.50"]]

    def test_table_below_blank_rows(self):
        content = make_xlsx([[None, None], [None, None], ["Date", "Amount"], ["2026-01-02", -5]])
        _, rows = read_sheet(content, "offset.xlsx")
        assert rows == [["Date", "Amount"], ["2026-01-02", -5]]

    def test_csv_leading_blank_lines(self):
        _, rows = read_sheet(b"\n\nDate,Amount\n2026-01-02,-5\n", "offset.csv")
        assert rows == [["Date", "Amount"], ["2026-01-02", "-5"]]

    def test_csv_ragged_rows(self):
        content = b"Date,Description,Amount\n2026-01-05,Coffee,-4.50\n2026-01-06,Lunch,-12,extra\n2026-01-07,Tea\n"
        _, rows = read_sheet(content, "ragged.csv")
        assert rows[2] == ["2026-01-06", "Lunch", "-12"]
        assert rows[3][:2] == ["2026-01-07", "Tea"]
        assert rows[3][2] in (None, "")

    def test_csv_with_bom(self):
        content = "\ufeffDate,Amount\n2026-01-05,3\n".encode("utf-8")
        _, rows = read_sheet(content, "s.csv")
        assert rows[0][0] == "Date"

    def test_empty_content(self):
        with pytest.raises(UnreadableFileError):
            read_sheet(b"", "jan.xlsx")

    def test_corrupt_workbook(self):
        with pytest.raises(UnreadableFileError, match="Failed to parse"):
            read_sheet(b"definitely not a zip archive", "jan.xlsx")


class TestLoadWorkbookBytes:
    def test_xlsx(self, template_xlsx):
        result = load_workbook_bytes(template_xlsx, "finance_template.xlsx")
        assert result.accepted_row_count == 10
        assert result.sheet_name == "Transactions"
        assert result.file_name == "finance_template.xlsx"

    def test_csv_expense_inferred_from_sign(self):
        content = b"Date,Description,Amount\n2026-01-05,Coffee,-4.50\n2026-01-06,Refund,4.50\n"
        result = load_workbook_bytes(content, "statement.csv")
        assert [r.type for r in result.records] == [TransactionType.EXPENSE, TransactionType.INCOME]

    def test_table_below_blank_rows(self):
        content = make_xlsx([[None, None], [None, None], ["Date", "Amount"], ["2026-01-02", -5]])
        result = load_workbook_bytes(content, "offset.xlsx")
        assert result.accepted_row_count == 1
        assert result.detected_columns == ["date", "amount"]

    def test_csv_extra_field_does_not_abort(self):
        content = b"Date,Description,Amount\n2026-01-05,Coffee,-4.50\n2026-01-06,Lunch,-12,extra\n"
        result = load_workbook_bytes(content, "statement.csv")
        assert result.accepted_row_count == 2
        assert [r.amount for r in result.records] == [4.5, 12.0]

    def test_csv_short_row_is_rejected_not_fatal(self):
        content = b"Date,Description,Amount\n2026-01-05,Coffee,-4.50\n2026-01-07,Tea\n"
        result = load_workbook_bytes(content, "statement.csv")
        assert result.accepted_row_count == 1
        assert result.rejections == [(2, RejectReason.MISSING_AMOUNT)]

    def test_reader_chosen_by_mime_without_extension(self):
        content = b"Date,Description,Amount\n2026-01-05,Coffee,-4.50\n"
        result = load_workbook_bytes(content, "export", "text/csv")
        assert result.accepted_row_count == 1

    def test_header_only_workbook(self):
        with pytest.raises(EmptySheetError):
            load_workbook_bytes(make_xlsx([HEADER]), "empty.xlsx")

    def test_type_checked_before_parsing(self):
        with pytest.raises(UnsupportedFileTypeError):
            load_workbook_bytes(b"garbage", "notes.txt", "text/plain")


class TestLoadFile:
    def test_reads_from_disk(self, tmp_path, template_xlsx):
        path = tmp_path / "finance.xlsx"
        path.write_bytes(template_xlsx)
        assert load_file(path).accepted_row_count == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(UnreadableFileError):
            load_file(tmp_path / "missing.xlsx")


class _FakeUpload:
    def __init__(self, content=b"", error=None):
        self.content = content
        self.error = error

    async def read(self):
        if self.error:
            raise self.error
        return self.content


class TestReadUpload:
    def test_returns_bytes(self):
        assert asyncio.run(read_upload(_FakeUpload(b"abc"))) == b"abc"

    def test_read_failure(self):
        with pytest.raises(UnreadableFileError, match="Failed to read file"):
            asyncio.run(read_upload(_FakeUpload(error=OSError("disk gone"))))


class TestSheetFormat:
    @pytest.mark.parametrize("name, content_type, expected", [
        ("a.csv", None, "csv"),
        ("a.XLS", None, "xls"),
        ("a.xlsm", None, "xlsx"),
        ("a.csv", "application/vnd.ms-excel", "csv"),
        ("export", "text/csv; charset=utf-8", "csv"),
        ("export", "application/vnd.ms-excel", "xls"),
        ("export", XLSX_MEDIA_TYPE, "xlsx"),
        ("export", None, "xlsx"),
    ])
    def test_extension_then_mime(self, name, content_type, expected):
        assert sheet_format(name, content_type) == expected
