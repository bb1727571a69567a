"""Tests for findash.analytics.common — math and display helpers."""

import datetime as dt

import numpy as np
import pytest

from findash.analytics.common import (
    format_currency, format_file_size, format_number, format_percentage, month_label,
    pct_of_total, safe_divide, sanitize_for_json,
)


class TestMath:
    def test_safe_divide(self):
        assert safe_divide(1, 4) == 0.25
        assert safe_divide(1, 0) == 0.0
        assert safe_divide(1, float("nan"), default=-1) == -1

    def test_pct_of_total(self):
        assert pct_of_total(25, 200) == pytest.approx(12.5)
        assert pct_of_total(5, 0) == 0.0


class TestSanitize:
    def test_converts_numpy_and_dates(self):
        out = sanitize_for_json({
            "n": np.int64(3),
            "f": np.float64(1.5),
            "bad": float("inf"),
            "d": dt.date(2026, 1, 2),
            "rows": (np.bool_(True),),
        })
        assert out == {"n": 3, "f": 1.5, "bad": 0.0, "d": "2026-01-02", "rows": [True]}
        assert type(out["n"]) is int


class TestFormatting:
    @pytest.mark.parametrize("amount, expected", [
        (1234.5, "$1,234.50"),
        (-1234.5, "-$1,234.50"),
        (0, "$0.00"),
    ])
    def test_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_percentage(self):
        assert format_percentage(0.25) == "25.0%"
        assert format_percentage(0.1234, decimals=2) == "12.34%"

    def test_number(self):
        assert format_number(1234567) == "1,234,567"

    @pytest.mark.parametrize("size, expected", [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1 MB"),
    ])
    def test_file_size(self, size, expected):
        assert format_file_size(size) == expected

    def test_month_label(self):
        assert month_label("2026-01") == "Jan 26"
        assert month_label("2025-12") == "Dec 25"
