# tests/test_formatting.py
# -----------------------------------------------------------------------
# Unit tests for statement_engine/formatting.py
# -----------------------------------------------------------------------

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from statement_engine.formatting import (
    NOT_AVAILABLE,
    format_currency,
    humanize_key,
    parse_numeric,
    truncate,
)


class TestFormatCurrency:
    @pytest.mark.parametrize("value, expected", [
        (1000, "$1,000"),
        (1000.4, "$1,000"),
        ("1000", "$1,000"),
        ("$1,234.60", "$1,235"),
        (-250, "-$250"),
        (0, "$0"),
        (15383073, "$15,383,073"),
    ])
    def test_numeric(self, value, expected):
        assert format_currency(value) == expected

    @pytest.mark.parametrize("value", ["28%", "4.8x", "Q1 only"])
    def test_non_numeric_passthrough(self, value):
        assert format_currency(value) == value

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value):
        assert format_currency(value) == NOT_AVAILABLE


class TestParseNumeric:
    def test_bool_is_not_numeric(self):
        assert parse_numeric(True) is None

    def test_nan_is_not_numeric(self):
        assert parse_numeric(float("nan")) is None

    def test_strings(self):
        assert parse_numeric(" 1,000 ") == 1000
        assert parse_numeric(".5") == 0.5
        assert parse_numeric("1e5") is None


class TestHumanizeKey:
    def test_snake_case(self):
        assert humanize_key("cash_flow") == "Cash Flow"
        assert humanize_key("operating_cost") == "Operating Cost"

    def test_already_readable(self):
        assert humanize_key("Gross Profit") == "Gross Profit"


class TestTruncate:
    def test_short_text_unchanged(self):
        assert truncate("abc", 5) == "abc"

    def test_long_text(self):
        assert truncate("a" * 600, 500) == "a" * 500 + "..."

    def test_none(self):
        assert truncate(None, 10) == ""
