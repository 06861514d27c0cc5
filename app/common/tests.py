"""
Tests for the shared validators and display formatters
"""

import datetime
from decimal import Decimal

import pytest

from app.common.formatters import (
    amount_in_words, format_currency, format_display_date, number_to_words, to_money
)
from app.common.validators import (
    gstin_state_code, normalize_gstin, split_address_lines, validate_email_address, validate_gstin
)


class TestFormatters:

    @pytest.mark.parametrize("amount, expected", [
        (0, "0.00"),
        ("560", "560.00"),
        (Decimal("1234.5"), "1,234.50"),
        (Decimal("123456.5"), "1,23,456.50"),
        (12345678, "1,23,45,678.00"),
        (Decimal("-4400"), "-4,400.00"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected

    def test_to_money_rounds_half_up(self):
        assert to_money("49.995") == Decimal("50.00")
        assert to_money(0.125) == Decimal("0.13")

    def test_display_date(self):
        assert format_display_date(datetime.date(2024, 4, 5)) == "05-Apr-24"

    @pytest.mark.parametrize("n, expected", [
        (0, "Zero"),
        (15, "Fifteen"),
        (560, "Five Hundred Sixty"),
        (100000, "One Lakh"),
        (2345678, "Twenty Three Lakh Forty Five Thousand Six Hundred Seventy Eight"),
        (10000000, "One Crore"),
    ])
    def test_number_to_words(self, n, expected):
        assert number_to_words(n) == expected

    def test_amount_in_words(self):
        assert amount_in_words("560") == "Rupees Five Hundred Sixty Only"
        assert amount_in_words("12.50") == "Rupees Twelve and Fifty Paise Only"


class TestValidators:

    def test_gstin_check_character(self):
        assert validate_gstin("27AAPFU0939F1ZV")
        assert validate_gstin(" 27aapfu0939f1zv ")
        assert not validate_gstin("27AAPFU0939F1ZW")
        assert not validate_gstin("27AAPFU0939F1Z")

    def test_gstin_helpers(self):
        assert normalize_gstin("  ") is None
        assert normalize_gstin("27 aapfu 0939f1zv") == "27AAPFU0939F1ZV"
        assert gstin_state_code("27AAPFU0939F1ZV") == "27"
        assert gstin_state_code("") is None

    def test_email(self):
        assert validate_email_address("accounts@gupta.example.com")
        assert not validate_email_address("accounts@")
        assert not validate_email_address("")

    def test_split_address_lines(self):
        assert split_address_lines("14, Station Road\n\n  Kothrud \n") == ["14, Station Road", "Kothrud"]
        assert split_address_lines(["A", " ", "B"]) == ["A", "B"]
        assert split_address_lines(None) == []
