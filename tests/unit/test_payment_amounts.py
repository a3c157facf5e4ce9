"""Unit tests for payment amount parsing and due-date helpers."""

from datetime import date
from decimal import Decimal

import pytest

from bluemoon.errors import ValidationError
from bluemoon.services.payment_service import last_day_of_month, parse_amount


class TestParseAmount:
    @pytest.mark.parametrize(
        "raw, expected",
        [("50", Decimal("50.00")), (12.5, Decimal("12.50")), (Decimal("0.015"), Decimal("0.02"))],
    )
    def test_valid_amounts(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, ""])
    def test_missing_amount(self, raw):
        with pytest.raises(ValidationError, match="amount is required"):
            parse_amount(raw)

    @pytest.mark.parametrize("raw", ["0", "-5", "NaN", "Infinity"])
    def test_not_positive(self, raw):
        with pytest.raises(ValidationError, match="greater than zero"):
            parse_amount(raw)

    def test_not_a_number(self):
        with pytest.raises(ValidationError, match="must be a number"):
            parse_amount("fifty")


class TestLastDayOfMonth:
    def test_regular_months(self):
        assert last_day_of_month(2025, 1) == date(2025, 1, 31)
        assert last_day_of_month(2025, 4) == date(2025, 4, 30)

    def test_february(self):
        assert last_day_of_month(2025, 2) == date(2025, 2, 28)
        assert last_day_of_month(2024, 2) == date(2024, 2, 29)

    def test_invalid_month(self):
        with pytest.raises(ValidationError):
            last_day_of_month(2025, 13)
