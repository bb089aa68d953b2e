"""Tests for display formatting."""

from datetime import date

import pytest

from finance_tracker.formatting import format_currency, format_date, format_survival_days
from finance_tracker.models.expense import UNBOUNDED, DerivedMetrics


def metrics_with(survival_days):
    return DerivedMetrics(
        total_balance=0,
        total_savings=0,
        total_expense=0,
        available_balance=0,
        elapsed_days=1,
        avg_daily_expense=0,
        survival_days=survival_days,
    )


class TestFormatCurrency:
    @pytest.mark.parametrize("amount, expected", [
        (0, "$0.00"),
        (5, "$5.00"),
        (1234.5, "$1,234.50"),
        (1000000, "$1,000,000.00"),
        (-12, "-$12.00"),
        (-0.001, "$0.00"),
    ])
    def test_format_currency(self, amount, expected):
        assert format_currency(amount) == expected


class TestFormatDate:
    def test_from_date(self):
        assert format_date(date(2025, 1, 5)) == "Jan 5, 2025"

    def test_from_iso_string(self):
        assert format_date("2024-12-31") == "Dec 31, 2024"


class TestFormatSurvivalDays:
    def test_unbounded_is_infinity_symbol(self):
        assert format_survival_days(metrics_with(UNBOUNDED)) == "∞"

    def test_one_decimal(self):
        assert format_survival_days(metrics_with(18.0)) == "18.0"
