"""Display strings for the UI shell: money, dates and survival days."""

import datetime as dt
from typing import Union

from finance_tracker.models.expense import DerivedMetrics


INFINITY_SYMBOL = "∞"


def format_currency(amount: float) -> str:
    """US dollars with two decimals: 1234.5 -> "$1,234.50", -12 -> "-$12.00"."""
    sign = "-" if amount < 0 and round(abs(amount), 2) != 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_date(value: Union[dt.date, str]) -> str:
    """Short human form: "Jan 5, 2025"."""
    if isinstance(value, str):
        value = dt.date.fromisoformat(value)
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_survival_days(metrics: DerivedMetrics) -> str:
    if metrics.survival_unbounded:
        return INFINITY_SYMBOL
    return f"{metrics.survival_days:.1f}"
