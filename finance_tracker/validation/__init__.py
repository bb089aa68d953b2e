"""Input validation package."""

from finance_tracker.validation.validator import (
    normalize_category,
    parse_amount,
    parse_non_negative,
)

__all__ = ["normalize_category", "parse_amount", "parse_non_negative"]
