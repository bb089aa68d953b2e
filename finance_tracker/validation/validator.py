"""
Raw Input Validation

The UI shell hands us whatever the user typed. We re-validate every
value here, even if the shell already checked it, and raise
ValidationError before anything is changed.

IMPORTANT: Validation never silently fixes a number. A blank category
is the only value that gets a default.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from finance_tracker.errors import ValidationError
from finance_tracker.models.expense import DEFAULT_CATEGORY


MAX_CATEGORY_LENGTH = 100

# "1,250.75" is fine, "1,2,3" is not
THOUSANDS_PATTERN = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$")


def _to_number(raw: Any, field: str) -> float:
    """Coerce a raw numeric or string input to a finite float."""
    # bool is an int subclass; True is not an amount
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(field, raw, "must be a number")

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise ValidationError(field, raw, "is required")
        if "," in text:
            if not THOUSANDS_PATTERN.match(text):
                raise ValidationError(field, raw, "must be a number")
            text = text.replace(",", "")
        number = text
    elif isinstance(raw, (int, float, Decimal)):
        number = raw
    else:
        raise ValidationError(field, raw, "must be a number")

    try:
        value = float(Decimal(number)) if isinstance(number, str) else float(number)
    except OverflowError:
        raise ValidationError(field, raw, "must be a finite number")
    except (InvalidOperation, ValueError):
        # ValueError: signaling NaN
        raise ValidationError(field, raw, "must be a number")

    if not math.isfinite(value):
        raise ValidationError(field, raw, "must be a finite number")
    return value


def parse_amount(raw: Any, field: str = "amount") -> float:
    """Parse an expense amount: a finite number greater than zero."""
    value = _to_number(raw, field)
    if value <= 0:
        raise ValidationError(field, raw, "must be greater than zero")
    return value


def parse_non_negative(raw: Any, field: str) -> float:
    """Parse a balance or savings figure: a finite number, zero allowed."""
    value = _to_number(raw, field)
    if value < 0:
        raise ValidationError(field, raw, "cannot be negative")
    return value


def normalize_category(raw: Optional[str]) -> str:
    """Strip the label; blank or missing becomes the default category."""
    if raw is None:
        return DEFAULT_CATEGORY
    if not isinstance(raw, str):
        raise ValidationError("category", raw, "must be text")
    label = raw.strip()
    if not label:
        return DEFAULT_CATEGORY
    if len(label) > MAX_CATEGORY_LENGTH:
        raise ValidationError(
            "category",
            raw,
            f"must be at most {MAX_CATEGORY_LENGTH} characters",
        )
    return label
