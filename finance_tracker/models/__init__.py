"""
Data Models Package

This package contains all Pydantic models used by the Finance Tracker.
"""

from finance_tracker.models.expense import (
    DEFAULT_CATEGORY,
    UNBOUNDED,
    AccountState,
    CategoryTotal,
    DashboardView,
    DateGroup,
    DerivedMetrics,
    ExpenseRecord,
)
from finance_tracker.models.audit import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Expense models
    "DEFAULT_CATEGORY",
    "UNBOUNDED",
    "AccountState",
    "CategoryTotal",
    "DashboardView",
    "DateGroup",
    "DerivedMetrics",
    "ExpenseRecord",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]
