"""Ledger package: expense store, tracking period, metrics and grouping."""

from finance_tracker.ledger.grouping import GroupingView
from finance_tracker.ledger.metrics import MetricsEngine, round_half_up
from finance_tracker.ledger.period import elapsed_days, utc_now
from finance_tracker.ledger.store import (
    ExpenseIdGenerator,
    ExpenseStore,
    default_id_generator,
)

__all__ = [
    "ExpenseIdGenerator",
    "ExpenseStore",
    "GroupingView",
    "MetricsEngine",
    "default_id_generator",
    "elapsed_days",
    "round_half_up",
    "utc_now",
]
