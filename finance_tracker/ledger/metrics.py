"""
Metrics Engine

Derives the dashboard figures from an AccountState. Pure: the same
state and the same "now" always give the same DerivedMetrics.

DIVIDE-BY-ZERO POLICY:
- elapsed days are floored at 1, so the daily average is always defined
- a zero daily average means the money never runs out: UNBOUNDED
- an available balance that is already gone projects negative days:
  how long ago, at the current rate, the money ran out
"""

from datetime import datetime
import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from finance_tracker.ledger.period import elapsed_days
from finance_tracker.models.expense import UNBOUNDED, AccountState, DerivedMetrics


def round_half_up(value: float, places: int = 1) -> float:
    """Round the exact binary value of a float, halves away from zero."""
    if not math.isfinite(value):
        return value
    exact = Decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the kept places
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        quantum = Decimal(1).scaleb(-places)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


class MetricsEngine:
    """Computes DerivedMetrics for the summary cards."""

    def compute(self, state: AccountState, now: datetime) -> DerivedMetrics:
        total_expense = sum(record.amount for record in state.expenses)
        days = elapsed_days(state.start_date, now)
        available = state.total_balance - state.total_savings - total_expense
        avg_daily = total_expense / days

        return DerivedMetrics(
            total_balance=state.total_balance,
            total_savings=state.total_savings,
            total_expense=total_expense,
            available_balance=available,
            elapsed_days=days,
            avg_daily_expense=avg_daily,
            survival_days=self.survival_days(available, avg_daily),
        )

    @staticmethod
    def survival_days(available_balance: float, avg_daily_expense: float) -> float:
        if avg_daily_expense <= 0:
            return UNBOUNDED
        return round_half_up(available_balance / avg_daily_expense, 1)
