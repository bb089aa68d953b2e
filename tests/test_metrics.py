"""Tests for the metrics engine."""

from datetime import date, datetime, timedelta, timezone

import pytest

from finance_tracker.ledger import MetricsEngine, round_half_up
from finance_tracker.models.expense import UNBOUNDED, AccountState, ExpenseRecord


START = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)
D = date(2025, 1, 2)


def make_state(balance=0.0, savings=0.0, amounts=()):
    expenses = [
        ExpenseRecord(id=i + 1, amount=amount, category="Food", date=D)
        for i, amount in enumerate(amounts)
    ]
    return AccountState(
        total_balance=balance,
        total_savings=savings,
        expenses=expenses,
        start_date=START,
    )


@pytest.fixture
def engine():
    return MetricsEngine()


class TestMetricsEngine:
    """Tests for MetricsEngine.compute."""

    def test_worked_example(self, engine):
        state = make_state(balance=1000, savings=200, amounts=[50, 30])
        metrics = engine.compute(state, START + timedelta(days=2))

        assert metrics.total_expense == 80
        assert metrics.available_balance == 720
        assert metrics.elapsed_days == 2
        assert metrics.avg_daily_expense == 40
        assert metrics.survival_days == 18.0

    def test_zero_expenses_is_unbounded(self, engine):
        metrics = engine.compute(make_state(balance=500), START + timedelta(days=3))

        assert metrics.avg_daily_expense == 0
        assert metrics.survival_days == UNBOUNDED
        assert metrics.survival_unbounded is True

    def test_same_day_averages_over_one_day(self, engine):
        metrics = engine.compute(make_state(balance=100, amounts=[25]), START)

        assert metrics.elapsed_days == 1
        assert metrics.avg_daily_expense == 25
        assert metrics.survival_days == 3.0

    def test_available_balance_may_go_negative(self, engine):
        state = make_state(balance=100, savings=80, amounts=[50])
        metrics = engine.compute(state, START + timedelta(days=1))

        assert metrics.available_balance == -30
        assert metrics.overspent is True
        assert metrics.survival_days == -0.6

    def test_exhausted_balance_projects_negative_days(self, engine):
        # available -20, avg 10 per day
        state = make_state(balance=10, amounts=[30])
        metrics = engine.compute(state, START + timedelta(days=3))

        assert metrics.survival_days == -2.0
        assert metrics.survival_unbounded is False

    def test_zero_available_balance_projects_zero_days(self, engine):
        metrics = engine.compute(make_state(balance=50, amounts=[50]), START)
        assert metrics.survival_days == 0.0

    def test_huge_balance_with_tiny_spending(self, engine):
        state = make_state(balance=1e20, amounts=[1e-8])
        metrics = engine.compute(state, START)

        assert metrics.avg_daily_expense == 1e-8
        assert metrics.survival_days == pytest.approx(1e28)

    def test_savings_above_balance_without_spending_is_unbounded(self, engine):
        metrics = engine.compute(make_state(balance=100, savings=300), START)

        assert metrics.available_balance == -200
        assert metrics.survival_days == UNBOUNDED

    def test_survival_days_rounded_to_one_decimal(self, engine):
        # available 100, avg 30 per day -> 3.333...
        state = make_state(balance=190, amounts=[90])
        metrics = engine.compute(state, START + timedelta(days=3))

        assert metrics.survival_days == 3.3

    def test_recomputation_is_idempotent(self, engine):
        state = make_state(balance=1000, savings=10, amounts=[12.3, 4.56, 7.89])
        now = START + timedelta(days=5, hours=3)

        assert engine.compute(state, now) == engine.compute(state, now)

    def test_total_is_sum_of_amounts(self, engine):
        amounts = [0.1, 0.2, 19.99, 5, 1234.56]
        metrics = engine.compute(make_state(amounts=amounts), START)

        assert metrics.total_expense == sum(amounts)

    def test_compute_does_not_mutate_state(self, engine):
        state = make_state(balance=50, amounts=[5])
        before = state.model_copy(deep=True)

        engine.compute(state, START + timedelta(days=9))

        assert state == before


class TestRoundHalfUp:
    """Halves round away from zero, like the dashboard always showed them."""

    @pytest.mark.parametrize("value, expected", [
        (18.0, 18.0),
        (1.25, 1.3),
        (2.75, 2.8),
        (3.349, 3.3),
        (-1.25, -1.3),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value, 1) == expected

    def test_two_places(self):
        assert round_half_up(0.125, 2) == 0.13

    def test_huge_value(self):
        assert round_half_up(1e28, 1) == 1e28

    @pytest.mark.parametrize("value", [float("inf"), float("-inf")])
    def test_infinite_value_passes_through(self, value):
        assert round_half_up(value, 1) == value
