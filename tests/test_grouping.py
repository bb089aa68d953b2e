"""Tests for date grouping and category totals."""

from datetime import date, datetime, timezone

import pytest

from finance_tracker.ledger import GroupingView
from finance_tracker.models.expense import AccountState, ExpenseRecord


START = datetime(2025, 1, 1, tzinfo=timezone.utc)
D1 = date(2025, 1, 10)
D2 = date(2025, 1, 3)


def make_state(*entries):
    """entries: (amount, category, date) tuples in insertion order."""
    expenses = [
        ExpenseRecord(id=i + 1, amount=amount, category=category, date=day)
        for i, (amount, category, day) in enumerate(entries)
    ]
    return AccountState(
        total_balance=1000, total_savings=0, expenses=expenses, start_date=START
    )


@pytest.fixture
def grouping():
    return GroupingView()


class TestDateGroups:
    """Tests for GroupingView.build."""

    def test_empty_state_has_no_groups(self, grouping):
        assert grouping.build(make_state(), 0) == []

    def test_groups_sorted_newest_first_and_flagged(self, grouping):
        state = make_state(
            (4, "Bus", D2),
            (60, "Food", D1),
            (6, "Snacks", D2),
            (40, "Rent", D1),
        )

        groups = grouping.build(state, 55)

        assert [g.date for g in groups] == [D1, D2]
        assert [g.subtotal for g in groups] == [100, 10]
        assert [g.over_budget for g in groups] == [True, False]

    def test_records_keep_insertion_order_within_group(self, grouping):
        state = make_state(
            (1, "A", D1),
            (2, "B", D2),
            (3, "C", D1),
            (4, "D", D1),
        )

        d1_group = grouping.build(state, 0)[0]

        assert [r.category for r in d1_group.records] == ["A", "C", "D"]

    def test_subtotal_equal_to_average_is_not_over_budget(self, grouping):
        groups = grouping.build(make_state((50, "Food", D1)), 50)
        assert groups[0].over_budget is False

    def test_sorting_is_chronological_not_insertion(self, grouping):
        days = [date(2024, 12, 31), date(2025, 2, 1), date(2025, 1, 15)]
        state = make_state(*[(1, "X", d) for d in days])

        assert [g.date for g in grouping.build(state, 0)] == sorted(days, reverse=True)


class TestCategoryTotals:
    """Tests for GroupingView.category_totals."""

    def test_empty_state_has_no_categories(self, grouping):
        assert grouping.category_totals(make_state()) == []

    def test_totals_in_first_seen_order(self, grouping):
        state = make_state(
            (30, "Food", D1),
            (10, "Bus", D2),
            (20, "Food", D2),
            (40, "Rent", D1),
        )

        totals = grouping.category_totals(state)

        assert [(t.category, t.total) for t in totals] == [
            ("Food", 50), ("Bus", 10), ("Rent", 40),
        ]
        assert [t.share for t in totals] == [50.0, 10.0, 40.0]

    def test_share_rounds_to_one_decimal(self, grouping):
        state = make_state((1, "A", D1), (2, "B", D1))

        shares = [t.share for t in grouping.category_totals(state)]

        assert shares == [33.3, 66.7]
