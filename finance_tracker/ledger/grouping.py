"""
Grouping View

Turns the flat expense list into the two views the renderer paints:
- date groups for the expense table, newest day first
- category totals for the breakdown chart
"""

from finance_tracker.ledger.metrics import round_half_up
from finance_tracker.models.expense import (
    AccountState,
    CategoryTotal,
    DateGroup,
    ExpenseRecord,
)


class GroupingView:
    """Builds the table and chart groupings from an AccountState."""

    def build(self, state: AccountState, avg_daily_expense: float) -> list[DateGroup]:
        """
        Group expenses by calendar date.

        Records keep their insertion order inside a group; groups are
        sorted by date, most recent first. A group is over budget when
        its subtotal exceeds the average daily expense.
        """
        grouped: dict = {}
        for record in state.expenses:
            grouped.setdefault(record.date, []).append(record)

        groups = []
        for day in sorted(grouped, reverse=True):
            records = grouped[day]
            subtotal = self._subtotal(records)
            groups.append(DateGroup(
                date=day,
                subtotal=subtotal,
                records=records,
                over_budget=subtotal > avg_daily_expense,
            ))
        return groups

    def category_totals(self, state: AccountState) -> list[CategoryTotal]:
        """Total per category in first-seen order, with percentage share."""
        totals: dict[str, float] = {}
        for record in state.expenses:
            totals[record.category] = totals.get(record.category, 0.0) + record.amount

        grand_total = sum(totals.values())
        if grand_total <= 0:
            return []

        return [
            CategoryTotal(
                category=category,
                total=total,
                share=min(100.0, round_half_up(total / grand_total * 100, 1)),
            )
            for category, total in totals.items()
        ]

    @staticmethod
    def _subtotal(records: list[ExpenseRecord]) -> float:
        return sum(record.amount for record in records)
