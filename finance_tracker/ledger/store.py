"""
Expense Store

In-memory, insertion-ordered collection of ExpenseRecord objects.

Every operation validates its raw input first and only then touches
the collection, so a rejected call never leaves a partial change.
Persisting and recomputing after a change is the caller's job
(see TrackerSession).
"""

import datetime as dt
from typing import Any, Callable, Iterable, Iterator, Optional

from finance_tracker.errors import NotFoundError, ValidationError
from finance_tracker.ledger.period import utc_now
from finance_tracker.models.expense import ExpenseRecord
from finance_tracker.validation import normalize_category, parse_amount


class ExpenseIdGenerator:
    """
    Creation-time derived ids: milliseconds since the epoch.

    Two ids handed out in the same millisecond, or while the clock is
    behind an id already seen, are bumped so the sequence stays strictly
    increasing.
    """

    def __init__(self, clock: Optional[Callable[[], dt.datetime]] = None):
        self._clock = clock or utc_now
        self._last = 0

    def observe(self, expense_id: int) -> None:
        """Make sure future ids sort after an id created elsewhere."""
        if expense_id > self._last:
            self._last = expense_id

    def next_id(self) -> int:
        candidate = int(self._clock().timestamp() * 1000)
        self._last = max(candidate, self._last + 1)
        return self._last


# Shared by every store in the process so ids never repeat.
default_id_generator = ExpenseIdGenerator()


class ExpenseStore:
    """Ordered expense records with add/remove/update-amount."""

    def __init__(
        self,
        records: Iterable[ExpenseRecord] = (),
        id_generator: Optional[ExpenseIdGenerator] = None,
    ):
        self._records: list[ExpenseRecord] = list(records)
        self._ids = id_generator or default_id_generator
        for record in self._records:
            self._ids.observe(record.id)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ExpenseRecord]:
        return iter(tuple(self._records))

    @property
    def records(self) -> tuple[ExpenseRecord, ...]:
        """Snapshot of the records in insertion order."""
        return tuple(self._records)

    def total(self) -> float:
        return sum(record.amount for record in self._records)

    def get(self, expense_id: int) -> Optional[ExpenseRecord]:
        index = self._index_of(expense_id)
        return None if index is None else self._records[index]

    def add(self, amount: Any, category: Optional[str], date: dt.date) -> ExpenseRecord:
        """
        Record a new expense at the end of the collection.

        Raises:
            ValidationError: amount is not a positive finite number,
                or date is not a calendar date
        """
        value = parse_amount(amount)
        label = normalize_category(category)
        if isinstance(date, dt.datetime):
            date = date.date()
        elif not isinstance(date, dt.date):
            raise ValidationError("date", date, "must be a calendar date")

        record = ExpenseRecord(
            id=self._ids.next_id(),
            amount=value,
            category=label,
            date=date,
        )
        self._records.append(record)
        return record

    def remove(self, expense_id: int) -> bool:
        """
        Remove the record with this id.

        Returns False, leaving the store untouched, when no such record exists.
        """
        index = self._index_of(expense_id)
        if index is None:
            return False
        del self._records[index]
        return True

    def update_amount(self, expense_id: int, new_amount: Any) -> ExpenseRecord:
        """
        Replace the amount of an existing record, keeping its position.

        Raises:
            ValidationError: new_amount is not a positive finite number
            NotFoundError: no record with this id
        """
        value = parse_amount(new_amount)
        index = self._index_of(expense_id)
        if index is None:
            raise NotFoundError(expense_id)

        updated = self._records[index].model_copy(update={"amount": value})
        self._records[index] = updated
        return updated

    def _index_of(self, expense_id: int) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == expense_id:
                return index
        return None
