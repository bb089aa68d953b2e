"""
Tracker Session

The one place that owns the canonical AccountState. It ties the pure
parts together and defines the workflow every mutation follows:

    validate -> mutate -> save -> recompute metrics -> regroup -> notify

DESIGN DECISION: a mutation only becomes the session's state once the
snapshot has been saved. If the save fails, the in-memory change is
rolled back and the StorageError is raised, so memory and storage never
disagree. A rejected input never reaches the store at all.
"""

import datetime as dt
from typing import Any, Callable, Optional

from finance_tracker.audit import ActivityLogger
from finance_tracker.errors import (
    CorruptDataError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from finance_tracker.ledger import (
    ExpenseIdGenerator,
    ExpenseStore,
    GroupingView,
    MetricsEngine,
    default_id_generator,
    utc_now,
)
from finance_tracker.models.expense import AccountState, DashboardView, ExpenseRecord
from finance_tracker.storage import PersistenceAdapter
from finance_tracker.validation import parse_non_negative


Clock = Callable[[], dt.datetime]
Listener = Callable[[DashboardView], None]


class TrackerSession:
    """
    Owns the account state for one running application.

    Renderers call view() or subscribe() to receive a DashboardView
    after every successful mutation.
    """

    def __init__(
        self,
        state: AccountState,
        persistence: PersistenceAdapter,
        clock: Optional[Clock] = None,
        activity_logger: Optional[ActivityLogger] = None,
        id_generator: Optional[ExpenseIdGenerator] = None,
    ):
        self._state = state
        self._persistence = persistence
        self._clock = clock or utc_now
        self._log = activity_logger or ActivityLogger()
        self._ids = id_generator or default_id_generator
        self._store = ExpenseStore(state.expenses, self._ids)
        self._metrics = MetricsEngine()
        self._grouping = GroupingView()
        self._listeners: list[Listener] = []

    @classmethod
    def open(
        cls,
        persistence: PersistenceAdapter,
        clock: Optional[Clock] = None,
        activity_logger: Optional[ActivityLogger] = None,
        id_generator: Optional[ExpenseIdGenerator] = None,
    ) -> 'TrackerSession':
        """
        Start a session from the last saved snapshot.

        A missing or corrupt snapshot starts a fresh account instead.
        StorageError from an unreadable medium is propagated.
        """
        clock = clock or utc_now
        log = activity_logger or ActivityLogger()

        try:
            state = persistence.load()
        except CorruptDataError as e:
            log.log_state_corrupt(persistence.key, str(e))
            state = None
        else:
            if state is None:
                log.log_state_missing(persistence.key)
            else:
                log.log_state_loaded(persistence.key, len(state.expenses))

        if state is None:
            state = AccountState.fresh(clock())

        return cls(
            state,
            persistence,
            clock=clock,
            activity_logger=log,
            id_generator=id_generator,
        )

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def state(self) -> AccountState:
        return self._state

    @property
    def activity(self) -> ActivityLogger:
        return self._log

    def view(self) -> DashboardView:
        """Recompute metrics and groupings for the current moment."""
        metrics = self._metrics.compute(self._state, self._clock())
        return DashboardView(
            state=self._state,
            metrics=metrics,
            groups=self._grouping.build(self._state, metrics.avg_daily_expense),
            categories=self._grouping.category_totals(self._state),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def set_balance(self, total_balance: Any, total_savings: Any) -> AccountState:
        """
        Set balance and savings and restart the averaging period.

        Raises:
            ValidationError: either figure is not a non-negative number
            StorageError: the snapshot could not be saved
        """
        try:
            balance = parse_non_negative(total_balance, "total_balance")
            savings = parse_non_negative(total_savings, "total_savings")
        except ValidationError as e:
            self._log.log_input_rejected(e.field, e.value, e.message)
            raise

        self._commit(self._state.with_balance(balance, savings, self._clock()))
        self._log.log_balance_set(balance, savings)
        return self._state

    def add_expense(self, amount: Any, category: Optional[str] = None) -> ExpenseRecord:
        """
        Record an expense dated today.

        Raises:
            ValidationError: amount is not a positive number
            StorageError: the snapshot could not be saved
        """
        previous = self._store.records
        try:
            record = self._store.add(amount, category, self._clock().date())
        except ValidationError as e:
            self._log.log_input_rejected(e.field, e.value, e.message)
            raise

        self._commit(self._state.with_expenses(self._store.records), previous)
        self._log.log_expense_added(record.id, record.amount, record.category)
        return record

    def remove_expense(self, expense_id: int) -> bool:
        """
        Delete an expense.

        Returns False when the expense is already gone; nothing changes then.
        """
        previous = self._store.records
        if not self._store.remove(expense_id):
            self._log.log_expense_not_found(expense_id, "delete")
            return False

        self._commit(self._state.with_expenses(self._store.records), previous)
        self._log.log_expense_removed(expense_id)
        return True

    def update_expense_amount(self, expense_id: int, new_amount: Any) -> ExpenseRecord:
        """
        Change the amount of an expense, keeping its id, category and date.

        Raises:
            ValidationError: new_amount is not a positive number
            NotFoundError: the expense is gone
            StorageError: the snapshot could not be saved
        """
        previous = self._store.records
        old = self._store.get(expense_id)
        try:
            record = self._store.update_amount(expense_id, new_amount)
        except ValidationError as e:
            self._log.log_input_rejected(e.field, e.value, e.message)
            raise
        except NotFoundError:
            self._log.log_expense_not_found(expense_id, "edit")
            raise

        self._commit(self._state.with_expenses(self._store.records), previous)
        self._log.log_expense_updated(expense_id, old.amount, record.amount)
        return record

    def reset(self) -> AccountState:
        """Forget everything: clear the stored snapshot and start fresh."""
        self._persistence.clear()
        self._state = AccountState.fresh(self._clock())
        self._store = ExpenseStore((), self._ids)
        self._log.log_state_reset()
        self._notify()
        return self._state

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _commit(
        self,
        state: AccountState,
        previous_records: Optional[tuple[ExpenseRecord, ...]] = None,
    ) -> None:
        try:
            self._persistence.save(state)
        except StorageError as e:
            if previous_records is not None:
                self._store = ExpenseStore(previous_records, self._ids)
            self._log.log_save_failed(self._persistence.key, str(e))
            raise

        self._state = state
        self._log.log_state_saved(self._persistence.key, len(state.expenses))
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.view()
        for listener in list(self._listeners):
            listener(view)
