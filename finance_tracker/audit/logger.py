"""
Activity Logger

Every user action and persistence event is logged as a structured event.
This provides:
1. Traceability of every change to the account
2. Debugging capability when a snapshot turns out to be corrupt
3. A short in-memory history the UI can show

Logging is local only; nothing here touches the blob store.
"""

import logging
from collections import deque
from typing import Optional

import structlog

from finance_tracker.models.audit import ActivityEvent, ActivityEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through a stdlib handler at the given level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))


class ActivityLogger:
    """
    Central activity logging service.

    Logs events to the structured local log and keeps the most recent
    ones in memory.
    """

    def __init__(self, history_size: int = 100):
        self._logger = structlog.get_logger("finance_tracker")
        self._history: deque[ActivityEvent] = deque(maxlen=history_size)

    @property
    def history(self) -> list[ActivityEvent]:
        """Recent events, oldest first."""
        return list(self._history)

    def log(self, event: ActivityEvent) -> None:
        """Log an activity event at its own severity."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("activity_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("activity_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

    def log_balance_set(self, total_balance: float, total_savings: float) -> None:
        self.log(ActivityEventBuilder.balance_set(total_balance, total_savings))

    def log_state_reset(self) -> None:
        self.log(ActivityEventBuilder.state_reset())

    def log_expense_added(self, expense_id: int, amount: float, category: str) -> None:
        self.log(ActivityEventBuilder.expense_added(expense_id, amount, category))

    def log_expense_removed(self, expense_id: int) -> None:
        self.log(ActivityEventBuilder.expense_removed(expense_id))

    def log_expense_updated(
        self,
        expense_id: int,
        old_amount: float,
        new_amount: float,
    ) -> None:
        self.log(ActivityEventBuilder.expense_updated(expense_id, old_amount, new_amount))

    def log_expense_not_found(self, expense_id: int, operation: str) -> None:
        self.log(ActivityEventBuilder.expense_not_found(expense_id, operation))

    def log_input_rejected(self, field: str, value, message: str) -> None:
        self.log(ActivityEventBuilder.input_rejected(field, value, message))

    def log_state_saved(self, key: str, expense_count: int) -> None:
        self.log(ActivityEventBuilder.state_saved(key, expense_count))

    def log_state_loaded(self, key: str, expense_count: int) -> None:
        self.log(ActivityEventBuilder.state_loaded(key, expense_count))

    def log_state_missing(self, key: str) -> None:
        self.log(ActivityEventBuilder.state_missing(key))

    def log_state_corrupt(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.state_corrupt(key, error_message))

    def log_save_failed(self, key: str, error_message: str) -> None:
        self.log(ActivityEventBuilder.save_failed(key, error_message))

    def last_event(self) -> Optional[ActivityEvent]:
        return self._history[-1] if self._history else None
