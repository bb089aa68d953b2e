"""
Activity Models for Finance Tracker

Every user action and every persistence event is described by an
ActivityEvent before it is logged. This gives:
1. A consistent shape for the structured log
2. One place that decides the severity of each kind of event
3. Events that tests can inspect without parsing log output
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ActivityEventType(str, Enum):
    """Types of events we log."""
    # Account
    BALANCE_SET = "balance_set"
    STATE_RESET = "state_reset"

    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REMOVED = "expense_removed"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_NOT_FOUND = "expense_not_found"

    # Input
    INPUT_REJECTED = "input_rejected"

    # Persistence
    STATE_SAVED = "state_saved"
    STATE_LOADED = "state_loaded"
    STATE_MISSING = "state_missing"
    STATE_CORRUPT = "state_corrupt"
    SAVE_FAILED = "save_failed"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """A single logged event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: ActivityEventType
    severity: ActivitySeverity = ActivitySeverity.INFO

    # Which expense, if any, this is about
    expense_id: Optional[int] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.expense_added(record_id, amount, category)
    """

    @staticmethod
    def balance_set(total_balance: float, total_savings: float) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.BALANCE_SET,
            description="Balance and savings set; averaging period restarted",
            details={
                "total_balance": total_balance,
                "total_savings": total_savings,
            },
            is_user_action=True,
        )

    @staticmethod
    def state_reset() -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STATE_RESET,
            severity=ActivitySeverity.WARNING,
            description="All tracked data cleared",
            is_user_action=True,
        )

    @staticmethod
    def expense_added(expense_id: int, amount: float, category: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_ADDED,
            expense_id=expense_id,
            description=f"Expense added: {category} {amount:.2f}",
            details={"amount": amount, "category": category},
            is_user_action=True,
        )

    @staticmethod
    def expense_removed(expense_id: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_REMOVED,
            expense_id=expense_id,
            description="Expense removed",
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(
        expense_id: int,
        old_amount: float,
        new_amount: float,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            description=f"Expense amount changed from {old_amount:.2f} to {new_amount:.2f}",
            details={"old_amount": old_amount, "new_amount": new_amount},
            is_user_action=True,
        )

    @staticmethod
    def expense_not_found(expense_id: int, operation: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.EXPENSE_NOT_FOUND,
            severity=ActivitySeverity.WARNING,
            expense_id=expense_id,
            description=f"Cannot {operation}: expense no longer exists",
            details={"operation": operation},
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(field: str, value: Any, message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.INPUT_REJECTED,
            severity=ActivitySeverity.WARNING,
            description=f"Rejected {field}: {message}",
            details={"field": field, "value": repr(value)},
            is_user_action=True,
        )

    @staticmethod
    def state_saved(key: str, expense_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STATE_SAVED,
            severity=ActivitySeverity.DEBUG,
            description=f"Snapshot saved under {key!r}",
            details={"key": key, "expense_count": expense_count},
        )

    @staticmethod
    def state_loaded(key: str, expense_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STATE_LOADED,
            description=f"Snapshot loaded from {key!r} with {expense_count} expenses",
            details={"key": key, "expense_count": expense_count},
        )

    @staticmethod
    def state_missing(key: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STATE_MISSING,
            description=f"No snapshot under {key!r}; starting fresh",
            details={"key": key},
        )

    @staticmethod
    def state_corrupt(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STATE_CORRUPT,
            severity=ActivitySeverity.ERROR,
            description=f"Snapshot under {key!r} is unreadable; starting fresh",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def save_failed(key: str, error_message: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAVE_FAILED,
            severity=ActivitySeverity.ERROR,
            description=f"Could not save snapshot under {key!r}; change rolled back",
            details={"key": key},
            error_message=error_message,
        )
