"""
Error Taxonomy

Every error raised by the tracker derives from TrackerError so the UI
shell can catch the whole family in one place.

- ValidationError: raw user input rejected before any state change
- NotFoundError: an operation referenced an expense that is gone
- StorageError: the blob store could not be read or written
- CorruptDataError: the stored snapshot does not parse into an AccountState
"""

from typing import Any, Optional


class TrackerError(Exception):
    """Base exception for the finance tracker."""
    pass


class ValidationError(TrackerError):
    """User-supplied input failed validation."""

    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"{field}: {message} (got {value!r})")


class NotFoundError(TrackerError):
    """Referenced expense does not exist."""

    def __init__(self, expense_id: int):
        self.expense_id = expense_id
        super().__init__(f"Expense not found: {expense_id}")


class StorageError(TrackerError):
    """Base exception for storage operations."""
    pass


class CorruptDataError(StorageError):
    """Stored snapshot could not be parsed into the expected shape."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)
