"""
Persistence Adapter

Serializes the whole AccountState to a single JSON blob and back.

The stored layout is the one the tracker has always written:

    {
      "totalBalance": 1000.0,
      "totalSavings": 200.0,
      "expenses": [{"id": 1736071200000, "amount": 50.0,
                    "category": "Food", "date": "2025-01-05"}],
      "startDate": "2025-01-04T09:30:00Z"
    }

Loading is strict: numbers must be JSON numbers, dates must be ISO
strings, and every model invariant must hold. Anything else is a
CorruptDataError; what to do about it is the caller's decision.
"""

from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from finance_tracker.errors import CorruptDataError
from finance_tracker.models.expense import AccountState
from finance_tracker.storage.interface import BlobStoreInterface


DEFAULT_STATE_KEY = "financeData"


class PersistenceAdapter:
    """Saves and loads AccountState snapshots through a blob store."""

    def __init__(self, store: BlobStoreInterface, key: str = DEFAULT_STATE_KEY):
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def serialize(self, state: AccountState) -> str:
        return state.model_dump_json(by_alias=True)

    def deserialize(self, blob) -> AccountState:
        """
        Parse a stored blob.

        Raises:
            CorruptDataError: blob is not JSON or not an AccountState
        """
        if not isinstance(blob, (str, bytes, bytearray)):
            raise CorruptDataError(f"Stored snapshot has unexpected type {type(blob).__name__}")
        try:
            return AccountState.model_validate_json(blob, strict=True)
        except PydanticValidationError as e:
            raise CorruptDataError(
                f"Stored snapshot under {self._key!r} is invalid: "
                f"{e.error_count()} problem(s), first: {e.errors()[0]['msg']}",
                cause=e,
            ) from e

    def save(self, state: AccountState) -> None:
        """
        Replace the stored snapshot.

        Raises:
            StorageError: If the blob store rejects the write
        """
        self._store.set(self._key, self.serialize(state))

    def load(self) -> Optional[AccountState]:
        """
        Read the last saved snapshot.

        Returns:
            The stored state, or None when nothing has been saved yet

        Raises:
            CorruptDataError: If the stored blob cannot be parsed
            StorageError: If the blob store cannot be read
        """
        blob = self._store.get(self._key)
        if blob is None:
            return None
        return self.deserialize(blob)

    def clear(self) -> None:
        self._store.clear(self._key)
