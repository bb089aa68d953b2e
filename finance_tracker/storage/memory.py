"""In-memory blob store, for tests and sessions that should not touch disk."""

from typing import Optional

from finance_tracker.storage.interface import BlobStoreInterface


class InMemoryBlobStore(BlobStoreInterface):
    """Keeps blobs in a dict for the lifetime of the object."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def set(self, key: str, blob: str) -> None:
        self._blobs[key] = blob

    def clear(self, key: str) -> None:
        self._blobs.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._blobs)
