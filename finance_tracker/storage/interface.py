"""
Abstract Blob Store Interface

DESIGN DECISION: The tracker persists one JSON snapshot under one key,
so all it needs from a storage medium is a key-value blob store.
This allows us to:
1. Keep snapshots in a local file for the desktop shell
2. Use in-memory storage for testing
3. Swap in another medium without touching the core

Reads and writes are synchronous; there is a single writer and the
last write wins.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStoreInterface(ABC):
    """
    Abstract interface for blob storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the blob stored under a key.

        Returns:
            The blob, or None if nothing is stored under the key

        Raises:
            StorageError: If the medium cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, blob: str) -> None:
        """
        Store a blob under a key, replacing any previous blob.

        Either the whole blob is stored or the previous one is left as it was.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def clear(self, key: str) -> None:
        """
        Remove whatever is stored under a key. Missing keys are ignored.

        Raises:
            StorageError: If the medium cannot be modified
        """
        pass
