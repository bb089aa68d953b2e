"""
Storage Package

Provides the abstract blob store interface, its file and in-memory
implementations, and the adapter that maps AccountState onto a blob.
"""

from finance_tracker.config import StorageSettings
from finance_tracker.storage.interface import BlobStoreInterface
from finance_tracker.storage.json_file import JsonFileBlobStore
from finance_tracker.storage.memory import InMemoryBlobStore
from finance_tracker.storage.persistence import DEFAULT_STATE_KEY, PersistenceAdapter


def create_persistence(settings: StorageSettings) -> PersistenceAdapter:
    """Build the persistence adapter the settings ask for."""
    if settings.backend == "memory":
        store: BlobStoreInterface = InMemoryBlobStore()
    else:
        store = JsonFileBlobStore(settings.data_dir, settings.write_attempts)
    return PersistenceAdapter(store, key=settings.state_key)


__all__ = [
    "DEFAULT_STATE_KEY",
    "BlobStoreInterface",
    "InMemoryBlobStore",
    "JsonFileBlobStore",
    "PersistenceAdapter",
    "create_persistence",
]
