"""Shared fixtures: a controllable clock and in-memory persistence."""

from datetime import datetime, timedelta, timezone

import pytest

from finance_tracker.audit import ActivityLogger
from finance_tracker.ledger import ExpenseIdGenerator
from finance_tracker.storage import InMemoryBlobStore, PersistenceAdapter


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 5, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def id_generator(clock):
    return ExpenseIdGenerator(clock)


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def persistence(blob_store):
    return PersistenceAdapter(blob_store)


@pytest.fixture
def activity_logger():
    return ActivityLogger()
