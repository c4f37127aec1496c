"""Shared fixtures for iExpense tests."""

from typing import Optional

import pytest

from iexpense.config import get_settings
from iexpense.models import ExpenseItem
from iexpense.services.storage import InMemoryStorage, StorageError


class FailingStorage(InMemoryStorage):
    """In-memory storage whose writes always fail."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        super().__init__(initial)
        self.write_attempts = 0

    def write(self, key: str, data: bytes) -> None:
        self.write_attempts += 1
        raise StorageError("disk full")


class UnreadableStorage(InMemoryStorage):
    """In-memory storage whose reads always fail."""

    def read(self, key: str) -> Optional[bytes]:
        raise StorageError("permission denied")


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def coffee() -> ExpenseItem:
    return ExpenseItem(name="Coffee", type="personal", amount=3.50)


@pytest.fixture
def rent() -> ExpenseItem:
    return ExpenseItem(name="Rent", type="business", amount=1200)


@pytest.fixture
def clean_env(monkeypatch):
    """Strip IEXPENSE_* variables and reset cached settings."""
    import os

    for name in list(os.environ):
        if name.startswith("IEXPENSE_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def unreadable_storage() -> UnreadableStorage:
    return UnreadableStorage()
