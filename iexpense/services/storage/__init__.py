"""
Storage Services Package

Provides the abstract blob storage interface and its implementations:
a directory of files for real sessions and a dict for tests.
"""

from iexpense.services.storage.interface import StorageError, StorageInterface
from iexpense.services.storage.local_file import LocalFileStorage
from iexpense.services.storage.memory import InMemoryStorage

__all__ = [
    # Interface
    "StorageInterface",
    # Exceptions
    "StorageError",
    # Implementations
    "InMemoryStorage",
    "LocalFileStorage",
]
