"""Services package."""

from iexpense.services.storage import (
    InMemoryStorage,
    LocalFileStorage,
    StorageError,
    StorageInterface,
)

__all__ = [
    # Storage services
    "InMemoryStorage",
    "LocalFileStorage",
    "StorageError",
    "StorageInterface",
]
