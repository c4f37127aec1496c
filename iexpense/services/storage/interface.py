"""
Abstract Storage Interface

The expense store mirrors itself into a key-value storage: one opaque
blob per key. Implementations decide where the bytes live (a directory
on disk, process memory); the store only reads and writes whole blobs.
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageInterface(ABC):
    """
    Abstract interface for blob storage.

    Any storage implementation (local files, in-memory, etc.)
    must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[bytes]:
        """
        Read the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored bytes, or None if nothing is stored under the key

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, data: bytes) -> None:
        """
        Replace the blob stored under a key.

        Args:
            key: Storage key
            data: Bytes to store

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove the blob stored under a key.

        Returns:
            True if something was removed, False if the key was absent
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass
