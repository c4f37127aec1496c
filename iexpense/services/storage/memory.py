"""In-memory storage, for tests and throwaway sessions."""

from typing import Optional

from iexpense.services.storage.interface import StorageInterface


class InMemoryStorage(StorageInterface):
    """Dict-backed blob storage. Contents are lost with the process."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._blobs: dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> Optional[bytes]:
        return self._blobs.get(key)

    def write(self, key: str, data: bytes) -> None:
        self._blobs[key] = bytes(data)

    def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None

    def keys(self) -> list[str]:
        """Keys currently holding a blob."""
        return sorted(self._blobs)
