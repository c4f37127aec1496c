"""
Local File Storage Implementation

Each key maps to one file inside a data directory. Writes land in a
temporary file in the same directory and are moved over the target
with os.replace, so a reader sees either the old blob or the new one.

Transient OS errors on write are retried a few times with backoff;
a write that still fails surfaces as StorageError.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from iexpense.services.storage.interface import StorageError, StorageInterface


logger = structlog.get_logger(__name__)

WRITE_ATTEMPTS = 3


class LocalFileStorage(StorageInterface):
    """
    Directory-backed blob storage.

    The directory is created on first write, not on construction.
    """

    def __init__(self, directory: Union[str, Path], suffix: str = ".json"):
        self._directory = Path(directory).expanduser()
        self._suffix = suffix

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Get the file path a key is stored at."""
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ValueError(f"Storage key must be a plain name, got {key!r}")
        return self._directory / f"{key}{self._suffix}"

    def read(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, data: bytes) -> None:
        path = self.path_for(key)
        try:
            self._write_atomic(path, data)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e
        return True

    @retry(
        stop=stop_after_attempt(WRITE_ATTEMPTS),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_atomic(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError:
            logger.debug("storage_write_attempt_failed", path=str(path))
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
