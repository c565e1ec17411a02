import shutil
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO

from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_incrementing,
)

from app.config.settings import Settings
from app.logging.logger import Log
from app.storage.exceptions import AccessDeniedError, BlobNotFoundError, StorageIOError


class LocalBlobStore:
    """Reads, writes and deletes document files under a sandboxed root directory."""

    def __init__(
        self,
        root: Path,
        delete_max_retries: int = 3,
        delete_retry_delay_ms: int = 500,
    ) -> None:
        self._root = root.resolve()
        self._root.mkdir(parents=True, exist_ok=True)
        self._delete_max_retries = delete_max_retries
        self._delete_retry_delay_ms = delete_retry_delay_ms

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalBlobStore":
        return cls(
            Path(settings.storage_root),
            delete_max_retries=settings.storage_delete_max_retries,
            delete_retry_delay_ms=settings.storage_delete_retry_delay_ms,
        )

    def open_for_read(self, path: str) -> BinaryIO:
        """Open a stored document for reading.

        Raises:
            BlobNotFoundError: if nothing is stored at path.
            AccessDeniedError: if path escapes the storage root.
        """
        full_path = self.resolve(path)
        if not full_path.is_file():
            raise BlobNotFoundError(f"Document not found at path: {path}")
        return full_path.open("rb")

    def save(self, stream: BinaryIO, file_name: str) -> str:
        """Copy stream into a unique dated location and return its relative path."""
        relative = Path(datetime.now(timezone.utc).strftime("%Y/%m/%d")) / (
            self._unique_file_name(file_name)
        )
        full_path = self.resolve(str(relative))
        full_path.parent.mkdir(parents=True, exist_ok=True)
        with full_path.open("wb") as target:
            shutil.copyfileobj(stream, target)
        Log.info(f"Document saved at {relative}")
        return relative.as_posix()

    def delete(self, path: str) -> bool:
        """Delete a stored document, retrying while the file is locked.

        Returns False when the file is absent or cannot be removed after all
        retries; never raises for I/O contention.
        """
        full_path = self.resolve(path)
        if not full_path.exists():
            Log.warning(f"Document not found for deletion: {path}")
            return False

        delay_seconds = self._delete_retry_delay_ms / 1000
        retrying = Retrying(
            stop=stop_after_attempt(self._delete_max_retries),
            wait=wait_incrementing(start=delay_seconds, increment=delay_seconds),
            retry=retry_if_exception_type(StorageIOError),
            sleep=time.sleep,
            before_sleep=lambda state: Log.warning(
                f"File in use, retry {state.attempt_number}/"
                f"{self._delete_max_retries}: {path}"
            ),
        )
        try:
            retrying(self._remove, full_path)
        except FileNotFoundError:
            Log.warning(f"Document disappeared before deletion: {path}")
            return False
        except RetryError as exc:
            Log.warning(
                f"File still in use after {exc.last_attempt.attempt_number} attempts, "
                f"cannot delete {path}: {exc.last_attempt.exception()}"
            )
            return False
        Log.info(f"Document deleted: {path}")
        return True

    def resolve(self, path: str) -> Path:
        """Resolve a relative path against the root, rejecting escapes."""
        full_path = (self._root / path).resolve()
        if not full_path.is_relative_to(self._root):
            raise AccessDeniedError(
                "Access to path outside of base directory is not allowed"
            )
        return full_path

    @staticmethod
    def _remove(full_path: Path) -> None:
        try:
            full_path.unlink()
        except FileNotFoundError:
            raise
        except OSError as exc:
            raise StorageIOError(str(exc)) from exc

    @staticmethod
    def _unique_file_name(file_name: str) -> str:
        name = Path(file_name)
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        suffix = uuid.uuid4().hex[:8]
        return f"{name.stem}_{timestamp}_{suffix}{name.suffix}"
