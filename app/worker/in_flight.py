import threading
from uuid import UUID


class InFlightRegistry:
    """Identifiers currently queued or being processed in this process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids: set[UUID] = set()

    def claim(self, document_id: UUID) -> bool:
        """Register document_id; False if it is already in flight."""
        with self._lock:
            if document_id in self._ids:
                return False
            self._ids.add(document_id)
            return True

    def release(self, document_id: UUID) -> None:
        with self._lock:
            self._ids.discard(document_id)

    def __contains__(self, document_id: object) -> bool:
        with self._lock:
            return document_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)
