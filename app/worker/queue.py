import queue
from abc import ABC, abstractmethod
from uuid import UUID


class DocumentQueue(ABC):
    """FIFO of document identifiers shared by every worker of a pool."""

    @abstractmethod
    def put(self, document_id: UUID) -> None:
        """Append an identifier; never blocks."""

    @abstractmethod
    def get(self, timeout: float | None = None) -> UUID | None:
        """Take the oldest identifier, or None if nothing arrived within timeout."""

    @abstractmethod
    def task_done(self) -> None:
        """Signal that an identifier returned by get() has been handled."""

    @abstractmethod
    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Block until every queued identifier has been handled.

        Returns False if the timeout expired first.
        """

    @abstractmethod
    def __len__(self) -> int:
        """Number of identifiers waiting to be taken."""


class InMemoryDocumentQueue(DocumentQueue):
    """Unbounded, thread-safe queue. Its contents do not survive a restart."""

    def __init__(self) -> None:
        self._queue: queue.Queue[UUID] = queue.Queue()

    def put(self, document_id: UUID) -> None:
        self._queue.put_nowait(document_id)

    def get(self, timeout: float | None = None) -> UUID | None:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def task_done(self) -> None:
        self._queue.task_done()

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        with self._queue.all_tasks_done:
            return self._queue.all_tasks_done.wait_for(
                lambda: self._queue.unfinished_tasks == 0, timeout
            )

    def __len__(self) -> int:
        return self._queue.qsize()
