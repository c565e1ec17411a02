import threading
from uuid import UUID

from app.config.settings import Settings
from app.database.repositories.document_repository import DocumentRepository
from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError
from app.processor.status import mark_queued
from app.worker.document_runner import DocumentRunner
from app.worker.in_flight import InFlightRegistry
from app.worker.queue import DocumentQueue, InMemoryDocumentQueue
from app.worker.worker import Worker


class WorkerPool:
    """Owns the document queue and a fixed set of worker threads.

    At most max_concurrency documents are processed at once, however many
    workers consume the queue. A document identifier is never queued twice
    while it is still queued or processing in this process.
    """

    def __init__(
        self,
        doc_repo: DocumentRepository,
        runner: DocumentRunner,
        settings: Settings,
        queue: DocumentQueue | None = None,
    ) -> None:
        self._doc_repo = doc_repo
        self._runner = runner
        self._worker_count = settings.worker_count
        self._max_concurrency = settings.max_concurrency
        self._poll_interval_seconds = settings.queue_poll_interval_seconds
        self._queue = queue if queue is not None else InMemoryDocumentQueue()
        self._slots = threading.Semaphore(settings.max_concurrency)
        self._stop_event = threading.Event()
        self._in_flight = InFlightRegistry()
        self._workers: list[Worker] = []
        self._threads: list[threading.Thread] = []

    @property
    def queue(self) -> DocumentQueue:
        return self._queue

    @property
    def is_running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    def submit(self, document_id: UUID) -> UUID:
        """Queue a pending or failed document for processing.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            InvalidStatusTransitionError: if the document cannot be queued.
        """
        self._enqueue(document_id, recovery=False)
        return document_id

    def resubmit(self, document_id: UUID) -> bool:
        """Queue a document left pending, queued or processing by an earlier run.

        Returns False when the document is already in flight here.
        """
        return self._enqueue(document_id, recovery=True)

    def start(self) -> None:
        if self.is_running:
            raise RuntimeError("Worker pool already running")
        Log.info(
            f"Starting {self._worker_count} workers with max concurrency "
            f"{self._max_concurrency}"
        )
        self._stop_event.clear()
        self._workers = [self._make_worker(i) for i in range(self._worker_count)]
        self._threads = [
            threading.Thread(target=worker.run, name=f"worker-{i}", daemon=True)
            for i, worker in enumerate(self._workers)
        ]
        for thread in self._threads:
            thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Stop taking new documents and wait for in-flight ones to finish.

        Identifiers still waiting in the queue are dropped; the recovery scan
        picks their documents up on the next start.
        """
        self._stop_event.set()
        for thread in self._threads:
            thread.join(timeout)
        if len(self._queue):
            Log.warning(f"Worker pool stopped with {len(self._queue)} documents still queued")
        Log.info("Worker pool stopped")

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        return self._queue.wait_until_idle(timeout)

    def _make_worker(self, worker_id: int) -> Worker:
        return Worker(
            worker_id,
            self._queue,
            self._runner,
            self._slots,
            self._stop_event,
            self._in_flight,
            poll_interval_seconds=self._poll_interval_seconds,
        )

    def _enqueue(self, document_id: UUID, *, recovery: bool) -> bool:
        document = self._doc_repo.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document with ID {document_id} not found")

        if not self._in_flight.claim(document_id):
            Log.warning(f"Document {document_id} is already queued or processing, skipping")
            return False
        try:
            mark_queued(document, recovery=recovery)
            self._doc_repo.update(document)
        except Exception:
            self._in_flight.release(document_id)
            raise

        self._queue.put(document_id)
        Log.info(f"Document {document_id} queued for processing")
        return True
