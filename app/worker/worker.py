import threading

from app.logging.logger import Log
from app.worker.document_runner import DocumentRunner
from app.worker.in_flight import InFlightRegistry
from app.worker.queue import DocumentQueue


class Worker:
    """Queue consumer loop: take -> acquire slot -> run -> release."""

    def __init__(
        self,
        worker_id: int,
        queue: DocumentQueue,
        runner: DocumentRunner,
        slots: threading.Semaphore,
        stop_event: threading.Event,
        in_flight: InFlightRegistry,
        poll_interval_seconds: float = 1.0,
    ) -> None:
        self._worker_id = worker_id
        self._queue = queue
        self._runner = runner
        self._slots = slots
        self._stop_event = stop_event
        self._in_flight = in_flight
        self._poll_interval_seconds = poll_interval_seconds

    def run(self) -> None:
        """Main loop. Runs until the stop event is set.

        The event is checked between documents only, so a document already
        taken from the queue is always finished.
        """
        Log.info(f"Worker {self._worker_id} started")
        while not self._stop_event.is_set():
            try:
                self.process_next()
            except Exception as exc:
                Log.exception(f"Worker {self._worker_id} error, continuing: {exc}")
        Log.info(f"Worker {self._worker_id} stopped")

    def process_next(self) -> bool:
        """Handle at most one queued document. Returns False if none arrived."""
        document_id = self._queue.get(timeout=self._poll_interval_seconds)
        if document_id is None:
            return False
        try:
            with self._slots:
                Log.info(f"Worker {self._worker_id} processing document {document_id}")
                self._runner.run(document_id)
                Log.info(f"Worker {self._worker_id} finished document {document_id}")
        finally:
            self._in_flight.release(document_id)
            self._queue.task_done()
        return True
