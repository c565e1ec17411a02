from datetime import datetime, timedelta, timezone

from app.config.settings import Settings
from app.database.models import Document, DocumentStatus
from app.database.repositories.document_repository import DocumentRepository
from app.logging.logger import Log
from app.worker.pool import WorkerPool


class RecoveryScanner:
    """Re-queues documents that an earlier run left unfinished."""

    def __init__(
        self,
        doc_repo: DocumentRepository,
        pool: WorkerPool,
        settings: Settings,
    ) -> None:
        self._doc_repo = doc_repo
        self._pool = pool
        self._default_timeout = timedelta(minutes=settings.stuck_document_timeout_minutes)

    def requeue_pending(self) -> int:
        """Startup hook: resubmit every pending or queued document."""
        Log.info("Checking for stuck documents")
        documents = self._doc_repo.get_by_status(
            DocumentStatus.PENDING
        ) + self._doc_repo.get_by_status(DocumentStatus.QUEUED)
        if not documents:
            Log.info("No stuck documents found in queue")
            return 0

        Log.info(f"Found {len(documents)} stuck documents, re-queuing them")
        count = self._resubmit_all(documents)
        Log.info(f"Finished re-queuing stuck documents: {count} queued")
        return count

    def rescan_stuck(
        self,
        timeout: timedelta | None = None,
        *,
        now: datetime | None = None,
    ) -> int:
        """Resubmit documents processing for longer than timeout. Returns the count."""
        timeout = timeout if timeout is not None else self._default_timeout
        cutoff = (now or datetime.now(timezone.utc)) - timeout
        timed_out = [
            document
            for document in self._doc_repo.get_by_status(DocumentStatus.PROCESSING)
            if document.processing_started_at is not None
            and document.processing_started_at < cutoff
        ]
        count = self._resubmit_all(timed_out)
        Log.info(
            f"Stuck documents cleanup: {count} of {len(timed_out)} documents "
            f"processing since before {cutoff.isoformat()} re-queued"
        )
        return count

    def _resubmit_all(self, documents: list[Document]) -> int:
        count = 0
        for document in documents:
            if document.id is None:
                continue
            try:
                Log.info(f"Re-queuing document {document.id}")
                if self._pool.resubmit(document.id):
                    count += 1
            except Exception as exc:
                Log.error(f"Failed to re-queue document {document.id}: {exc}")
        return count
