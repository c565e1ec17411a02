from uuid import UUID

from app.database.models import DocumentStatus
from app.database.repositories.document_repository import DocumentRepository
from app.logging.logger import Log
from app.processor.processor import DocumentProcessor
from app.processor.status import mark_failed


class DocumentRunner:
    """Run one document, catch exceptions, and record the failure."""

    def __init__(
        self,
        processor: DocumentProcessor,
        doc_repo: DocumentRepository,
    ) -> None:
        self._processor = processor
        self._doc_repo = doc_repo

    def run(self, document_id: UUID) -> None:
        """Process a single document; never raises."""
        try:
            self._processor.process(document_id)
            Log.info(f"Document {document_id} completed successfully")
        except Exception as exc:
            Log.exception(f"Error processing document {document_id}: {exc}")
            self._handle_failure(document_id, exc)

    def _handle_failure(self, document_id: UUID, exc: Exception) -> None:
        """Move a processing document to failed with the error message."""
        try:
            document = self._doc_repo.get_by_id(document_id)
            if document is None:
                Log.error(f"Document {document_id} vanished, failure not recorded")
                return
            if document.status is not DocumentStatus.PROCESSING:
                Log.error(
                    f"Document {document_id} left in status {document.status.value}, "
                    "failure not recorded"
                )
                return
            mark_failed(document, str(exc) or type(exc).__name__)
            self._doc_repo.update(document)
            Log.error(
                f"Document {document_id} marked failed "
                f"(retry count {document.processing_retry_count})"
            )
        except Exception as persist_exc:
            Log.error(f"Could not record failure for document {document_id}: {persist_exc}")
