from pathlib import Path

import pytest

from app.config.settings import Settings
from app.database.models import DocumentStatus
from app.processor.processor import build_processor
from app.storage.blob_store import LocalBlobStore
from app.worker.document_runner import DocumentRunner
from app.worker.pool import WorkerPool
from app.worker.recovery import RecoveryScanner


@pytest.mark.integration
class TestWorkerPoolIntegration:
    def test_processes_documents_end_to_end(
        self,
        repository,
        seed_document,
        tmp_path: Path,
        sample_pdf_bytes: bytes,
    ) -> None:
        (tmp_path / "notes.txt").write_text("Meeting notes about the quarterly budget review.")
        (tmp_path / "scan.pdf").write_bytes(sample_pdf_bytes)
        settings = Settings(
            model_provider="example",
            worker_count=2,
            max_concurrency=2,
            queue_poll_interval_seconds=0.05,
            storage_root=str(tmp_path),
        )
        processor = build_processor(settings, repository, LocalBlobStore(tmp_path))
        pool = WorkerPool(repository, DocumentRunner(processor, repository), settings)
        text_doc = seed_document(file_name="notes.txt")
        pdf_doc = seed_document(file_name="scan.pdf")
        missing_doc = seed_document(file_name="gone.txt")

        pool.start()
        try:
            RecoveryScanner(repository, pool, settings).requeue_pending()
            assert pool.wait_until_idle(timeout=30) is True
        finally:
            pool.stop(timeout=5)
            processor.close()

        stored_text = repository.get_by_id(text_doc.id)
        assert stored_text.status is DocumentStatus.PROCESSED
        assert stored_text.document_type_name == "Report"
        assert stored_text.extracted_text.startswith("Meeting notes")

        stored_pdf = repository.get_by_id(pdf_doc.id)
        assert stored_pdf.status is DocumentStatus.PROCESSED
        assert "Hello PDF World" in stored_pdf.extracted_text

        stored_missing = repository.get_by_id(missing_doc.id)
        assert stored_missing.status is DocumentStatus.FAILED
        assert "gone.txt" in stored_missing.processing_error_message
        assert stored_missing.processing_retry_count == 1
