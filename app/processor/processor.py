from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import BinaryIO
from uuid import UUID

from app.ai.factory import ModelClientFactory
from app.ai.invoker import ModelInvoker
from app.ai.models import ClassificationResult, SummaryResult
from app.ai.orchestrator import AIOrchestrator
from app.config.settings import Settings
from app.database.models import Document
from app.database.repositories.document_repository import DocumentRepository
from app.extraction.extractor import ContentExtractor
from app.extraction.models import ContentType, ExtractedContent
from app.logging.logger import Log
from app.processor.exceptions import (
    DocumentNotFoundError,
    DocumentTimeoutError,
    ProcessorError,
)
from app.processor.status import mark_processed, mark_processing
from app.storage.blob_store import LocalBlobStore


class DocumentProcessor:
    """Drives one document from queued to processed.

    Pipeline: load -> mark processing -> (extract + classify) || (extract +
    summarize) -> merge -> mark processed. Each branch reads its own stream of
    the stored file. Errors propagate to the caller, which records the failure.
    """

    def __init__(
        self,
        doc_repo: DocumentRepository,
        blob_store: LocalBlobStore,
        extractor: ContentExtractor,
        orchestrator: AIOrchestrator,
        *,
        max_concurrency: int = 3,
        document_timeout_seconds: float = 600,
        fail_on_ai_error: bool = False,
    ) -> None:
        self._doc_repo = doc_repo
        self._blob_store = blob_store
        self._extractor = extractor
        self._orchestrator = orchestrator
        self._document_timeout_seconds = document_timeout_seconds
        self._fail_on_ai_error = fail_on_ai_error
        self._executor = ThreadPoolExecutor(
            max_workers=max_concurrency * 2,
            thread_name_prefix="ai-call",
        )

    def process(self, document_id: UUID) -> Document:
        document = self._doc_repo.get_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        mark_processing(document)
        self._doc_repo.update(document)
        Log.info(f"Processing document {document_id} ({document.file_name})")

        with (
            self._blob_store.open_for_read(document.storage_path) as classification_stream,
            self._blob_store.open_for_read(document.storage_path) as summary_stream,
        ):
            classification_future = self._executor.submit(
                self._classify, document, classification_stream
            )
            summary_future = self._executor.submit(
                self._summarize, document, summary_stream
            )
            self._await(document, classification_future, summary_future)
            content, classification = classification_future.result()
            summary = summary_future.result()

        self._merge(document, content, classification, summary)
        mark_processed(document)
        self._doc_repo.update(document)
        Log.info(
            f"Processed document {document_id}: category={classification.primary_category!r}, "
            f"classify={classification.processing_seconds:.2f}s, "
            f"summarize={summary.processing_seconds:.2f}s"
        )
        return document

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def _classify(
        self, document: Document, stream: BinaryIO
    ) -> tuple[ExtractedContent, ClassificationResult]:
        content = self._extractor.extract(stream, document.file_name)
        return content, self._orchestrator.classify(document, content)

    def _summarize(self, document: Document, stream: BinaryIO) -> SummaryResult:
        content = self._extractor.extract(stream, document.file_name)
        return self._orchestrator.summarize(document, content)

    def _await(self, document: Document, *futures: Future[object]) -> None:
        _, not_done = wait(futures, timeout=self._document_timeout_seconds)
        if not_done:
            for future in not_done:
                future.cancel()
            raise DocumentTimeoutError(
                f"Document {document.id} not classified and summarized within "
                f"{self._document_timeout_seconds}s"
            )

    def _merge(
        self,
        document: Document,
        content: ExtractedContent,
        classification: ClassificationResult,
        summary: SummaryResult,
    ) -> None:
        ai_errors = [e for e in (classification.error, summary.error) if e]
        if ai_errors:
            if self._fail_on_ai_error:
                raise ProcessorError(f"AI processing failed: {'; '.join(ai_errors)}")
            Log.warning(
                f"Document {document.id} completed with degraded AI results: "
                f"{'; '.join(ai_errors)}"
            )

        if summary.summary:
            document.summary = summary.summary

        if classification.primary_category:
            document.document_type_name = classification.primary_category
            document.document_type_category = classification.primary_category

        if not document.extracted_text:
            document.extracted_text = self._extracted_text(content, classification)

    @staticmethod
    def _extracted_text(
        content: ExtractedContent, classification: ClassificationResult
    ) -> str | None:
        if content.succeeded and content.content_type is not ContentType.UNSUPPORTED:
            return content.text
        if not classification.primary_category:
            return None
        text = f"Classification: {classification.primary_category}"
        if classification.tags:
            text += f"; Tags: {', '.join(classification.tags)}"
        return text


def build_processor(
    settings: Settings,
    doc_repo: DocumentRepository,
    blob_store: LocalBlobStore | None = None,
) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters."""
    client = ModelClientFactory.create(settings)
    invoker = ModelInvoker.from_settings(client, settings)
    return DocumentProcessor(
        doc_repo=doc_repo,
        blob_store=blob_store or LocalBlobStore.from_settings(settings),
        extractor=ContentExtractor.from_settings(settings),
        orchestrator=AIOrchestrator.from_settings(invoker, settings),
        max_concurrency=settings.max_concurrency,
        document_timeout_seconds=settings.document_timeout_seconds,
        fail_on_ai_error=settings.fail_on_ai_error,
    )
