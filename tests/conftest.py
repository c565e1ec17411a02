import dataclasses
import io
import threading
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.database.models import Document, DocumentStatus
from app.processor.exceptions import DocumentNotFoundError


class InMemoryDocumentRepository:
    """Thread-safe stand-in for DocumentRepository that records status history."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._rows: dict[uuid.UUID, Document] = {}
        self.status_history: dict[uuid.UUID, list[DocumentStatus]] = {}

    def add(self, document: Document) -> Document:
        with self._lock:
            if document.id is None:
                document.id = uuid.uuid4()
            now = datetime.now(timezone.utc)
            document.created_at = document.created_at or now
            document.updated_at = document.updated_at or now
            document.uploaded_at = document.uploaded_at or now
            self._rows[document.id] = dataclasses.replace(document)
            self.status_history[document.id] = [document.status]
        return document

    def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        with self._lock:
            row = self._rows.get(document_id)
            if row is None or row.is_deleted:
                return None
            return dataclasses.replace(row)

    def get_by_status(self, status: DocumentStatus) -> list[Document]:
        with self._lock:
            return [
                dataclasses.replace(row)
                for row in self._rows.values()
                if row.status is status and not row.is_deleted
            ]

    def update(self, document: Document) -> Document:
        with self._lock:
            if document.id not in self._rows:
                raise DocumentNotFoundError(f"Document {document.id} not found")
            now = datetime.now(timezone.utc)
            if document.updated_at is None or document.updated_at < now:
                document.updated_at = now
            self._rows[document.id] = dataclasses.replace(document)
            history = self.status_history[document.id]
            if history[-1] is not document.status:
                history.append(document.status)
        return document


@pytest.fixture()
def doc_repo() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture()
def make_document() -> Callable[..., Document]:
    def _make(
        file_name: str = "report.txt",
        status: DocumentStatus = DocumentStatus.PENDING,
        storage_path: str | None = None,
        **overrides: object,
    ) -> Document:
        return Document(
            id=overrides.pop("id", uuid.uuid4()),  # type: ignore[arg-type]
            file_name=file_name,
            original_file_name=file_name,
            file_extension=file_name.rsplit(".", 1)[-1] if "." in file_name else "",
            file_size=128,
            content_type="text/plain",
            storage_path=storage_path if storage_path is not None else file_name,
            status=status,
            **overrides,  # type: ignore[arg-type]
        )

    return _make


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def blank_first_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF whose first page has no text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.drawString(72, 720, "Only text here")
    c.save()
    return buf.getvalue()
