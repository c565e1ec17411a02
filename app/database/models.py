from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class DocumentStatus(str, Enum):
    """Lifecycle states of a document, stored as text in the documents table."""

    PENDING = "pending"
    QUEUED = "queued"
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"


@dataclass
class Document:
    """Represents a row from the documents table."""

    id: UUID | None
    file_name: str
    original_file_name: str
    file_extension: str
    file_size: int
    content_type: str
    storage_path: str
    status: DocumentStatus = DocumentStatus.PENDING
    uploaded_by: str = ""
    document_type_name: str | None = None
    document_type_category: str | None = None
    processing_retry_count: int = 0
    processing_error_message: str | None = None
    processing_started_at: datetime | None = None
    processing_completed_at: datetime | None = None
    extracted_text: str | None = None
    summary: str | None = None
    uploaded_at: datetime | None = None
    processed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None
