import uuid
from datetime import datetime, timezone
from typing import Any

from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import Document, DocumentStatus
from app.processor.exceptions import DocumentNotFoundError

_COLUMNS = """
    id, file_name, original_file_name, file_extension, file_size, content_type,
    storage_path, status, uploaded_by, document_type_name, document_type_category,
    processing_retry_count, processing_error_message, processing_started_at,
    processing_completed_at, extracted_text, summary, uploaded_at, processed_at,
    created_at, updated_at, is_deleted, deleted_at
"""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentRepository:
    """Database operations for the documents table."""

    def get_by_id(self, document_id: uuid.UUID) -> Document | None:
        """Find a document by ID. Soft-deleted rows are not returned."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE id = %s AND is_deleted = FALSE
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_document(row)

    def get_by_status(self, status: DocumentStatus) -> list[Document]:
        """Return non-deleted documents in the given status, oldest upload first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE status = %s AND is_deleted = FALSE
                    ORDER BY uploaded_at
                    """,
                    (status.value,),
                )
                rows = cur.fetchall()

        return [self._to_document(row) for row in rows]

    def add(self, document: Document) -> Document:
        """Insert a new document, assigning its identity and creation timestamps."""
        now = _utcnow()
        if document.id is None:
            document.id = uuid.uuid4()
        document.created_at = now
        document.updated_at = now
        if document.uploaded_at is None:
            document.uploaded_at = now

        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO documents (
                    id, file_name, original_file_name, file_extension, file_size,
                    content_type, storage_path, status, uploaded_by,
                    uploaded_at, created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    document.id,
                    document.file_name,
                    document.original_file_name,
                    document.file_extension,
                    document.file_size,
                    document.content_type,
                    document.storage_path,
                    document.status.value,
                    document.uploaded_by,
                    document.uploaded_at,
                    document.created_at,
                    document.updated_at,
                ),
            )
            conn.commit()
        return document

    def update(self, document: Document) -> Document:
        """Persist all mutable fields and stamp updated_at.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        now = _utcnow()
        if document.updated_at is None or document.updated_at < now:
            document.updated_at = now

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET status = %s,
                        document_type_name = %s,
                        document_type_category = %s,
                        processing_retry_count = %s,
                        processing_error_message = %s,
                        processing_started_at = %s,
                        processing_completed_at = %s,
                        extracted_text = %s,
                        summary = %s,
                        processed_at = %s,
                        updated_at = %s,
                        is_deleted = %s,
                        deleted_at = %s
                    WHERE id = %s
                    """,
                    (
                        document.status.value,
                        document.document_type_name,
                        document.document_type_category,
                        document.processing_retry_count,
                        document.processing_error_message,
                        document.processing_started_at,
                        document.processing_completed_at,
                        document.extracted_text,
                        document.summary,
                        document.processed_at,
                        document.updated_at,
                        document.is_deleted,
                        document.deleted_at,
                        document.id,
                    ),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document.id} not found")
            conn.commit()
        return document

    @staticmethod
    def _to_document(row: dict[str, Any]) -> Document:
        return Document(
            id=row["id"],
            file_name=row["file_name"],
            original_file_name=row["original_file_name"],
            file_extension=row["file_extension"],
            file_size=row["file_size"],
            content_type=row["content_type"],
            storage_path=row["storage_path"],
            status=DocumentStatus(row["status"]),
            uploaded_by=row["uploaded_by"],
            document_type_name=row["document_type_name"],
            document_type_category=row["document_type_category"],
            processing_retry_count=row["processing_retry_count"],
            processing_error_message=row["processing_error_message"],
            processing_started_at=row["processing_started_at"],
            processing_completed_at=row["processing_completed_at"],
            extracted_text=row["extracted_text"],
            summary=row["summary"],
            uploaded_at=row["uploaded_at"],
            processed_at=row["processed_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            is_deleted=row["is_deleted"],
            deleted_at=row["deleted_at"],
        )
