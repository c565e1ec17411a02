"""Document lifecycle: pending -> queued -> processing -> processed | failed.

A failed document may be submitted again, re-entering queued. Every helper
here mutates the in-memory Document only; persisting it is the caller's job.
"""

from datetime import datetime, timezone

from app.database.models import Document, DocumentStatus
from app.processor.exceptions import InvalidStatusTransitionError

MAX_ERROR_MESSAGE_LENGTH = 1000

ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PENDING: frozenset({DocumentStatus.QUEUED}),
    DocumentStatus.QUEUED: frozenset({DocumentStatus.PROCESSING}),
    DocumentStatus.PROCESSING: frozenset(
        {DocumentStatus.PROCESSED, DocumentStatus.FAILED}
    ),
    DocumentStatus.PROCESSED: frozenset(),
    DocumentStatus.FAILED: frozenset({DocumentStatus.QUEUED}),
}

# Recovery may re-enqueue documents left behind by a previous process.
RECOVERABLE_STATUSES = frozenset(
    {DocumentStatus.PENDING, DocumentStatus.QUEUED, DocumentStatus.PROCESSING}
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def can_transition(current: DocumentStatus, target: DocumentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(
    document: Document,
    target: DocumentStatus,
    *,
    recovery: bool = False,
) -> None:
    """Raise InvalidStatusTransitionError unless document may move to target."""
    if can_transition(document.status, target):
        return
    if (
        recovery
        and target is DocumentStatus.QUEUED
        and document.status in RECOVERABLE_STATUSES
    ):
        return
    raise InvalidStatusTransitionError(
        f"Document {document.id} cannot move from "
        f"{document.status.value} to {target.value}"
    )


def mark_queued(
    document: Document,
    *,
    recovery: bool = False,
    now: datetime | None = None,
) -> None:
    ensure_transition(document, DocumentStatus.QUEUED, recovery=recovery)
    document.status = DocumentStatus.QUEUED
    document.processing_retry_count = 0
    document.updated_at = now or _utcnow()


def mark_processing(document: Document, *, now: datetime | None = None) -> None:
    ensure_transition(document, DocumentStatus.PROCESSING)
    now = now or _utcnow()
    document.status = DocumentStatus.PROCESSING
    document.processing_started_at = now
    document.processing_completed_at = None
    document.processing_error_message = None
    document.updated_at = now


def mark_processed(document: Document, *, now: datetime | None = None) -> None:
    ensure_transition(document, DocumentStatus.PROCESSED)
    now = now or _utcnow()
    document.status = DocumentStatus.PROCESSED
    document.processed_at = now
    document.processing_completed_at = now
    document.updated_at = now


def mark_failed(
    document: Document,
    error_message: str,
    *,
    now: datetime | None = None,
) -> None:
    ensure_transition(document, DocumentStatus.FAILED)
    now = now or _utcnow()
    document.status = DocumentStatus.FAILED
    document.processing_error_message = error_message[:MAX_ERROR_MESSAGE_LENGTH]
    document.processing_completed_at = now
    document.processing_retry_count += 1
    document.updated_at = now
