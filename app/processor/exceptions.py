class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the database."""


class InvalidStatusTransitionError(ProcessorError):
    """Raised when a document is moved along an edge the lifecycle does not allow."""


class DocumentTimeoutError(ProcessorError):
    """Raised when classification and summarization do not finish in time."""
