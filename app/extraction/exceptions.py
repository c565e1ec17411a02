class ExtractionError(Exception):
    """Raised when stored content cannot be turned into text."""
