from app.extraction.exceptions import ExtractionError


class PdfExtractionError(ExtractionError):
    """Raised when a PDF engine cannot read the document."""
