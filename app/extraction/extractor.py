import io
from collections.abc import Callable
from pathlib import PurePath
from typing import BinaryIO

from app.config.settings import Settings
from app.extraction.csv_summary import summarize_csv
from app.extraction.models import ContentType, ExtractedContent
from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.pdf.factory import PdfExtractorFactory

TRUNCATION_NOTICE = "\n\n[Content truncated due to length...]"
DEFAULT_MAX_CONTENT_LENGTH = 50000

Handler = Callable[[BinaryIO], tuple[str, ContentType]]


class ContentExtractor:
    """Turns a stored document stream into normalized text, by file extension."""

    TEXT_EXTENSIONS = frozenset({".txt", ".log", ".md"})

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH,
        csv_sample_rows: int = 100,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._max_content_length = max_content_length
        self._csv_sample_rows = csv_sample_rows
        self._handlers: dict[str, Handler] = {
            ".pdf": self._extract_pdf,
            ".csv": self._extract_csv,
        }
        for extension in self.TEXT_EXTENSIONS:
            self._handlers[extension] = self._extract_text

    @classmethod
    def from_settings(cls, settings: Settings) -> "ContentExtractor":
        return cls(
            PdfExtractorFactory.create(settings),
            max_content_length=settings.max_content_length,
            csv_sample_rows=settings.csv_sample_rows,
        )

    def extract(self, stream: BinaryIO, file_name: str) -> ExtractedContent:
        """Extract text from stream; never raises."""
        extension = PurePath(file_name).suffix.lower()
        Log.info(f"Extracting content from {extension or 'extensionless'} file {file_name}")

        handler = self._handlers.get(extension)
        if handler is None:
            return ExtractedContent(
                text=f"[Unsupported file type: {extension}]",
                content_type=ContentType.UNSUPPORTED,
            )

        try:
            text, content_type = handler(stream)
        except Exception as exc:
            Log.error(f"Error extracting content from {file_name}: {exc}")
            return ExtractedContent(
                text=f"[Error extracting content: {exc}]",
                content_type=ContentType.ERROR,
                error=str(exc),
            )
        return self._cap(text, content_type)

    def _cap(self, text: str, content_type: ContentType) -> ExtractedContent:
        if len(text) <= self._max_content_length:
            return ExtractedContent(text=text, content_type=content_type)
        Log.warning(
            f"Content truncated from {len(text)} to {self._max_content_length} characters"
        )
        return ExtractedContent(
            text=text[: self._max_content_length] + TRUNCATION_NOTICE,
            content_type=content_type,
            is_truncated=True,
        )

    def _extract_pdf(self, stream: BinaryIO) -> tuple[str, ContentType]:
        text = self._pdf_extractor.extract(stream, self._max_content_length)
        Log.info(f"Extracted {len(text)} characters from PDF")
        return text, ContentType.PDF

    def _extract_text(self, stream: BinaryIO) -> tuple[str, ContentType]:
        text = stream.read().decode("utf-8", errors="replace")
        Log.info(
            f"Extracted text file with {len(text.splitlines())} lines, "
            f"{len(text.split())} words"
        )
        return text, ContentType.TEXT

    def _extract_csv(self, stream: BinaryIO) -> tuple[str, ContentType]:
        decoded = stream.read().decode("utf-8-sig", errors="replace")
        text = summarize_csv(io.StringIO(decoded, newline=""), self._csv_sample_rows)
        return text, ContentType.CSV
