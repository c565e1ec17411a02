from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import BinaryIO

REMAINING_PAGES_NOTICE = "\n[Remaining pages truncated]"


def render_pages(pages: Iterable[tuple[int, str]], max_length: int) -> str:
    """Join page texts behind "--- Page N ---" markers, skipping blank pages.

    Stops consuming pages once the rendered text exceeds max_length.
    """
    parts: list[str] = []
    length = 0
    for number, text in pages:
        if not text or not text.strip():
            continue
        block = f"--- Page {number} ---\n{text}\n"
        parts.append(block)
        length += len(block)
        if length > max_length:
            parts.append(REMAINING_PAGES_NOTICE + "\n")
            break
    return "".join(parts)


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_stream: BinaryIO, max_length: int) -> str:
        """Extract page-marked text from a PDF stream.

        Args:
            pdf_stream: Readable binary stream positioned at the start of the PDF.
            max_length: Character count after which remaining pages are skipped.

        Returns:
            Text of every non-blank page, each prefixed with its page marker.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
