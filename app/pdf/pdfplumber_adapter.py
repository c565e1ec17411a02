from typing import BinaryIO

import pdfplumber

from app.pdf.base import BasePdfExtractor, render_pages
from app.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, pdf_stream: BinaryIO, max_length: int) -> str:
        try:
            with pdfplumber.open(pdf_stream) as pdf:
                pages = (
                    (page.page_number, page.extract_text() or "") for page in pdf.pages
                )
                return render_pages(pages, max_length)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
