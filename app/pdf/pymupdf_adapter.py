from typing import BinaryIO

import pymupdf

from app.pdf.base import BasePdfExtractor, render_pages
from app.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, pdf_stream: BinaryIO, max_length: int) -> str:
        try:
            with pymupdf.open(stream=pdf_stream.read(), filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = ((page.number + 1, page.get_text()) for page in doc)
                return render_pages(pages, max_length)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
