import io

import pytest

from app.extraction.extractor import TRUNCATION_NOTICE, ContentExtractor
from app.extraction.models import ContentType
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter


def _make_extractor(max_content_length: int = 50000) -> ContentExtractor:
    return ContentExtractor(PdfPlumberAdapter(), max_content_length=max_content_length)


def _csv_bytes(rows: int) -> bytes:
    lines = ["name,amount"] + [f"row{i},{i}" for i in range(rows)]
    return ("\n".join(lines) + "\n").encode("utf-8")


class TestTextExtraction:
    def test_hello_world(self) -> None:
        result = _make_extractor().extract(io.BytesIO(b"Hello world"), "greeting.txt")
        assert result.text == "Hello world"
        assert result.content_type is ContentType.TEXT
        assert result.is_truncated is False

    @pytest.mark.parametrize("file_name", ["app.log", "README.md", "NOTES.TXT"])
    def test_text_family_extensions(self, file_name: str) -> None:
        result = _make_extractor().extract(io.BytesIO(b"plain"), file_name)
        assert result.content_type is ContentType.TEXT
        assert result.text == "plain"

    def test_decodes_utf8(self) -> None:
        result = _make_extractor().extract(io.BytesIO("naïve café".encode()), "a.txt")
        assert result.text == "naïve café"


class TestTruncation:
    def test_over_limit_is_cut_with_notice(self) -> None:
        body = "a" * 50001
        result = _make_extractor().extract(io.BytesIO(body.encode()), "big.txt")
        assert result.text == "a" * 50000 + TRUNCATION_NOTICE
        assert result.is_truncated is True

    def test_at_limit_is_untouched(self) -> None:
        body = "b" * 50000
        result = _make_extractor().extract(io.BytesIO(body.encode()), "exact.txt")
        assert result.text == body
        assert result.is_truncated is False

    def test_custom_limit(self) -> None:
        result = _make_extractor(max_content_length=5).extract(
            io.BytesIO(b"0123456789"), "short.txt"
        )
        assert result.text == "01234" + TRUNCATION_NOTICE


class TestCsvExtraction:
    def test_sample_is_bounded_but_total_is_exact(self) -> None:
        result = _make_extractor().extract(io.BytesIO(_csv_bytes(250)), "data.csv")
        sample_lines = [line for line in result.text.splitlines() if line.startswith("row")]
        assert result.content_type is ContentType.CSV
        assert len(sample_lines) == 100
        assert sample_lines[0] == "row0 | 0"
        assert "Total Rows: 250" in result.text
        assert "Total Columns: 2" in result.text

    def test_small_csv_renders_every_row(self) -> None:
        result = _make_extractor().extract(io.BytesIO(_csv_bytes(3)), "data.csv")
        sample_lines = [line for line in result.text.splitlines() if line.startswith("row")]
        assert len(sample_lines) == 3
        assert "Total Rows: 3" in result.text

    def test_structure_header(self) -> None:
        result = _make_extractor().extract(io.BytesIO(_csv_bytes(1)), "data.csv")
        lines = result.text.splitlines()
        assert lines[0] == "CSV Structure:"
        assert lines[1] == "Columns: name, amount"
        assert "name | amount" in lines
        assert "-" * 20 in lines

    def test_short_rows_are_padded(self) -> None:
        data = b"a,b,c\n1\n"
        result = _make_extractor().extract(io.BytesIO(data), "ragged.csv")
        assert "1 |  | " in result.text

    def test_leading_blank_lines_are_skipped(self) -> None:
        data = b"\n\nname,amount\nalice,10\n"
        result = _make_extractor().extract(io.BytesIO(data), "padded.csv")
        lines = result.text.splitlines()
        assert "Columns: name, amount" in lines
        assert "alice | 10" in lines
        assert "Total Rows: 1" in lines

    def test_empty_csv_yields_empty_text(self) -> None:
        result = _make_extractor().extract(io.BytesIO(b""), "empty.csv")
        assert result.text == ""
        assert result.content_type is ContentType.CSV


class TestPdfExtraction:
    def test_prefixes_page_marker(self, sample_pdf_bytes: bytes) -> None:
        result = _make_extractor().extract(io.BytesIO(sample_pdf_bytes), "scan.pdf")
        assert result.content_type is ContentType.PDF
        assert result.text.startswith("--- Page 1 ---")
        assert "Hello PDF World" in result.text

    def test_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        result = _make_extractor().extract(io.BytesIO(multi_page_pdf_bytes), "scan.PDF")
        assert "--- Page 1 ---" in result.text
        assert "--- Page 2 ---" in result.text
        assert result.text.index("Page one content") < result.text.index("Page two content")


class TestUnsupportedAndErrors:
    def test_unsupported_extension(self) -> None:
        result = _make_extractor().extract(io.BytesIO(b"PK..."), "contract.docx")
        assert result.text == "[Unsupported file type: .docx]"
        assert result.content_type is ContentType.UNSUPPORTED
        assert result.succeeded is True

    def test_missing_extension_is_unsupported(self) -> None:
        result = _make_extractor().extract(io.BytesIO(b"data"), "README")
        assert result.content_type is ContentType.UNSUPPORTED

    def test_broken_pdf_is_absorbed(self) -> None:
        result = _make_extractor().extract(io.BytesIO(b"not a pdf"), "broken.pdf")
        assert result.content_type is ContentType.ERROR
        assert result.text.startswith("[Error extracting content:")
        assert result.error
        assert result.succeeded is False

    def test_closed_stream_is_absorbed(self) -> None:
        stream = io.BytesIO(b"data")
        stream.close()
        result = _make_extractor().extract(stream, "a.txt")
        assert result.content_type is ContentType.ERROR
