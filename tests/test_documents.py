"""Tests for loading uploaded PDF documents."""

from pathlib import Path

import pytest

from cv_customizer.documents import InputError, load_document, read_document


class TestLoadDocument:
    """Tests for load_document."""

    def test_valid_pdf(self, pdf_bytes: bytes) -> None:
        """Test that a readable PDF is wrapped without modification."""
        document = load_document(pdf_bytes, "cv.pdf")

        assert document.content == pdf_bytes
        assert document.filename == "cv.pdf"
        assert document.mime_type == "application/pdf"
        assert document.page_count == 1
        assert document.has_text
        assert document.size == len(pdf_bytes)

    def test_counts_pages(self, pdf_factory) -> None:
        document = load_document(pdf_factory(pages=3), "tender.pdf")
        assert document.page_count == 3

    def test_pdf_without_text_is_accepted(self, pdf_factory) -> None:
        """Test that scanned documents load with has_text False."""
        document = load_document(pdf_factory(text=""), "scan.pdf")
        assert not document.has_text

    def test_missing_text_layer_is_logged(self, pdf_factory, caplog) -> None:
        with caplog.at_level("WARNING", logger="cv_customizer.documents"):
            load_document(pdf_factory(text=""), "scan.pdf")
        assert "scan.pdf has no extractable text layer" in caplog.text

    def test_empty_file(self) -> None:
        with pytest.raises(InputError, match="cv.pdf is empty"):
            load_document(b"", "cv.pdf")

    def test_too_large(self, pdf_bytes: bytes) -> None:
        with pytest.raises(InputError, match="too large"):
            load_document(pdf_bytes, "cv.pdf", max_bytes=len(pdf_bytes) - 1)

    def test_size_limit_is_inclusive(self, pdf_bytes: bytes) -> None:
        document = load_document(pdf_bytes, "cv.pdf", max_bytes=len(pdf_bytes))
        assert document.size == len(pdf_bytes)

    def test_not_a_pdf(self) -> None:
        """Test that other file types are rejected before parsing."""
        with pytest.raises(InputError, match="not a PDF document"):
            load_document(b"PK\x03\x04 docx content", "cv.docx")

    def test_corrupt_pdf(self) -> None:
        with pytest.raises(InputError):
            load_document(b"%PDF-1.7 truncated garbage", "broken.pdf")

    def test_input_error_is_value_error(self) -> None:
        assert issubclass(InputError, ValueError)


class TestReadDocument:
    """Tests for read_document."""

    def test_reads_from_disk(self, tmp_path: Path, pdf_bytes: bytes) -> None:
        path = tmp_path / "cv.pdf"
        path.write_bytes(pdf_bytes)

        document = read_document(path)

        assert document.filename == "cv.pdf"
        assert document.content == pdf_bytes

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputError, match="File not found"):
            read_document(tmp_path / "missing.pdf")
