"""Loading and checking of uploaded PDF documents."""

import logging
from pathlib import Path

from cv_customizer.models.document import SourceDocument

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


class InputError(ValueError):
    """Raised when an uploaded document or run parameter is invalid."""


def load_document(
    content: bytes,
    filename: str,
    max_bytes: int | None = None,
) -> SourceDocument:
    """Check raw upload bytes and wrap them as a SourceDocument.

    The bytes are opened with PyMuPDF only to make sure the file is a readable
    PDF and to count its pages. They are never modified.

    Args:
        content: Raw file content.
        filename: Name of the uploaded file, passed through to the model.
        max_bytes: Optional upper bound on the file size.

    Returns:
        SourceDocument wrapping the original bytes.

    Raises:
        InputError: If the file is empty, too large or not a readable PDF.
    """
    if not content:
        raise InputError(f"{filename} is empty")

    if max_bytes is not None and len(content) > max_bytes:
        raise InputError(
            f"{filename} is too large ({len(content)} bytes, limit is {max_bytes} bytes)"
        )

    if content.lstrip()[:4] != PDF_MAGIC:
        raise InputError(f"{filename} is not a PDF document")

    import fitz  # PyMuPDF

    try:
        doc = fitz.open(stream=content, filetype="pdf")
    except Exception as e:
        raise InputError(f"{filename} could not be read as a PDF") from e

    try:
        page_count = len(doc)
        has_text = any(page.get_text().strip() for page in doc)
    finally:
        doc.close()

    if page_count == 0:
        raise InputError(f"{filename} has no pages")

    if not has_text:
        # Scanned documents still work with models that read PDF images
        logger.warning("%s has no extractable text layer", filename)

    return SourceDocument(
        content=content,
        filename=filename,
        page_count=page_count,
        has_text=has_text,
    )


def read_document(path: str | Path, max_bytes: int | None = None) -> SourceDocument:
    """Read a PDF document from disk."""
    path = Path(path)
    if not path.exists():
        raise InputError(f"File not found: {path}")
    return load_document(path.read_bytes(), path.name, max_bytes=max_bytes)
