"""Utility module for PDF text extraction.

All PDF parsing goes through ``extract_pdf_text`` so the extraction backend
can be swapped for a fake in tests.
"""

import io
import logging

from PyPDF2 import PdfReader

logger = logging.getLogger(__name__)


def extract_pdf_text(data):
    """Extracts the plain text of a PDF.

    Args:
        data (bytes): The raw PDF file contents.

    Returns:
        str: The text of every page joined together, or an empty string when
        the document has no extractable text.

    Raises:
        PyPDF2.errors.PdfReadError: If the bytes are not a readable PDF.
    """
    reader = PdfReader(io.BytesIO(data))
    text = "".join(page.extract_text() or "" for page in reader.pages)
    logger.debug("Extracted %d characters from %d pages", len(text), len(reader.pages))
    return text
