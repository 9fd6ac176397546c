"""
PDF text acquisition service using pdfplumber.

Converts raw PDF bytes into plain text for the extraction engine. Failures
are logged and reported as None, never raised, so the orchestrator can
treat them as insufficient text.
"""

import io
import logging
from typing import BinaryIO

import pdfplumber

logger = logging.getLogger(__name__)


class TextService:
    """
    Service for PDF text acquisition.

    Uses pdfplumber (backed by pdfminer.six) to read the text layer of
    each page. Scanned documents without a text layer yield little or no
    text.
    """

    def __init__(self, page_separator: str = "\n", layout: bool = False):
        """
        Initialize the text service.

        Args:
            page_separator: String placed between the text of consecutive pages.
            layout: If True, ask pdfplumber to approximate the page layout
                with whitespace.
        """
        self.page_separator = page_separator
        self.layout = layout

    @staticmethod
    def _read_bytes(file_bytes: bytes | BinaryIO) -> bytes:
        if hasattr(file_bytes, "read"):
            return file_bytes.read()
        return file_bytes

    def extract_text(self, file_bytes: bytes | BinaryIO) -> str | None:
        """
        Extract the text of every page of a PDF.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            Text of all pages joined by the page separator, or None if the
            document is empty, not a PDF, or cannot be parsed.
        """
        pdf_bytes = self._read_bytes(file_bytes)

        if not pdf_bytes:
            logger.warning("Empty PDF file provided")
            return None

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            logger.warning("Invalid PDF file: does not start with PDF header")
            return None

        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [
                    page.extract_text(layout=self.layout) or "" for page in pdf.pages
                ]
        except Exception:
            logger.exception("pdfplumber text extraction failed")
            return None

        text = self.page_separator.join(pages)
        logger.info(
            "pdfplumber extracted %d characters from %d page(s)",
            len(text),
            len(pages),
        )
        return text

    def get_page_count(self, file_bytes: bytes | BinaryIO) -> int:
        """
        Get the total number of pages in a PDF.

        Returns:
            Number of pages, or 0 if the document cannot be opened.
        """
        pdf_bytes = self._read_bytes(file_bytes)
        if not pdf_bytes:
            return 0
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as e:
            logger.error("Could not get page count: %s", e)
            return 0


# Singleton instance for convenience
_text_service: TextService | None = None


def get_text_service() -> TextService:
    """Get or create the text service singleton."""
    global _text_service
    if _text_service is None:
        _text_service = TextService()
    return _text_service
