"""
Services package for the rental application extraction service.

Contains:
- text_service: PDF text acquisition with pdfplumber
- extraction: the two-tier field extraction engine
"""

from .extraction import ExtractionService
from .text_service import TextService

__all__ = ["TextService", "ExtractionService"]
