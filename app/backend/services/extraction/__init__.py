"""
Rental application extraction engine.

This package is split into:
- fields: one ordered-strategy parser per applicant field
- generic: all parsers over plain text (mean-confidence aggregate)
- specialized: layout-specific rules over raw PDF bytes
- orchestrator: chooses the tier and measures processing time

get_extraction_service() builds the configured pipeline once per process.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from ...config import get_settings
from ..text_service import get_text_service
from .exceptions import ExtractionError, InsufficientTextError
from .fields import (
    FIELD_PARSERS,
    parse_created_at,
    parse_email,
    parse_move_in_date,
    parse_name,
    parse_phone,
    parse_property,
    parse_rent,
    parse_unit_number,
)
from .generic import GenericExtractor
from .normalize import format_date, format_phone
from .orchestrator import ExtractionService
from .specialized import SpecializedExtractor, SpecializedResult

logger = logging.getLogger(__name__)

__all__ = [
    "ExtractionError",
    "ExtractionService",
    "FIELD_PARSERS",
    "GenericExtractor",
    "InsufficientTextError",
    "SpecializedExtractor",
    "SpecializedResult",
    "format_date",
    "format_phone",
    "get_extraction_service",
    "parse_created_at",
    "parse_email",
    "parse_move_in_date",
    "parse_name",
    "parse_phone",
    "parse_property",
    "parse_rent",
    "parse_unit_number",
    "shutdown_extraction_service",
]


# =============================================================================
# Singleton Factory
# =============================================================================

_extraction_service: ExtractionService | None = None


def get_extraction_service() -> ExtractionService:
    """Get or create the extraction service singleton."""
    global _extraction_service
    if _extraction_service is None:
        settings = get_settings()
        executor = None
        if settings.parallel_field_parsing:
            executor = ThreadPoolExecutor(
                max_workers=settings.parser_workers,
                thread_name_prefix="field-parser",
            )
            logger.info(
                "Parallel field parsing enabled (%d workers)", settings.parser_workers
            )
        _extraction_service = ExtractionService(
            text_provider=get_text_service().extract_text,
            generic=GenericExtractor(executor=executor),
            min_text_length=settings.min_text_length,
            min_recoverable_text_length=settings.min_recoverable_text_length,
        )
    return _extraction_service


def shutdown_extraction_service() -> None:
    """Release the singleton's parser thread pool and forget the singleton."""
    global _extraction_service
    if _extraction_service is None:
        return
    executor = _extraction_service.generic.executor
    if executor is not None:
        executor.shutdown(wait=True)
        logger.info("Field parser thread pool shut down")
    _extraction_service = None
