"""
Generic extraction over plain text.

Runs every field parser over a block of extracted text and aggregates the
results. Usable on any text, whatever document layout produced it.
"""

import logging
import time
from concurrent.futures import Executor

from ...models import (
    FIELD_NAMES,
    ExtractedData,
    ExtractedField,
    ExtractionMetadata,
    ExtractionMethod,
)
from .fields import FIELD_PARSERS, FieldParser

logger = logging.getLogger(__name__)


def mean_confidence(fields: dict[str, ExtractedField]) -> float:
    """Unweighted mean of the field confidences, unmatched fields counting as zero."""
    return sum(field.confidence for field in fields.values()) / len(FIELD_NAMES)


class GenericExtractor:
    """
    Extracts all applicant fields from plain text.

    Parsers are independent of each other. When an executor is given they
    are submitted to it concurrently; the result is the same either way.
    """

    def __init__(
        self,
        parsers: dict[str, FieldParser] | None = None,
        executor: Executor | None = None,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        """
        Initialize the generic extractor.

        Args:
            parsers: Field parsers keyed by field name. Defaults to the
                built-in parsers for all eight fields.
            executor: Optional executor used to run the parsers in parallel.
            log: Logger for diagnostics. Defaults to the module logger.
        """
        self.parsers = parsers or FIELD_PARSERS
        self.executor = executor
        self.log = log or logger

    def _parse_fields(self, text: str) -> dict[str, ExtractedField]:
        if self.executor is None:
            return {name: self.parsers[name](text) for name in FIELD_NAMES}

        futures = {
            name: self.executor.submit(self.parsers[name], text)
            for name in FIELD_NAMES
        }
        return {name: future.result() for name, future in futures.items()}

    def extract(self, text: str) -> ExtractedData:
        """
        Extract every field from the text.

        Args:
            text: Plain text of the document.

        Returns:
            ExtractedData labeled as generic, with overall confidence equal
            to the mean of the eight field confidences.
        """
        start = time.perf_counter()
        fields = self._parse_fields(text or "")
        overall = mean_confidence(fields)

        for name, field in fields.items():
            self.log.debug(
                "Generic field %s = %r (confidence %.2f)",
                name,
                field.value,
                field.confidence,
            )
        self.log.info(
            "Generic extraction found %d/%d fields (overall confidence %.3f)",
            sum(1 for field in fields.values() if field.found),
            len(FIELD_NAMES),
            overall,
        )

        return ExtractedData(
            **fields,
            overall=overall,
            metadata=ExtractionMetadata(
                extraction_method=ExtractionMethod.GENERIC,
                processing_time_ms=(time.perf_counter() - start) * 1000,
            ),
        )
