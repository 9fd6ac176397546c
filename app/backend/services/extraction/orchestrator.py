"""
Extraction orchestrator: picks the extraction tier for a document.

bytes -> text acquisition -> enough text?  yes -> generic extractor
                                           no  -> specialized extractor on the bytes

Each tier is attempted at most once. When the specialized tier cannot
recover text either, InsufficientTextError is raised.
"""

import logging
import time
from typing import Callable

from ...models import ExtractedData
from .exceptions import InsufficientTextError
from .generic import GenericExtractor
from .specialized import SpecializedExtractor

logger = logging.getLogger(__name__)

TextProvider = Callable[[bytes], str | None]


def _with_processing_time(data: ExtractedData, elapsed_ms: float) -> ExtractedData:
    metadata = data.metadata.model_copy(update={"processing_time_ms": elapsed_ms})
    return data.model_copy(update={"metadata": metadata})


class ExtractionService:
    """
    Runs the two-tier extraction pipeline for one document at a time.

    Holds no per-call state, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        text_provider: TextProvider,
        generic: GenericExtractor | None = None,
        specialized: SpecializedExtractor | None = None,
        min_text_length: int = 50,
        min_recoverable_text_length: int = 10,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        """
        Initialize the extraction service.

        Args:
            text_provider: Turns document bytes into text; returns None or a
                short string on failure instead of raising.
            generic: Extractor for acquired text.
            specialized: Extractor for raw bytes when acquisition falls short.
            min_text_length: Acquired text at least this long goes to the
                generic extractor.
            min_recoverable_text_length: Specialized summaries shorter than
                this mean the document could not be read at all.
            log: Logger for diagnostics. Defaults to the module logger.
        """
        self.log = log or logger
        self.text_provider = text_provider
        self.generic = generic or GenericExtractor(log=self.log)
        self.specialized = specialized or SpecializedExtractor(log=self.log)
        self.min_text_length = min_text_length
        self.min_recoverable_text_length = min_recoverable_text_length

    def extract(self, file_bytes: bytes, text: str | None = None) -> ExtractedData:
        """
        Extract applicant fields from a document.

        Args:
            file_bytes: Raw PDF bytes.
            text: Text already acquired by the caller. When given, the text
                provider is not called.

        Returns:
            ExtractedData with end-to-end processing time in its metadata.

        Raises:
            InsufficientTextError: If neither tier recovered usable text.
        """
        start = time.perf_counter()

        if text is None:
            text = self.text_provider(file_bytes)
        acquired = text or ""
        self.log.info("Text acquisition returned %d characters", len(acquired))

        if len(acquired) >= self.min_text_length:
            data = self.generic.extract(acquired)
        else:
            self.log.warning(
                "Acquired text below %d characters, using specialized extraction",
                self.min_text_length,
            )
            result = self.specialized.extract(file_bytes)
            if len(result.text) < self.min_recoverable_text_length:
                self.log.warning(
                    "All extraction tiers failed (acquired %d chars, recovered %d chars)",
                    len(acquired),
                    len(result.text),
                )
                raise InsufficientTextError(
                    acquired_length=len(acquired),
                    recoverable_length=len(result.text),
                )
            data = result.data

        elapsed_ms = (time.perf_counter() - start) * 1000
        self.log.info(
            "Extraction complete: method=%s fields=%d overall=%.3f time=%.1fms",
            data.metadata.extraction_method.value,
            data.fields_found(),
            data.overall,
            elapsed_ms,
        )
        return _with_processing_time(data, elapsed_ms)

    def extract_text(self, text: str) -> ExtractedData:
        """Run the generic extractor directly over caller-supplied text."""
        start = time.perf_counter()
        data = self.generic.extract(text)
        elapsed_ms = (time.perf_counter() - start) * 1000
        return _with_processing_time(data, elapsed_ms)
