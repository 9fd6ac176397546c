"""
Ordered-strategy matching used by every field parser.

A field parser is a list of strategies tried from most to least specific.
Each strategy finds one raw candidate, normalizes it, and on success
reports its fixed confidence. A candidate that fails normalization is
discarded and the next strategy runs.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Sequence

from ...models import ExtractedField
from .normalize import clean_token

logger = logging.getLogger(__name__)

Matcher = Callable[[str], str | None]
Normalizer = Callable[[str], str | None]


@dataclass(frozen=True)
class Strategy:
    """
    One heuristic for one field.

    Attributes:
        name: Short identifier used in debug logs.
        matcher: Finds a raw candidate in the text, or returns None.
        confidence: Declared trust level when this strategy succeeds.
        normalizer: Validates and normalizes the candidate (None rejects it).
    """

    name: str
    matcher: Matcher
    confidence: float
    normalizer: Normalizer = clean_token

    def apply(self, text: str) -> ExtractedField | None:
        candidate = self.matcher(text)
        if candidate is None:
            return None
        value = self.normalizer(candidate)
        if value is None:
            logger.debug("Strategy %s rejected candidate %r", self.name, candidate)
            return None
        return ExtractedField(value=value, confidence=self.confidence)


def regex(
    pattern: str | re.Pattern[str], flags: int = 0, group: int = 1
) -> Matcher:
    """
    Build a matcher returning one group of the first regex match.

    Args:
        pattern: Pattern string or an already compiled pattern.
        flags: Flags used when compiling a pattern string.
        group: Capture group holding the candidate.
    """
    compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)

    def match(text: str) -> str | None:
        found = compiled.search(text)
        if found is None:
            return None
        return found.group(group) or None

    return match


def first_match(text: str, strategies: Sequence[Strategy]) -> ExtractedField:
    """Return the result of the first strategy that succeeds, else a missing field."""
    if not text:
        return ExtractedField.missing()
    for strategy in strategies:
        result = strategy.apply(text)
        if result is not None:
            logger.debug(
                "Strategy %s matched %r (confidence %.2f)",
                strategy.name,
                result.value,
                result.confidence,
            )
            return result
    return ExtractedField.missing()
