"""
Field parsers for rental application text.

One parser per target field. Each is a pure function from text to an
ExtractedField, defined by an ordered strategy table. The shared strategies
are also reused by the specialized extractor.
"""

import re
from typing import Callable

from ...models import ExtractedField
from .normalize import (
    clean_amount,
    clean_email,
    clean_name,
    clean_property,
    format_date,
    format_phone,
    is_valid_name,
)
from .patterns import (
    AMOUNT_PATTERN,
    APPLICANT_EMAIL_END,
    DATE_PATTERN,
    DOCUMENT_TITLE,
    EMAIL_PATTERN,
    EMAIL_RE,
    FULL_DATE_PATTERN,
    PHONE_PATTERN,
    PROPERTY_UNIT_RE,
    SLASH_DATE_PATTERN,
)
from .strategies import Strategy, first_match, regex

FieldParser = Callable[[str], ExtractedField]

# =============================================================================
# Name
# =============================================================================

NAME_FROM_TITLE = Strategy(
    name="name.document_title",
    matcher=regex(
        rf"{DOCUMENT_TITLE}\s+([A-Z][A-Z\s.]+?)"
        r"(?:\s{2,}|Applicants|Email|Phone|Address|Legacy|Residential|\n|$)",
        re.IGNORECASE,
    ),
    confidence=0.95,
    normalizer=clean_name,
)

_FIRST_NAME_RE = re.compile(r"First\s*Name:\s*([A-Z][A-Za-z]+)", re.IGNORECASE)
_LAST_NAME_RE = re.compile(r"Last\s*Name:\s*([A-Z][A-Za-z]+)", re.IGNORECASE)
_TOP_LINE_NAME_RE = re.compile(r"[A-Z][A-Za-z]+(?:\s+[A-Z][A-Za-z.]+){1,4}")


def _first_and_last_name(text: str) -> str | None:
    first = _FIRST_NAME_RE.search(text)
    last = _LAST_NAME_RE.search(text)
    if first and last:
        return f"{first.group(1)} {last.group(1)}"
    return None


def _name_in_top_lines(text: str, max_lines: int = 10) -> str | None:
    for line in text.split("\n")[:max_lines]:
        line = line.strip()
        if _TOP_LINE_NAME_RE.fullmatch(line) and is_valid_name(line):
            return line
    return None


NAME_STRATEGIES: tuple[Strategy, ...] = (
    NAME_FROM_TITLE,
    Strategy(
        name="name.label",
        matcher=regex(
            r"(?:Applicant|Name|Full Name|Legal Name):\s*([A-Z][A-Za-z\s.]+?)(?:\n|$)",
            re.IGNORECASE,
        ),
        confidence=0.9,
        normalizer=clean_name,
    ),
    Strategy(
        name="name.first_last_labels",
        matcher=_first_and_last_name,
        confidence=0.9,
        normalizer=clean_name,
    ),
    Strategy(
        name="name.top_line",
        matcher=_name_in_top_lines,
        confidence=0.7,
        normalizer=clean_name,
    ),
    Strategy(
        name="name.before_email",
        matcher=regex(
            rf"([A-Z][A-Za-z]+(?:\s+[A-Z][A-Za-z.]+)+)\s*[\n\r]+\s*{EMAIL_PATTERN}"
        ),
        confidence=0.8,
        normalizer=clean_name,
    ),
)

# =============================================================================
# Email
# =============================================================================


def _last_of_several_emails(text: str) -> str | None:
    emails = EMAIL_RE.findall(text)
    return emails[-1] if len(emails) > 1 else None


def _only_email(text: str) -> str | None:
    emails = EMAIL_RE.findall(text)
    return emails[0] if len(emails) == 1 else None


EMAIL_STRATEGIES: tuple[Strategy, ...] = (
    Strategy(
        name="email.applicant_block",
        matcher=regex(rf"Email:?\s+({EMAIL_PATTERN})[\s\S]*?{APPLICANT_EMAIL_END}"),
        confidence=0.95,
        normalizer=clean_email,
    ),
    # Emergency contact emails come first, so the applicant's is the last one
    Strategy(
        name="email.last_of_several",
        matcher=_last_of_several_emails,
        confidence=0.7,
        normalizer=clean_email,
    ),
    Strategy(
        name="email.only",
        matcher=_only_email,
        confidence=0.95,
        normalizer=clean_email,
    ),
)

# =============================================================================
# Phone
# =============================================================================

PHONE_STRATEGIES: tuple[Strategy, ...] = (
    Strategy(
        name="phone.label",
        matcher=regex(
            rf"(?:Phone|Tel|Mobile|Cell):\s*({PHONE_PATTERN})", re.IGNORECASE
        ),
        confidence=0.9,
        normalizer=format_phone,
    ),
    Strategy(
        name="phone.first",
        matcher=regex(rf"({PHONE_PATTERN})"),
        confidence=0.9,
        normalizer=format_phone,
    ),
)

# =============================================================================
# Move-in date
# =============================================================================

MOVE_IN_STRATEGIES: tuple[Strategy, ...] = (
    Strategy(
        name="move_in.label",
        matcher=regex(
            rf"(?:Move[\s-]?In|Lease Start|Start Date):\s*({DATE_PATTERN})",
            re.IGNORECASE,
        ),
        confidence=0.85,
        normalizer=format_date,
    ),
    Strategy(
        name="move_in.label_without_colon",
        matcher=regex(
            rf"(?:Move[\s-]?In|Lease Start)\s*({DATE_PATTERN})", re.IGNORECASE
        ),
        confidence=0.85,
        normalizer=format_date,
    ),
    Strategy(
        name="move_in.first_date",
        matcher=regex(rf"({FULL_DATE_PATTERN})"),
        confidence=0.85,
        normalizer=format_date,
    ),
)

# =============================================================================
# Property and unit
# =============================================================================

PROPERTY_FROM_LINE = Strategy(
    name="property.property_line",
    matcher=regex(PROPERTY_UNIT_RE, group=1),
    confidence=0.9,
    normalizer=clean_property,
)

UNIT_FROM_LINE = Strategy(
    name="unit.property_line",
    matcher=regex(PROPERTY_UNIT_RE, group=2),
    confidence=0.9,
)

PROPERTY_STRATEGIES: tuple[Strategy, ...] = (PROPERTY_FROM_LINE,)

UNIT_STRATEGIES: tuple[Strategy, ...] = (
    UNIT_FROM_LINE,
    Strategy(
        name="unit.label",
        matcher=regex(r"Unit(?:\s+Number)?[:\s]+([A-Za-z0-9-]+)", re.IGNORECASE),
        confidence=0.85,
    ),
)

# =============================================================================
# Rent
# =============================================================================

MARKET_RENT = Strategy(
    name="rent.market_rent",
    matcher=regex(rf"Market Rent[:\s]+{AMOUNT_PATTERN}", re.IGNORECASE),
    confidence=0.95,
    normalizer=clean_amount,
)

RENT_STRATEGIES: tuple[Strategy, ...] = (
    MARKET_RENT,
    Strategy(
        name="rent.label",
        matcher=regex(rf"Rent[:\s]+{AMOUNT_PATTERN}", re.IGNORECASE),
        confidence=0.85,
        normalizer=clean_amount,
    ),
)

# =============================================================================
# Application (submission) date
# =============================================================================

SUBMITTED_VIA = Strategy(
    name="created_at.submitted_via",
    matcher=regex(
        rf"Submitted\s+Via\s+.+?\s+on\s+({SLASH_DATE_PATTERN})", re.IGNORECASE
    ),
    confidence=0.95,
)

CREATED_AT_STRATEGIES: tuple[Strategy, ...] = (
    SUBMITTED_VIA,
    Strategy(
        name="created_at.label",
        matcher=regex(
            rf"(?:Created|Application Date|Submitted)[:\s]+({SLASH_DATE_PATTERN})",
            re.IGNORECASE,
        ),
        confidence=0.85,
    ),
)

# =============================================================================
# Parsers
# =============================================================================


def parse_name(text: str) -> ExtractedField:
    return first_match(text, NAME_STRATEGIES)


def parse_email(text: str) -> ExtractedField:
    return first_match(text, EMAIL_STRATEGIES)


def parse_phone(text: str) -> ExtractedField:
    return first_match(text, PHONE_STRATEGIES)


def parse_move_in_date(text: str) -> ExtractedField:
    return first_match(text, MOVE_IN_STRATEGIES)


def parse_property(text: str) -> ExtractedField:
    return first_match(text, PROPERTY_STRATEGIES)


def parse_unit_number(text: str) -> ExtractedField:
    return first_match(text, UNIT_STRATEGIES)


def parse_rent(text: str) -> ExtractedField:
    return first_match(text, RENT_STRATEGIES)


def parse_created_at(text: str) -> ExtractedField:
    return first_match(text, CREATED_AT_STRATEGIES)


# Keyed by ExtractedData field name, in FIELD_NAMES order
FIELD_PARSERS: dict[str, FieldParser] = {
    "name": parse_name,
    "email": parse_email,
    "phone": parse_phone,
    "move_in_date": parse_move_in_date,
    "property": parse_property,
    "unit_number": parse_unit_number,
    "rent": parse_rent,
    "created_at": parse_created_at,
}
