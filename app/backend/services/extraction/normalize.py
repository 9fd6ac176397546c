"""
Validation and normalization of raw field candidates.

Every function here takes a candidate string and returns the normalized
value, or None when the candidate is malformed. A None result makes the
calling strategy fall through to the next one.
"""

import re
from datetime import datetime

from dateutil import parser as date_parser
from price_parser import Price

from .patterns import EMAIL_FULL_RE

# Fixed default so partial dates never depend on the current day
_DATE_DEFAULT = datetime(2000, 1, 1)

# Digits and separators only, read as month/day/year without guessing
_NUMERIC_DATE_RE = re.compile(r"\d+(?:[/\-.\s]+\d+)*")


def is_valid_name(name: str) -> bool:
    """A name has 2-5 words and is 4-50 characters long."""
    words = name.split()
    return 2 <= len(words) <= 5 and 4 <= len(name) <= 50


def clean_name(candidate: str) -> str | None:
    """Collapse whitespace runs and reject implausible names."""
    name = " ".join(candidate.split())
    return name if is_valid_name(name) else None


def clean_email(candidate: str) -> str | None:
    email = candidate.strip().lower()
    return email if EMAIL_FULL_RE.match(email) else None


def format_phone(phone: str | None) -> str | None:
    """
    Format a phone candidate as DDD-DDD-DDDD.

    Args:
        phone: Any string containing the phone digits.

    Returns:
        The formatted number, or None unless there are exactly 10 digits.
    """
    if not phone:
        return None
    digits = re.sub(r"\D", "", phone)
    if len(digits) != 10:
        return None
    return f"{digits[0:3]}-{digits[3:6]}-{digits[6:10]}"


def _render_date(month: str | int, day: str | int, year: str | int) -> str | None:
    try:
        dt = datetime(int(year), int(month), int(day))
    except ValueError:
        return None
    return f"{dt.month:02d}/{dt.day:02d}/{dt.year:04d}"


def format_date(value: str | None) -> str | None:
    """
    Normalize a date candidate to MM/DD/YYYY.

    Numeric candidates are read as month/day/year and never guessed at:
    - Separated month/day/year ("1/5/2025", "12-25-24"), or ISO year first
      ("2025-01-15")
    - Six digits MMDDYY, year assumed to be 20YY ("122524")
    - Eight digits MMDDYYYY ("12252024")

    Anything with words in it goes to python-dateutil ("January 15, 2025").

    Returns None if the candidate is not a real calendar date.
    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None

    if _NUMERIC_DATE_RE.fullmatch(value):
        parts = re.split(r"[/\-.\s]+", value)
        if len(parts) == 3:
            if len(parts[0]) == 4:
                year, month, day = parts
            else:
                month, day, year = parts
            if len(year) == 2:
                year = "20" + year
            if len(year) == 4:
                return _render_date(month, day, year)
            return None
        digits = "".join(parts)
        if len(digits) == 6:
            return _render_date(digits[0:2], digits[2:4], "20" + digits[4:6])
        if len(digits) == 8:
            return _render_date(digits[0:2], digits[2:4], digits[4:8])
        return None

    try:
        dt = date_parser.parse(value, default=_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    return f"{dt.month:02d}/{dt.day:02d}/{dt.year:04d}"


def clean_amount(candidate: str) -> str | None:
    """Parse a dollar amount with price-parser, keeping the decimals as written."""
    price = Price.fromstring(candidate)
    if price.amount is None:
        return None
    return str(price.amount)


def clean_token(candidate: str) -> str | None:
    token = candidate.strip()
    return token or None


def clean_property(candidate: str) -> str | None:
    """A property name is 3-50 characters once trimmed."""
    name = candidate.strip()
    return name if 3 <= len(name) <= 50 else None
