"""
Layout-specific extraction straight from raw PDF bytes.

Used when text acquisition comes back nearly empty. The bytes are decoded
as text and searched with the shared field strategies plus contextual
rules that only hold for the known rental application layout:

- the applicant's name appears once at the top and again before their
  own contact block;
- the applicant's email sits in a block closed by "Type Financially";
- the applicant's phone numbers precede the "Emergency Contact" section.
"""

import logging
import re
import time
from dataclasses import dataclass

from ...models import (
    FIELD_NAMES,
    ExtractedData,
    ExtractedField,
    ExtractionMetadata,
    ExtractionMethod,
)
from .fields import (
    MARKET_RENT,
    NAME_FROM_TITLE,
    PROPERTY_FROM_LINE,
    SUBMITTED_VIA,
    UNIT_FROM_LINE,
)
from .normalize import clean_email, format_date, format_phone
from .patterns import (
    APPLICANT_EMAIL_END,
    EMAIL_PATTERN,
    EMAIL_RE,
    EMERGENCY_CONTACT_MARKER,
    PHONE_PATTERN,
    PHONE_RE,
    SLASH_DATE_PATTERN,
)
from .strategies import Strategy, first_match, regex

logger = logging.getLogger(__name__)

# Every match in this tier is trusted equally
SPECIALIZED_CONFIDENCE = 0.95

DESIRED_MOVE_IN = Strategy(
    name="move_in.desired_move_in",
    matcher=regex(rf"Desired Move In[:\s]+({SLASH_DATE_PATTERN})", re.IGNORECASE),
    confidence=SPECIALIZED_CONFIDENCE,
    normalizer=format_date,
)

_MOBILE_PHONE_RE = re.compile(rf"({PHONE_PATTERN})\s+mobile", re.IGNORECASE)

# Labels of the recoverable text summary, in FIELD_NAMES order
SUMMARY_LABELS: dict[str, str] = {
    "name": "Name",
    "email": "Email",
    "phone": "Phone",
    "move_in_date": "Desired Move In",
    "property": "Property",
    "unit_number": "Unit Number",
    "rent": "Rent",
    "created_at": "Application Date",
}


@dataclass(frozen=True)
class SpecializedResult:
    """Extraction result plus the text the specialized tier could recover."""

    data: ExtractedData
    text: str


def decode_document(file_bytes: bytes) -> str:
    """Decode raw document bytes as UTF-8, replacing undecodable bytes."""
    return file_bytes.decode("utf-8", errors="replace")


def unique_in_order(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def select_applicant_email(text: str, name: str | None) -> str | None:
    """
    Pick the applicant's email using the document's context.

    Tries, in order:
    1. The name, then an "Email" label, then the "Type Financially" marker
       (matched across lines).
    2. The name twice (title and personal details), then an "Email" label.
    3. The last distinct email in the document.
    """
    if name:
        escaped = re.escape(name)
        contextual_patterns = (
            re.compile(
                rf"{escaped}.*?Email\s+({EMAIL_PATTERN}).*?{APPLICANT_EMAIL_END}",
                re.DOTALL,
            ),
            re.compile(
                rf"{escaped}[\s\S]*?{escaped}[\s\S]*?Email\s+({EMAIL_PATTERN})"
            ),
        )
        for pattern in contextual_patterns:
            match = pattern.search(text)
            if match:
                return clean_email(match.group(1))

    emails = unique_in_order(EMAIL_RE.findall(text))
    if emails:
        return clean_email(emails[-1])
    return None


def select_applicant_phone(text: str) -> str | None:
    """
    Pick the applicant's phone number.

    A number tagged "mobile" wins. Otherwise the last number before the
    "Emergency Contact" section, or the first number in the document when
    there is no such section.
    """
    mobile = _MOBILE_PHONE_RE.search(text)
    if mobile:
        return format_phone(mobile.group(1))

    emergency_at = text.find(EMERGENCY_CONTACT_MARKER)
    if emergency_at > -1:
        phones = PHONE_RE.findall(text[:emergency_at])
        return format_phone(phones[-1]) if phones else None

    phones = PHONE_RE.findall(text)
    return format_phone(phones[0]) if phones else None


def render_summary(fields: dict[str, ExtractedField]) -> str:
    """Render the found fields as labeled lines."""
    lines = [
        f"{SUMMARY_LABELS[name]}: {field.value}\n"
        for name, field in fields.items()
        if field.found
    ]
    return "".join(lines)


def _trusted(value: str | None) -> ExtractedField:
    if value is None:
        return ExtractedField.missing()
    return ExtractedField(value=value, confidence=SPECIALIZED_CONFIDENCE)


class SpecializedExtractor:
    """Extracts applicant fields from the raw bytes of a known layout."""

    def __init__(self, log: logging.Logger | logging.LoggerAdapter | None = None):
        self.log = log or logger

    def extract_fields(self, text: str) -> dict[str, ExtractedField]:
        """Run the layout-specific rules over decoded document text."""
        name = first_match(text, (NAME_FROM_TITLE,)).value
        values = {
            "name": name,
            "email": select_applicant_email(text, name),
            "phone": select_applicant_phone(text),
            "move_in_date": first_match(text, (DESIRED_MOVE_IN,)).value,
            "property": first_match(text, (PROPERTY_FROM_LINE,)).value,
            "unit_number": first_match(text, (UNIT_FROM_LINE,)).value,
            "rent": first_match(text, (MARKET_RENT,)).value,
            "created_at": first_match(text, (SUBMITTED_VIA,)).value,
        }
        return {field_name: _trusted(values[field_name]) for field_name in FIELD_NAMES}

    def extract(self, file_bytes: bytes) -> SpecializedResult:
        """
        Extract every field from raw document bytes.

        Args:
            file_bytes: The original document bytes.

        Returns:
            SpecializedResult whose data is labeled as specialized, with
            overall confidence equal to the fraction of fields found, and
            whose text is the labeled summary of the found fields.
        """
        start = time.perf_counter()
        text = decode_document(file_bytes)
        self.log.debug("Specialized tier decoded %d characters", len(text))

        fields = self.extract_fields(text)
        fields_found = sum(1 for field in fields.values() if field.found)
        overall = fields_found / len(FIELD_NAMES)

        for field_name, field in fields.items():
            if field.found:
                self.log.debug("Specialized field %s = %r", field_name, field.value)
        self.log.info(
            "Specialized extraction found %d/%d fields",
            fields_found,
            len(FIELD_NAMES),
        )

        data = ExtractedData(
            **fields,
            overall=overall,
            metadata=ExtractionMetadata(
                extraction_method=ExtractionMethod.SPECIALIZED,
                processing_time_ms=(time.perf_counter() - start) * 1000,
            ),
        )
        return SpecializedResult(data=data, text=render_summary(fields))
