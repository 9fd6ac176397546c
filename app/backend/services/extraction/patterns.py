"""
Regular expressions shared by the field parsers of both tiers.
"""

import re

EMAIL_PATTERN = r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"

# Ten digits with optional area-code parentheses and separators. The digit
# guards keep longer digit runs (account numbers, IDs) from matching.
PHONE_PATTERN = r"(?<!\d)\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"

DATE_PATTERN = r"\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}"
FULL_DATE_PATTERN = r"\d{1,2}[/\-]\d{1,2}[/\-]\d{4}"
SLASH_DATE_PATTERN = r"\d{1,2}/\d{1,2}/\d{4}"

AMOUNT_PATTERN = r"\$?([\d,]+\.?\d*)"

EMAIL_RE = re.compile(EMAIL_PATTERN)
EMAIL_FULL_RE = re.compile(rf"^{EMAIL_PATTERN}$")
PHONE_RE = re.compile(PHONE_PATTERN)

# "Legacy Meadows - 4600-15", "Prairie Village - 3A". The property name stays
# on a single line.
PROPERTY_UNIT_RE = re.compile(r"([A-Z][A-Za-z \t]+?)\s+-\s+([A-Za-z0-9-]+)")

# Markers of the known application layout
DOCUMENT_TITLE = "Rental Application for"
EMERGENCY_CONTACT_MARKER = "Emergency Contact"
APPLICANT_EMAIL_END = r"Type\s+Financially"
