"""Pytest configuration and fixtures."""

import logging
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from app.backend.main import app
from app.backend.services.extraction import ExtractionService, get_extraction_service

# Clean text as produced by text acquisition on a rental application
APPLICATION_TEXT = """Rental Application for JANE DOE
Legacy Meadows - 4600-15
Market Rent: $1,500.00
Desired Move In: 01/15/2025
Phone: (555) 123-4567
Email jane.doe@example.com
Type Financially Responsible
Submitted Via Online Portal on 12/01/2024
"""

# Raw bytes of the known layout, readable only by the specialized tier
LAYOUT_BYTES = b"""%PDF-1.4
Rental Application for RAYMOND D. GULLETT
Legacy Meadows - 4600-15
Market Rent: $1,250.00
Desired Move In: 03/01/2025
Submitted Via Online Portal on 02/10/2025
Emergency Contact
Pat Gullett pat@example.com 555-987-6543
RAYMOND D. GULLETT
Email ray@example.com
(555) 111-2222 mobile
Type Financially Responsible
"""

# One page with a Helvetica text layer, offsets in the xref table are exact
APPLICATION_PDF = (
    b"%PDF-1.4\n"
    b"1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj\n"
    b"2 0 obj\n<< /Type /Pages /Kids [3 0 R] /Count 1 >>\nendobj\n"
    b"3 0 obj\n<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
    b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>\nendobj\n"
    b"4 0 obj\n<< /Length 141 >>\nstream\n"
    b"BT /F1 12 Tf 72 720 Td (Rental Application for JANE DOE) Tj "
    b"0 -20 Td (Market Rent: $1,500.00) Tj "
    b"0 -20 Td (Desired Move In: 01/15/2025) Tj ET"
    b"\nendstream\nendobj\n"
    b"5 0 obj\n<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>\nendobj\n"
    b"xref\n0 6\n"
    b"0000000000 65535 f \n"
    b"0000000009 00000 n \n"
    b"0000000058 00000 n \n"
    b"0000000115 00000 n \n"
    b"0000000241 00000 n \n"
    b"0000000433 00000 n \n"
    b"trailer\n<< /Size 6 /Root 1 0 R >>\nstartxref\n503\n%%EOF\n"
)


def _text_provider_returning(text: str | None) -> Callable[[bytes], str | None]:
    def provide(file_bytes: bytes) -> str | None:
        return text

    return provide


@pytest.fixture
def fake_text_provider():
    """Factory for fake text acquisition providers with a fixed answer."""
    return _text_provider_returning


@pytest.fixture
def application_text() -> str:
    return APPLICATION_TEXT


@pytest.fixture
def layout_bytes() -> bytes:
    return LAYOUT_BYTES


@pytest.fixture
def application_pdf_bytes() -> bytes:
    """A minimal valid PDF whose text layer holds a short application."""
    return APPLICATION_PDF


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def test_logger() -> logging.Logger:
    return logging.getLogger("tests.extraction")


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def override_service() -> Generator[Callable[[ExtractionService], None], None, None]:
    """Swap the extraction service used by the routes for the test's own."""

    def install(service: ExtractionService) -> None:
        app.dependency_overrides[get_extraction_service] = lambda: service

    yield install
    app.dependency_overrides.pop(get_extraction_service, None)
