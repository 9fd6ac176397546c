"""Tests for the generic and specialized extractors."""

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.backend.models import FIELD_NAMES, ExtractionMethod
from app.backend.services.extraction import GenericExtractor, SpecializedExtractor
from app.backend.services.extraction.specialized import (
    render_summary,
    select_applicant_email,
    select_applicant_phone,
)


def _field_confidences(data) -> list[float]:
    return [field.confidence for field in data.extracted_fields().values()]


def _assert_field_invariants(data) -> None:
    for field in data.extracted_fields().values():
        assert 0.0 <= field.confidence <= 1.0
        assert (field.confidence == 0) == (field.value is None)


class TestGenericExtractor:
    """Tests for GenericExtractor."""

    def test_clean_labeled_application(self, application_text: str):
        """Test a fully labeled application."""
        data = GenericExtractor().extract(application_text)

        assert data.name.value == "JANE DOE"
        assert data.name.confidence == 0.95
        assert data.email.value == "jane.doe@example.com"
        assert data.phone.value == "555-123-4567"
        assert data.move_in_date.value == "01/15/2025"
        assert data.move_in_date.confidence == 0.85
        assert data.property.value == "Legacy Meadows"
        assert data.unit_number.value == "4600-15"
        assert data.rent.value == "1500.00"
        assert data.rent.confidence == 0.95
        assert data.created_at.value == "12/01/2024"
        assert data.metadata.extraction_method == ExtractionMethod.GENERIC
        _assert_field_invariants(data)

    def test_overall_is_mean_of_confidences(self, application_text: str):
        data = GenericExtractor().extract(application_text)
        expected = sum(_field_confidences(data)) / 8
        assert data.overall == pytest.approx(expected, abs=1e-9)
        assert data.overall == pytest.approx(0.91875, abs=1e-9)

    def test_partial_extraction_is_penalized(self):
        """Test that unmatched fields count as zero in the overall score."""
        text = (
            "Applicant: Jane Doe\n"
            "Phone: 555-123-4567\n"
            "Legacy Meadows - 4600-15\n"
        )
        data = GenericExtractor().extract(text)

        assert data.fields_found() == 4
        assert data.overall == pytest.approx(0.45, abs=1e-9)
        assert data.email.value is None
        assert data.email.confidence == 0

    def test_nothing_found(self):
        data = GenericExtractor().extract("no applicant information here")
        assert data.fields_found() == 0
        assert data.overall == 0
        _assert_field_invariants(data)

    def test_parallel_parsing_gives_same_result(self, application_text: str):
        """Test that running parsers on an executor changes nothing."""
        sequential = GenericExtractor().extract(application_text)
        with ThreadPoolExecutor(max_workers=4) as executor:
            parallel = GenericExtractor(executor=executor).extract(application_text)

        exclude = {"metadata": {"processing_time_ms"}}
        assert parallel.model_dump(exclude=exclude) == sequential.model_dump(
            exclude=exclude
        )

    def test_custom_parsers(self):
        """Test that parsers can be replaced per field."""
        from app.backend.models import ExtractedField
        from app.backend.services.extraction import FIELD_PARSERS

        parsers = dict(FIELD_PARSERS)
        parsers["name"] = lambda text: ExtractedField(value="Fixed Name", confidence=0.5)
        data = GenericExtractor(parsers=parsers).extract("")
        assert data.name.value == "Fixed Name"
        assert data.overall == pytest.approx(0.5 / 8)

    def test_logs_through_injected_logger(self, application_text, test_logger, caplog):
        with caplog.at_level(logging.INFO, logger=test_logger.name):
            GenericExtractor(log=test_logger).extract(application_text)
        assert any(
            record.name == test_logger.name and "Generic extraction found 8/8" in record.getMessage()
            for record in caplog.records
        )


class TestSpecializedExtractor:
    """Tests for SpecializedExtractor."""

    def test_known_layout(self, layout_bytes: bytes):
        """Test a document in the known layout."""
        result = SpecializedExtractor().extract(layout_bytes)
        data = result.data

        assert data.name.value == "RAYMOND D. GULLETT"
        assert data.email.value == "ray@example.com"
        assert data.phone.value == "555-111-2222"
        assert data.move_in_date.value == "03/01/2025"
        assert data.property.value == "Legacy Meadows"
        assert data.unit_number.value == "4600-15"
        assert data.rent.value == "1250.00"
        assert data.created_at.value == "02/10/2025"
        assert data.metadata.extraction_method == ExtractionMethod.SPECIALIZED
        assert all(conf == 0.95 for conf in _field_confidences(data))
        assert data.overall == 1.0

    def test_overall_is_fraction_of_fields_found(self):
        raw = b"Rental Application for JOHN ROE\nMarket Rent: $900\n"
        data = SpecializedExtractor().extract(raw).data

        assert data.name.value == "JOHN ROE"
        assert data.rent.value == "900"
        assert data.fields_found() == 2
        assert data.overall == pytest.approx(2 / 8)
        _assert_field_invariants(data)

    def test_summary_text(self):
        raw = b"Rental Application for JOHN ROE\nMarket Rent: $900\n"
        result = SpecializedExtractor().extract(raw)
        assert result.text == "Name: JOHN ROE\nRent: 900\n"

    def test_nothing_recoverable(self):
        result = SpecializedExtractor().extract(b"%PDF-1.4\n%\xff\xfe\xfd binary")
        assert result.text == ""
        assert result.data.overall == 0
        assert result.data.fields_found() == 0

    def test_undecodable_bytes_are_tolerated(self):
        raw = b"\xff\xfeRental Application for JOHN ROE\n\x80\x81"
        assert SpecializedExtractor().extract(raw).data.name.value == "JOHN ROE"

    def test_only_title_name_strategy(self):
        """Test that labeled names are not used by this tier."""
        data = SpecializedExtractor().extract(b"Applicant: John Smith\n").data
        assert data.name.value is None

    def test_render_summary_skips_missing_fields(self, layout_bytes: bytes):
        fields = SpecializedExtractor().extract_fields(layout_bytes.decode())
        summary = render_summary(fields)
        assert summary.splitlines()[0] == "Name: RAYMOND D. GULLETT"
        assert len(summary.splitlines()) == len(FIELD_NAMES)


class TestSelectApplicantEmail:
    """Tests for contextual email selection."""

    def test_name_then_type_financially(self):
        text = (
            "Rental Application for JOHN ROE\n"
            "Emergency pat@example.com\n"
            "Email john@example.com\n"
            "Type Financially Responsible\n"
            "Landlord owner@example.com\n"
        )
        assert select_applicant_email(text, "JOHN ROE") == "john@example.com"

    def test_second_name_occurrence(self):
        """Test the email after the name's second occurrence."""
        text = (
            "Rental Application for JOHN ROE\n"
            "Email pat@example.com\n"
            "JOHN ROE\n"
            "Email john@example.com\n"
            "Other other@example.com\n"
        )
        assert select_applicant_email(text, "JOHN ROE") == "john@example.com"

    def test_last_distinct_email(self):
        text = "a@example.com b@example.com a@example.com"
        assert select_applicant_email(text, "JOHN ROE") == "b@example.com"

    def test_without_name_uses_last_email(self):
        text = "Email first@example.com\nType Financially\nlast@example.com"
        assert select_applicant_email(text, None) == "last@example.com"

    def test_name_with_regex_characters(self):
        text = (
            "Rental Application for RAYMOND D. GULLETT\n"
            "Email ray@example.com\n"
            "Type Financially\n"
            "zed@example.com\n"
        )
        assert select_applicant_email(text, "RAYMOND D. GULLETT") == "ray@example.com"

    def test_no_email(self):
        assert select_applicant_email("nothing", "JOHN ROE") is None


class TestSelectApplicantPhone:
    """Tests for contextual phone selection."""

    def test_mobile_wins(self):
        text = "555-000-0000 home\nEmergency Contact\n(555) 111-2222 Mobile\n"
        assert select_applicant_phone(text) == "555-111-2222"

    def test_last_phone_before_emergency_contact(self):
        text = (
            "555-222-3333 home\n"
            "555-444-5555 work\n"
            "Emergency Contact\n"
            "555-987-6543\n"
        )
        assert select_applicant_phone(text) == "555-444-5555"

    def test_no_phone_before_emergency_contact(self):
        text = "Emergency Contact\n555-987-6543\n"
        assert select_applicant_phone(text) is None

    def test_first_phone_without_emergency_section(self):
        text = "555-222-3333 home\n555-444-5555 work\n"
        assert select_applicant_phone(text) == "555-222-3333"
