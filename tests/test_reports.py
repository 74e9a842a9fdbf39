"""
Reporting Layer Tests

Tests verify:
- PDF generation produces valid bytes
- Excel generation produces the expected sheets
- Smart filename pattern, header-safe characters only
- Dated certificate footer
"""

from datetime import date, datetime, timezone
import io

import pandas as pd
import pytest

from pawhealth.records import (
    AppointmentRecord,
    Dog,
    HealthRecord,
    HealthRecordType,
    VaccinationRecord,
)
from pawhealth.reports import (
    certificate_footer,
    generate_excel_report,
    generate_filename,
    generate_pdf_report,
)
from pawhealth.rules import HealthStatusEvaluator


REFERENCE = datetime(2026, 3, 15, 17, 30, tzinfo=timezone.utc)


@pytest.fixture
def dog() -> Dog:
    return Dog(id="dog-1", user_id="user-1", name="Biscuit", breed="Labrador", age=5, weight=31.0)


@pytest.fixture
def records(dog):
    vaccinations = [
        VaccinationRecord(dog_id=dog.id, vaccine_name="Rabies", date_given=date(2026, 1, 10),
                          next_due_date=date(2027, 1, 10)),
    ]
    health_records = [
        HealthRecord(dog_id=dog.id, date=date(2026, 2, 1), type=HealthRecordType.VET_VISIT,
                     title="Checkup"),
    ]
    appointments = [
        AppointmentRecord(dog_id=dog.id, date=date(2026, 4, 2), title="Grooming",
                          location="Paws & Co"),
    ]
    return vaccinations, health_records, appointments


@pytest.fixture
def report(records):
    return HealthStatusEvaluator().evaluate(*records, REFERENCE)


class TestPDFGeneration:
    """Test PDF report generation."""

    def test_generates_valid_pdf_bytes(self, report, dog):
        pdf_bytes = generate_pdf_report(report, dog, REFERENCE)

        assert isinstance(pdf_bytes, bytes)
        assert pdf_bytes.startswith(b"%PDF")

    def test_renders_report_without_factors(self, dog):
        empty = HealthStatusEvaluator().evaluate([], [HealthRecord(
            dog_id=dog.id, date=date(2026, 3, 1), type=HealthRecordType.ILLNESS
        )] * 2, [], REFERENCE)
        empty = empty.model_copy(update={"factors": []})

        assert generate_pdf_report(empty, dog, REFERENCE).startswith(b"%PDF")


class TestExcelGeneration:
    """Test Excel workbook generation."""

    def test_contains_all_sheets(self, report, dog, records):
        xlsx = generate_excel_report(report, dog, REFERENCE, *records)

        sheets = pd.read_excel(io.BytesIO(xlsx), sheet_name=None)

        assert list(sheets) == ["Summary", "Vaccinations", "Health_Records", "Appointments"]

    def test_summary_values(self, report, dog, records):
        xlsx = generate_excel_report(report, dog, REFERENCE, *records)

        summary = pd.read_excel(io.BytesIO(xlsx), sheet_name="Summary")
        values = dict(zip(summary["Metric"], summary["Value"]))

        assert values["Dog"] == "Biscuit"
        assert values["Score"] == f"{report.score}/100"
        assert values["Status"] == report.status.value

    def test_empty_record_sheets_keep_headers(self, report, dog):
        xlsx = generate_excel_report(report, dog, REFERENCE, [], [], [])

        vaccinations = pd.read_excel(io.BytesIO(xlsx), sheet_name="Vaccinations")

        assert list(vaccinations.columns) == ["Date Given", "Vaccine", "Type", "Next Due", "Veterinarian"]
        assert vaccinations.empty


class TestFilename:
    """Test smart filename pattern."""

    def test_pattern(self):
        assert generate_filename("Biscuit", REFERENCE, "pdf") == "HealthStatus_Biscuit_20260315.pdf"

    def test_sanitizes_name(self):
        assert generate_filename(" Sir Barks/II ", date(2026, 1, 2), "xlsx") == (
            "HealthStatus_Sir_Barks-II_20260102.xlsx"
        )

    def test_non_ascii_characters_replaced(self):
        assert generate_filename("Łatka 小黑", REFERENCE, "pdf") == "HealthStatus__atka____20260315.pdf"

    def test_header_delimiters_replaced(self):
        assert generate_filename('Rex; "x', REFERENCE, "pdf") == "HealthStatus_Rex___x_20260315.pdf"

    def test_blank_name_falls_back(self):
        assert generate_filename("   ", REFERENCE, "pdf") == "HealthStatus_Dog_20260315.pdf"


class TestCertificateFooter:
    """Test the dated PDF footer."""

    def test_footer_carries_report_date(self):
        footer = certificate_footer(REFERENCE)

        assert footer.startswith("Generated 2026-03-15.")
        assert "not a veterinary diagnosis" in footer
