from __future__ import annotations

from datetime import UTC, datetime

from sfafkit.compliance import run_full_compliance
from sfafkit.report import COMPLIANT, NON_COMPLIANT, render_compliance_report
from sfafkit.typing.models import ComplianceReport, ComplianceWarning, Record

GENERATED_AT = datetime(2025, 1, 31, 12, 0, tzinfo=UTC)


def test_render_compliant_report(compliant_record: Record) -> None:
    text = render_compliance_report(run_full_compliance(compliant_record), generated_at=GENERATED_AT)

    assert f"Overall Compliance Status: {COMPLIANT}" in text
    assert "All required fields present" in text
    assert "All field occurrence limits compliant with MCEB Pub 7" in text
    assert "No format errors" in text
    assert "WARNINGS" not in text
    assert text.rstrip().endswith(f"Record is {COMPLIANT} with MCEB Publication 7")
    assert "Generated: 2025-01-31T12:00:00+00:00" in text


def test_render_report_lists_each_category(compliant_record: Record) -> None:
    record = (
        compliant_record.with_values("701", [])
        .with_values("500", ["C010"] * 11)
        .with_values("115", ["K5", "K0.5"])
    )

    text = render_compliance_report(run_full_compliance(record), generated_at=GENERATED_AT)

    assert f"Overall Compliance Status: {NON_COMPLIANT}" in text
    assert "  - 701 - Frequency Action Officer" in text
    assert "OCCURRENCE LIMIT EXCEEDED: 500 - IRAC Notes" in text
    assert "    Actual: 11 occurrences" in text
    assert "  - 115/02 - Transmitter Power" in text
    assert "    Error: K prefix valid for 1–999.99999 kW range only" in text
    assert "    Expected: K1 to K999.99999" in text


def test_render_report_includes_warnings_section() -> None:
    report = ComplianceReport(warnings=[ComplianceWarning(field_id="999", message="Field 999 is not defined")])

    text = render_compliance_report(report, generated_at=GENERATED_AT)

    assert "WARNINGS\n========" in text
    assert "  - 999 - Unknown field" in text
    assert f"Record is {COMPLIANT}" in text
