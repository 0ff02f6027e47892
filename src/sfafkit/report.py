"""Plain-text rendering of compliance reports."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sfafkit.schema import get_registry

if TYPE_CHECKING:
    from sfafkit.schema import FieldSchemaRegistry
    from sfafkit.typing.models import ComplianceReport

_RULE = "=" * 63
COMPLIANT = "COMPLIANT"
NON_COMPLIANT = "NON-COMPLIANT"


def _section(title: str) -> list[str]:
    return [title, "=" * len(title)]


def _title(registry: FieldSchemaRegistry, field_id: str) -> str:
    spec = registry.get_spec(field_id)
    return spec.title if spec else "Unknown field"


def _occurrence_label(field_id: str, occurrence_index: int | None) -> str:
    if occurrence_index is None or occurrence_index == 1:
        return field_id
    return f"{field_id}/{occurrence_index:02d}"


def render_compliance_report(
    report: ComplianceReport,
    *,
    generated_at: datetime | None = None,
    registry: FieldSchemaRegistry | None = None,
) -> str:
    """Render a categorized, human-readable compliance summary.

    Args:
        report (ComplianceReport): Report to render.
        generated_at (datetime | None): Timestamp shown in the banner; now (UTC) when omitted.
        registry (FieldSchemaRegistry | None): Schema used to resolve field titles.

    Returns:
        str: Report text ending with a newline.
    """
    schema = registry or get_registry()
    timestamp = (generated_at or datetime.now(tz=UTC)).isoformat(timespec="seconds")
    status = COMPLIANT if report.is_valid else NON_COMPLIANT

    lines = [
        _RULE,
        "MCEB PUBLICATION 7 COMPLIANCE REPORT".center(len(_RULE)).rstrip(),
        "Standard Frequency Action Format (SFAF)".center(len(_RULE)).rstrip(),
        _RULE,
        f"Generated: {timestamp}",
        "",
        *_section("EXECUTIVE SUMMARY"),
        f"Overall Compliance Status: {status}",
        f"Missing required fields: {len(report.missing_fields)}",
        f"Occurrence violations: {len(report.occurrence_violations)}",
        f"Format errors: {len(report.format_errors)}",
        f"Warnings: {len(report.warnings)}",
        "",
        *_section("REQUIRED FIELDS ANALYSIS"),
    ]

    if report.missing_fields:
        lines.append("MISSING REQUIRED FIELDS:")
        for missing in report.missing_fields:
            lines.append(f"  - {missing.field_id} - {missing.title}")
            lines.append(f"    Reason: {missing.reason}")
    else:
        lines.append("All required fields present")
    lines.append("")

    lines.extend(_section("FIELD OCCURRENCE LIMITS ANALYSIS"))
    if report.occurrence_violations:
        for violation in report.occurrence_violations:
            lines.append(f"OCCURRENCE LIMIT EXCEEDED: {violation.field_id} - {_title(schema, violation.field_id)}")
            lines.append(f"    Actual: {violation.actual_count} occurrences")
            lines.append(f"    Maximum: {violation.max_allowed} per MCEB Pub 7")
    else:
        lines.append("All field occurrence limits compliant with MCEB Pub 7")
    lines.append("")

    lines.extend(_section("FORMAT VALIDATION ANALYSIS"))
    if report.format_errors:
        lines.append("FORMAT VALIDATION ERRORS:")
        for error in report.format_errors:
            label = _occurrence_label(error.field_id, error.occurrence_index)
            lines.append(f"  - {label} - {_title(schema, error.field_id)}")
            lines.append(f"    Error: {error.message}")
            if error.expected_format:
                lines.append(f"    Expected: {error.expected_format}")
    else:
        lines.append("No format errors")
    lines.append("")

    if report.warnings:
        lines.extend(_section("WARNINGS"))
        for warning in report.warnings:
            label = _occurrence_label(warning.field_id, warning.occurrence_index)
            lines.append(f"  - {label} - {_title(schema, warning.field_id)}")
            lines.append(f"    Warning: {warning.message}")
        lines.append("")

    lines.extend(_section("FINAL ASSESSMENT"))
    lines.append(f"Record is {status} with MCEB Publication 7")
    return "\n".join(lines) + "\n"
