from __future__ import annotations

import pytest
from pydantic import ValidationError

from sfafkit.exceptions import RecordError
from sfafkit.typing.enums import RequirementTier
from sfafkit.typing.models import (
    ComplianceReport,
    ComplianceWarning,
    ErrorDetail,
    FieldSpec,
    FieldValue,
    MissingField,
    Record,
    ValidationOutcome,
)


def test_field_spec_rejects_malformed_id() -> None:
    with pytest.raises(ValidationError):
        FieldSpec(id="5", title="Bad", max_length=1)


def test_field_spec_uppercases_options() -> None:
    spec = FieldSpec(id="363", title="Antenna Polarization", max_length=1, options=("v", "h"))

    assert spec.options == ("V", "H")
    assert spec.is_enumerated is True


def test_record_normalizes_keys_and_drops_empty_values() -> None:
    record = Record.from_mapping({"field110": "K4726.5", "501": ["a", "b"], "502": [], "503": None})

    assert record.fields == {"110": ["K4726.5"], "501": ["a", "b"]}
    assert record.field_ids() == ["110", "501"]


def test_record_strips_values_and_drops_blank_occurrences() -> None:
    record = Record.from_mapping({"301": "  EGLIN AFB ", "501": ["a", "", "b"], "701": ""})

    assert record.fields == {"301": ["EGLIN AFB"], "501": ["a", "b"]}
    assert record.occurrence_count("701") == 0


def test_record_rejects_non_field_keys() -> None:
    with pytest.raises(ValidationError):
        Record.from_mapping({"frequency": "K4726.5"})


def test_record_has_value_ignores_blank_occurrences() -> None:
    record = Record.from_mapping({"701": ["  "], "803": ["", "SMITH J"]})

    assert record.has_value("701") is False
    assert record.has_value("803") is True
    assert record.first("803") == "SMITH J"
    assert record.first("701") is None


def test_record_from_field_values_orders_occurrences() -> None:
    record = Record.from_field_values(
        [
            FieldValue(field_id="501", occurrence=2, value="second"),
            FieldValue(field_id="501", occurrence=1, value="first"),
        ],
    )

    assert record.values_for("501") == ["first", "second"]


def test_record_from_field_values_rejects_gaps() -> None:
    with pytest.raises(RecordError, match="contiguous"):
        Record.from_field_values(
            [
                FieldValue(field_id="501", occurrence=1, value="first"),
                FieldValue(field_id="501", occurrence=3, value="third"),
            ],
        )


def test_record_from_field_values_rejects_duplicates() -> None:
    with pytest.raises(RecordError, match="duplicate occurrence 1"):
        Record.from_field_values(
            [
                FieldValue(field_id="501", occurrence=1, value="first"),
                FieldValue(field_id="501", occurrence=1, value="again"),
            ],
        )


def test_record_field_values_follow_given_order_then_numeric() -> None:
    record = Record.from_mapping({"999": "x", "110": "K1", "005": "U", "501": ["a", "b"]})

    triples = [(item.field_id, item.occurrence) for item in record.field_values(order=("005", "501", "110"))]

    assert triples == [("005", 1), ("501", 1), ("501", 2), ("110", 1), ("999", 1)]


def test_record_with_values_returns_copy() -> None:
    record = Record.from_mapping({"303": "old"})

    updated = record.with_values("303", ["new"])
    cleared = record.with_values("303", [])

    assert record.values_for("303") == ["old"]
    assert updated.values_for("303") == ["new"]
    assert cleared.occurrence_count("303") == 0


def test_validation_outcome_ok_tracks_errors() -> None:
    assert ValidationOutcome().ok is True
    assert ValidationOutcome(errors=(ErrorDetail(message="bad"),)).ok is False


def test_compliance_report_ignores_warnings_for_validity() -> None:
    report = ComplianceReport(warnings=[ComplianceWarning(field_id="113", message="unknown class")])

    assert report.is_valid is True


def test_compliance_report_invalid_with_missing_field() -> None:
    report = ComplianceReport(
        missing_fields=[
            MissingField(
                field_id="701",
                title="Frequency Action Officer",
                reason="USAF",
                tier=RequirementTier.CONDITIONAL,
            ),
        ],
    )

    assert report.is_valid is False
    assert report.missing_field_ids() == ["701"]
    assert report.model_dump()["is_valid"] is False
