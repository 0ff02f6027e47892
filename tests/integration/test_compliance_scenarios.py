from __future__ import annotations

from sfafkit.codec import parse_record, serialize_record
from sfafkit.compliance import run_full_compliance
from sfafkit.schema import get_registry
from sfafkit.typing.enums import RequirementTier
from sfafkit.typing.models import OccurrenceViolation, Record


def test_usaf_record_without_action_officer_is_non_compliant(scenario_text: str) -> None:
    report = run_full_compliance(parse_record(scenario_text))

    assert report.is_valid is False
    assert report.missing_field_ids() == ["701"]
    assert report.missing_fields[0].tier is RequirementTier.CONDITIONAL
    assert report.format_errors == []
    assert report.occurrence_violations == []


def test_adding_action_officer_makes_record_compliant(scenario_text: str) -> None:
    report = run_full_compliance(parse_record(scenario_text + "701. AFFSA\n"))

    assert report.is_valid is True
    assert report.missing_fields == []
    assert report.format_errors == []


def test_kilowatt_power_below_range_is_format_error(compliant_record: Record) -> None:
    report = run_full_compliance(compliant_record.with_values("115", ["K0.5"]))

    assert [(e.field_id, e.message) for e in report.format_errors] == [
        ("115", "K prefix valid for 1–999.99999 kW range only"),
    ]


def test_classification_outside_options_is_format_error(compliant_record: Record) -> None:
    report = run_full_compliance(compliant_record.with_values("005", ["X"]))

    assert report.is_valid is False
    assert [e.field_id for e in report.format_errors] == ["005"]
    assert "U, UE, C, S, T" in report.format_errors[0].message


def test_too_many_irac_notes_is_occurrence_violation(compliant_record: Record) -> None:
    report = run_full_compliance(compliant_record.with_values("500", ["C010"] * 11))

    assert report.occurrence_violations == [OccurrenceViolation(field_id="500", actual_count=11, max_allowed=10)]
    assert report.is_valid is False


def test_repeated_comments_serialize_with_occurrence_suffix() -> None:
    record = Record.from_mapping({"501": ["first", "second", "third"]})

    lines = [line for line in serialize_record(record).splitlines() if line.startswith("501")]

    assert lines == ["501. first", "501/02. second", "501/03. third"]


def test_dynamic_fields_within_limit_never_violate(compliant_record: Record) -> None:
    registry = get_registry()
    for spec in registry:
        if not spec.dynamic:
            continue
        at_limit = compliant_record.with_values(spec.id, ["1"] * spec.max_occurrences)
        over_limit = compliant_record.with_values(spec.id, ["1"] * (spec.max_occurrences + 1))

        assert run_full_compliance(at_limit).occurrence_violations == []
        assert [v.field_id for v in run_full_compliance(over_limit).occurrence_violations] == [spec.id]


def test_removing_any_required_field_is_reported(compliant_record: Record) -> None:
    for field_id in get_registry().required_field_ids():
        report = run_full_compliance(compliant_record.with_values(field_id, []))

        assert report.is_valid is False
        assert field_id in report.missing_field_ids()
