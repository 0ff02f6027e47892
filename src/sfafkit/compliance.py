"""Occurrence limits, required fields and full compliance runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sfafkit.logging import get_logger
from sfafkit.reference_data import get_reference_data
from sfafkit.schema import get_registry
from sfafkit.typing.enums import RequirementTier
from sfafkit.typing.models import (
    ComplianceReport,
    ComplianceWarning,
    FormatError,
    MissingField,
    OccurrenceViolation,
    Record,
    ReferenceData,
)
from sfafkit.validation import validate_field

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sfafkit.schema import FieldSchemaRegistry
    from sfafkit.typing.protocol import RecordPredicate

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequirementRule:
    """Field required whenever `predicate` holds for the record."""

    field_id: str
    predicate: RecordPredicate
    reason: str


def field_equals(field_id: str, expected: str) -> RecordPredicate:
    """Build a predicate matching the first value of a field, case-insensitively.

    Args:
        field_id (str): Field to inspect.
        expected (str): Value that triggers the requirement.

    Returns:
        RecordPredicate: Predicate over a record.
    """
    target = expected.strip().upper()

    def _predicate(record: Record) -> bool:
        value = record.first(field_id)
        return value is not None and value.upper() == target

    return _predicate


def always(record: Record) -> bool:  # noqa: ARG001
    """Predicate that always holds."""
    return True


DEFAULT_REQUIREMENT_RULES: tuple[RequirementRule, ...] = (
    RequirementRule(
        field_id="701",
        predicate=field_equals("200", "USAF"),
        reason="Frequency Action Officer is required for Air Force (USAF) assignments",
    ),
    RequirementRule(field_id="144", predicate=always, reason="Approval Authority indicator is required"),
    RequirementRule(field_id="803", predicate=always, reason="Requestor data POC is required"),
)


def check_occurrence_limits(
    record: Record,
    *,
    registry: FieldSchemaRegistry | None = None,
) -> list[OccurrenceViolation]:
    """List fields stored more times than their schema allows.

    Args:
        record (Record): Record to check.
        registry (FieldSchemaRegistry | None): Schema to check against.

    Returns:
        list[OccurrenceViolation]: One entry per offending field, in official order.
    """
    schema = registry or get_registry()
    violations: list[OccurrenceViolation] = []
    for field_id in schema.all_field_ids():
        count = record.occurrence_count(field_id)
        spec = schema.specs[field_id]
        if count > spec.max_occurrences:
            violations.append(
                OccurrenceViolation(field_id=field_id, actual_count=count, max_allowed=spec.max_occurrences),
            )
    return violations


def check_required_fields(
    record: Record,
    rules: Sequence[RequirementRule] | None = None,
    *,
    registry: FieldSchemaRegistry | None = None,
) -> list[MissingField]:
    """List required fields without any non-blank occurrence.

    Args:
        record (Record): Record to check.
        rules (Sequence[RequirementRule] | None): Conditional requirements; defaults
            to `DEFAULT_REQUIREMENT_RULES`.
        registry (FieldSchemaRegistry | None): Schema providing unconditional requirements.

    Returns:
        list[MissingField]: Unconditional misses first, then conditional ones in rule order.
    """
    schema = registry or get_registry()
    missing: list[MissingField] = []
    reported: set[str] = set()

    for field_id in schema.required_field_ids():
        if not record.has_value(field_id):
            spec = schema.specs[field_id]
            missing.append(
                MissingField(
                    field_id=field_id,
                    title=spec.title,
                    reason=f"Field {field_id} ({spec.title}) is required by MCEB Pub 7",
                    tier=RequirementTier.UNCONDITIONAL,
                ),
            )
            reported.add(field_id)

    for rule in DEFAULT_REQUIREMENT_RULES if rules is None else rules:
        if rule.field_id in reported or record.has_value(rule.field_id) or not rule.predicate(record):
            continue
        spec = schema.get_spec(rule.field_id)
        missing.append(
            MissingField(
                field_id=rule.field_id,
                title=spec.title if spec else f"Field {rule.field_id}",
                reason=rule.reason,
                tier=RequirementTier.CONDITIONAL,
            ),
        )
        reported.add(rule.field_id)
    return missing


def _validate_values(
    record: Record,
    schema: FieldSchemaRegistry,
    reference: ReferenceData,
) -> tuple[list[FormatError], list[ComplianceWarning]]:
    errors: list[FormatError] = []
    warnings: list[ComplianceWarning] = []
    for item in record.field_values(order=schema.all_field_ids()):
        if not schema.is_known(item.field_id):
            if item.occurrence == 1:
                warnings.append(
                    ComplianceWarning(
                        field_id=item.field_id,
                        message=f"Field {item.field_id} is not defined in the SFAF schema",
                    ),
                )
            continue

        outcome = validate_field(item.field_id, item.value, registry=schema, reference=reference)
        errors.extend(
            FormatError(
                field_id=item.field_id,
                occurrence_index=item.occurrence,
                message=error.message,
                expected_format=error.expected_format,
            )
            for error in outcome.errors
        )
        warnings.extend(
            ComplianceWarning(field_id=item.field_id, occurrence_index=item.occurrence, message=warning.message)
            for warning in outcome.warnings
        )
    return errors, warnings


def run_full_compliance(
    record: Record,
    *,
    registry: FieldSchemaRegistry | None = None,
    reference: ReferenceData | None = None,
    rules: Sequence[RequirementRule] | None = None,
) -> ComplianceReport:
    """Assess a record against the schema, the requirement rules and every field validator.

    Args:
        record (Record): Record to assess; it is not retained.
        registry (FieldSchemaRegistry | None): Schema to assess against.
        reference (ReferenceData | None): Reference tables for lookup rules.
        rules (Sequence[RequirementRule] | None): Conditional requirements.

    Returns:
        ComplianceReport: Complete report; data problems never raise.
    """
    schema = registry or get_registry()
    tables = reference or get_reference_data()

    occurrence_violations = check_occurrence_limits(record, registry=schema)
    missing_fields = check_required_fields(record, rules, registry=schema)
    format_errors, warnings = _validate_values(record, schema, tables)

    report = ComplianceReport(
        missing_fields=missing_fields,
        format_errors=format_errors,
        occurrence_violations=occurrence_violations,
        warnings=warnings,
    )
    logger.info(
        "Compliance check completed",
        extra={
            "is_valid": report.is_valid,
            "missing_fields": len(missing_fields),
            "format_errors": len(format_errors),
            "occurrence_violations": len(occurrence_violations),
            "warnings": len(warnings),
        },
    )
    return report
