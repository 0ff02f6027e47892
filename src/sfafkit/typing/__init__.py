"""Typing-centric domain modules."""

from sfafkit.typing.enums import ExportFormat, Hemisphere, PowerUnit, RequirementTier
from sfafkit.typing.models import (
    ComplianceReport,
    ComplianceWarning,
    ErrorDetail,
    FieldSpec,
    FieldValue,
    FormatError,
    MissingField,
    OccurrenceViolation,
    Record,
    ReferenceData,
    ValidationOutcome,
    WarningDetail,
)
from sfafkit.typing.protocol import FieldRule, RecordPredicate

__all__ = [
    "ComplianceReport",
    "ComplianceWarning",
    "ErrorDetail",
    "ExportFormat",
    "FieldRule",
    "FieldSpec",
    "FieldValue",
    "FormatError",
    "Hemisphere",
    "MissingField",
    "OccurrenceViolation",
    "PowerUnit",
    "RecordPredicate",
    "Record",
    "ReferenceData",
    "RequirementTier",
    "ValidationOutcome",
    "WarningDetail",
]
