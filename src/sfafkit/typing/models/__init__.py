"""Core domain model exports."""

from sfafkit.typing.models.compliance import (
    ComplianceReport,
    ComplianceWarning,
    ErrorDetail,
    FormatError,
    MissingField,
    OccurrenceViolation,
    ValidationOutcome,
    WarningDetail,
)
from sfafkit.typing.models.export import ExportedField, ExportedRecord
from sfafkit.typing.models.record import FieldValue, Record, normalize_field_key
from sfafkit.typing.models.reference import (
    GeographicRegion,
    PowerTypeInfo,
    ReferenceData,
    TimeCodeGroup,
)
from sfafkit.typing.models.schema import FieldSpec

__all__ = [
    "ComplianceReport",
    "ComplianceWarning",
    "ErrorDetail",
    "ExportedField",
    "ExportedRecord",
    "FieldSpec",
    "FieldValue",
    "FormatError",
    "GeographicRegion",
    "MissingField",
    "OccurrenceViolation",
    "PowerTypeInfo",
    "Record",
    "ReferenceData",
    "TimeCodeGroup",
    "ValidationOutcome",
    "WarningDetail",
    "normalize_field_key",
]
