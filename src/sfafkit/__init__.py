"""SFAF Kit package."""

from sfafkit.codec import parse_record, serialize_record
from sfafkit.compliance import (
    DEFAULT_REQUIREMENT_RULES,
    RequirementRule,
    check_occurrence_limits,
    check_required_fields,
    run_full_compliance,
)
from sfafkit.exceptions import (
    ContractViolationError,
    CoordinateError,
    PackageError,
    RecordError,
    ReferenceDataError,
    SchemaError,
    SettingsError,
)
from sfafkit.export import export_record
from sfafkit.logging import configure_logging, get_logger
from sfafkit.report import render_compliance_report
from sfafkit.schema import get_field_spec, get_registry
from sfafkit.settings import Settings, get_settings
from sfafkit.typing.models import ComplianceReport, FieldSpec, Record, ValidationOutcome
from sfafkit.validation import validate_field

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("sfafkit")

__all__ = [
    "DEFAULT_REQUIREMENT_RULES",
    "ComplianceReport",
    "ContractViolationError",
    "CoordinateError",
    "FieldSpec",
    "PackageError",
    "Record",
    "RecordError",
    "ReferenceDataError",
    "RequirementRule",
    "SchemaError",
    "Settings",
    "SettingsError",
    "ValidationOutcome",
    "__version__",
    "check_occurrence_limits",
    "check_required_fields",
    "configure_logging",
    "export_record",
    "get_field_spec",
    "get_logger",
    "get_registry",
    "get_settings",
    "logger",
    "parse_record",
    "render_compliance_report",
    "run_full_compliance",
    "serialize_record",
    "validate_field",
]
