"""Validation outcome and compliance report models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from sfafkit.typing.enums import RequirementTier


class ErrorDetail(BaseModel):
    """Blocking problem found in one value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    message: str
    expected_format: str | None = None


class WarningDetail(BaseModel):
    """Non-blocking remark about one value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    message: str


class ValidationOutcome(BaseModel):
    """Result of validating a single field value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    errors: tuple[ErrorDetail, ...] = ()
    warnings: tuple[WarningDetail, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        """Return whether the value carries no blocking error."""
        return not self.errors


class MissingField(BaseModel):
    """Required field without any non-empty occurrence."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_id: str
    title: str
    reason: str
    tier: RequirementTier = RequirementTier.UNCONDITIONAL


class FormatError(BaseModel):
    """Stored value failing a field-specific rule."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_id: str
    occurrence_index: int
    message: str
    expected_format: str | None = None


class OccurrenceViolation(BaseModel):
    """Field stored more times than the schema allows."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_id: str
    actual_count: int
    max_allowed: int


class ComplianceWarning(BaseModel):
    """Non-blocking finding surfaced for human review."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_id: str
    message: str
    occurrence_index: int | None = None


class ComplianceReport(BaseModel):
    """Full compliance assessment of one record."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    missing_fields: list[MissingField] = Field(default_factory=list)
    format_errors: list[FormatError] = Field(default_factory=list)
    occurrence_violations: list[OccurrenceViolation] = Field(default_factory=list)
    warnings: list[ComplianceWarning] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        """Return whether the record is compliant; warnings never count."""
        return not (self.missing_fields or self.format_errors or self.occurrence_violations)

    def missing_field_ids(self) -> list[str]:
        """Return ids of missing required fields in report order."""
        return [missing.field_id for missing in self.missing_fields]
