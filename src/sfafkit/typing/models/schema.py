"""Schema-centric domain models."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_FIELD_ID_RE = re.compile(r"^\d{3}$")


class FieldSpec(BaseModel):
    """Single SFAF field definition."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    title: str
    max_length: int = Field(gt=0)
    required: bool = False
    dynamic: bool = False
    max_occurrences: int = Field(default=1, ge=1)
    options: tuple[str, ...] = ()

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        """Ensure the field id is a three-digit field number.

        Args:
            value (str): Field id.

        Raises:
            ValueError: If the id is not exactly three digits.

        Returns:
            str: Validated id.
        """
        if not _FIELD_ID_RE.fullmatch(value):
            raise ValueError(f"Field id must be three digits, got '{value}'")  # noqa: TRY003
        return value

    @field_validator("options")
    @classmethod
    def _normalize_options(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(option.upper() for option in value)

    @model_validator(mode="after")
    def _validate_occurrences(self) -> FieldSpec:
        """Ensure single-occurrence fields are not given a repeat limit.

        Raises:
            ValueError: If a non-dynamic field declares more than one occurrence.

        Returns:
            FieldSpec: Validated spec.
        """
        if not self.dynamic and self.max_occurrences != 1:
            raise ValueError(  # noqa: TRY003
                f"Field {self.id} is not dynamic but declares {self.max_occurrences} occurrences",
            )
        return self

    @property
    def is_enumerated(self) -> bool:
        """Return whether the field has a closed set of literal values."""
        return bool(self.options)
