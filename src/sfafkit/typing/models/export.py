"""Export payload models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ExportedField(BaseModel):
    """One field and its occurrences in a JSON export."""

    model_config = ConfigDict(extra="forbid")

    field_id: str
    title: str | None = None
    occurrences: list[str] = Field(default_factory=list)


class ExportedRecord(BaseModel):
    """JSON export of a record in official field order."""

    model_config = ConfigDict(extra="forbid")

    fields: list[ExportedField] = Field(default_factory=list)
