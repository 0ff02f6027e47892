"""SFAF record models."""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sfafkit.exceptions import RecordError

_FIELD_KEY_RE = re.compile(r"^(?:field)?(\d{3})$", re.IGNORECASE)


def normalize_field_key(key: str) -> str:
    """Normalize a record key to a bare three-digit field id.

    Form collaborators tend to emit `field110`; the core works with `110`.

    Args:
        key (str): Raw key.

    Raises:
        ValueError: If the key is not a field number.

    Returns:
        str: Three-digit field id.
    """
    match = _FIELD_KEY_RE.fullmatch(str(key).strip())
    if not match:
        raise ValueError(f"Record key '{key}' is not a three-digit SFAF field number")  # noqa: TRY003
    return match.group(1)


class FieldValue(BaseModel):
    """One stored occurrence of a field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_id: str
    occurrence: int = Field(ge=1)
    value: str


class Record(BaseModel):
    """SFAF metadata attached to one marker.

    Occurrence `n` of a field is stored at list position `n - 1`, so indices are
    contiguous by construction.
    Values are stored stripped and blank occurrences are dropped, so an absent
    value has a single representation.
    """

    model_config = ConfigDict(extra="forbid")

    fields: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def _normalize_fields(cls, value: Any) -> dict[str, list[str]]:
        """Normalize keys and values of the raw field mapping.

        Args:
            value (Any): Raw mapping of field key to value(s).

        Raises:
            ValueError: If the payload is not a mapping or a key is not a field number.

        Returns:
            dict[str, list[str]]: Normalized mapping of stripped values; blank
                occurrences and fields left without any are dropped.
        """
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("Record fields must be a mapping")  # noqa: TRY003

        normalized: dict[str, list[str]] = {}
        for key, raw in value.items():
            field_id = normalize_field_key(key)
            if raw is None:
                continue
            items = [raw] if isinstance(raw, str) else [str(item) for item in raw if item is not None]
            values = [item.strip() for item in items if item.strip()]
            if not values:
                continue
            normalized.setdefault(field_id, []).extend(values)
        return normalized

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str | Sequence[str] | None]) -> Record:
        """Build a record from a flat field mapping.

        Args:
            mapping (Mapping[str, str | Sequence[str] | None]): Field id to value or values.

        Returns:
            Record: New record.
        """
        return cls(fields=dict(mapping))

    @classmethod
    def from_field_values(cls, values: Iterable[FieldValue]) -> Record:
        """Build a record from explicit occurrence triples.

        Args:
            values (Iterable[FieldValue]): Stored occurrences in any order.

        Raises:
            RecordError: If a field's occurrence indices are duplicated or not contiguous from 1.

        Returns:
            Record: New record.
        """
        grouped: dict[str, dict[int, str]] = defaultdict(dict)
        for item in values:
            field_id = normalize_field_key(item.field_id)
            if item.occurrence in grouped[field_id]:
                raise RecordError(field_id=field_id, message=f"duplicate occurrence {item.occurrence}")
            grouped[field_id][item.occurrence] = item.value

        fields: dict[str, list[str]] = {}
        for field_id, occurrences in grouped.items():
            indices = sorted(occurrences)
            if indices != list(range(1, len(indices) + 1)):
                raise RecordError(
                    field_id=field_id,
                    message=f"occurrence indices must be contiguous from 1, got {indices}",
                )
            fields[field_id] = [occurrences[index] for index in indices]
        return cls(fields=fields)

    def field_ids(self) -> list[str]:
        """Return field ids present in the record, numerically sorted."""
        return sorted(self.fields)

    def values_for(self, field_id: str) -> list[str]:
        """Return a copy of the stored values for a field."""
        return list(self.fields.get(normalize_field_key(field_id), []))

    def occurrence_count(self, field_id: str) -> int:
        """Return how many occurrences are stored for a field."""
        return len(self.fields.get(normalize_field_key(field_id), []))

    def has_value(self, field_id: str) -> bool:
        """Return whether at least one occurrence of the field is non-blank."""
        return any(value.strip() for value in self.fields.get(normalize_field_key(field_id), []))

    def first(self, field_id: str) -> str | None:
        """Return the first non-blank occurrence, stripped, if any."""
        for value in self.fields.get(normalize_field_key(field_id), []):
            if value.strip():
                return value.strip()
        return None

    def field_values(self, order: Sequence[str] | None = None) -> Iterator[FieldValue]:
        """Yield every stored occurrence.

        Args:
            order (Sequence[str] | None): Field order to follow. Fields missing from
                `order` are yielded afterwards in numeric order.

        Yields:
            FieldValue: Stored occurrences.
        """
        ordered = [field_id for field_id in (order or ()) if field_id in self.fields]
        seen = set(ordered)
        ordered.extend(field_id for field_id in sorted(self.fields) if field_id not in seen)
        for field_id in ordered:
            for index, value in enumerate(self.fields[field_id], start=1):
                yield FieldValue(field_id=field_id, occurrence=index, value=value)

    def with_values(self, field_id: str, values: Sequence[str]) -> Record:
        """Return a copy of the record with a field's occurrences replaced.

        Args:
            field_id (str): Field to replace.
            values (Sequence[str]): New occurrences; empty removes the field.

        Returns:
            Record: Updated copy; the current record is left untouched.
        """
        fields = self.to_mapping()
        fields[normalize_field_key(field_id)] = list(values)
        return Record(fields=fields)

    def to_mapping(self) -> dict[str, list[str]]:
        """Return a deep copy of the field mapping."""
        return {field_id: list(values) for field_id, values in self.fields.items()}
