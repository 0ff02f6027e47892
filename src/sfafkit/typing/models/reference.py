"""Reference data models consumed by field validators."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeographicRegion(BaseModel):
    """Geographic region letter entry (Annex C)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str
    locations: tuple[str, ...] = ()


class TimeCodeGroup(BaseModel):
    """Time-of-operation code with its hour sub-codes."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str
    usage: str = ""
    sub_codes: dict[str, str] = Field(default_factory=dict)


class PowerTypeInfo(BaseModel):
    """Power type code description."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str
    usage: str = ""


def _upper_keys(value: dict[str, object]) -> dict[str, object]:
    return {str(key).strip().upper(): item for key, item in value.items()}


def _upper_items(value: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(item.strip().upper() for item in value)


class ReferenceData(BaseModel):
    """Read-only lookup tables keyed by code.

    Codes are stored uppercase; every lookup helper is case-insensitive.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    function_identifiers: tuple[str, ...] = ()
    major_function_identifiers: tuple[str, ...] = ()
    equipment_manufacturers: dict[str, str] = Field(default_factory=dict)
    geographic_regions: dict[str, GeographicRegion] = Field(default_factory=dict)
    irac_notes: dict[str, str] = Field(default_factory=dict)
    time_codes: dict[str, TimeCodeGroup] = Field(default_factory=dict)
    power_types: dict[str, PowerTypeInfo] = Field(default_factory=dict)
    station_classes: tuple[str, ...] = ()
    state_codes: tuple[str, ...] = ()

    @field_validator(
        "function_identifiers",
        "major_function_identifiers",
        "station_classes",
        "state_codes",
    )
    @classmethod
    def _normalize_codes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _upper_items(value)

    @field_validator(
        "equipment_manufacturers",
        "geographic_regions",
        "irac_notes",
        "time_codes",
        "power_types",
        mode="before",
    )
    @classmethod
    def _normalize_keys(cls, value: object) -> object:
        if isinstance(value, dict):
            return _upper_keys(value)
        return value

    def is_function_identifier(self, value: str) -> bool:
        """Return whether the value is a known function identifier."""
        candidate = value.strip().upper()
        return candidate in self.function_identifiers or candidate in self.major_function_identifiers

    def is_major_function_identifier(self, value: str) -> bool:
        """Return whether the value is a known major function identifier."""
        return value.strip().upper() in self.major_function_identifiers

    def is_station_class(self, value: str) -> bool:
        """Return whether the value is a known station class."""
        return value.strip().upper() in self.station_classes

    def is_state_code(self, value: str) -> bool:
        """Return whether the value is a known state, territory or country code."""
        return value.strip().upper() in self.state_codes

    def manufacturer_name(self, code: str) -> str | None:
        """Return the manufacturer name for a code, if known."""
        return self.equipment_manufacturers.get(code.strip().upper())

    def region(self, code: str) -> GeographicRegion | None:
        """Return the geographic region for a letter, if known."""
        return self.geographic_regions.get(code.strip().upper())

    def irac_note(self, code: str) -> str | None:
        """Return the IRAC note text for a code, if known."""
        return self.irac_notes.get(code.strip().upper())

    def time_code_description(self, code: str) -> str | None:
        """Describe a time code such as `1` or `1H24`.

        Args:
            code (str): Time code.

        Returns:
            str | None: Sub-code or group description when known.
        """
        candidate = code.strip().upper()
        group = self.time_codes.get(candidate[:1])
        if group is None:
            return None
        if candidate == candidate[:1]:
            return group.description
        return group.sub_codes.get(candidate)
