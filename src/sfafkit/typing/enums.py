"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class RequirementTier(_EnumMixin):
    """Why a field is required in a compliant record."""

    UNCONDITIONAL = "unconditional"
    CONDITIONAL = "conditional"


class PowerUnit(_EnumMixin):
    """Unit prefix of a transmitter power value (Field 115)."""

    WATTS = "W"
    KILOWATTS = "K"
    MEGAWATTS = "M"
    GIGAWATTS = "G"
    MICROVOLTS = "V"


class Hemisphere(_EnumMixin):
    """Hemisphere letter of a coordinate half."""

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"

    @property
    def is_latitude(self) -> bool:
        """Return whether the hemisphere qualifies a latitude."""
        return self in (Hemisphere.NORTH, Hemisphere.SOUTH)

    @property
    def max_degrees(self) -> int:
        """Return the degree bound for this hemisphere."""
        return 90 if self.is_latitude else 180


class ExportFormat(_EnumMixin):
    """Supported record export formats."""

    SFAF = "sfaf"
    JSON = "json"
    CSV = "csv"
