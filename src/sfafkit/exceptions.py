"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class ContractViolationError(PackageError):
    """Raised when a caller passes arguments that break the API contract."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class RecordError(PackageError):
    """Raised when a record is internally inconsistent."""

    field_id: str
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Field {self.field_id}: {self.message}"


@dataclass(frozen=True)
class SchemaError(PackageError):
    """Raised when the static field schema table is inconsistent."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass
class ReferenceDataError(PackageError):
    """Raised when reference data tables cannot be loaded."""

    message: str
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class CoordinateError(PackageError):
    """Raised when an antenna coordinate string cannot be interpreted."""

    message: str
    expected_format: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message} (expected: {self.expected_format})"
