"""Callable interfaces plugged into the compliance engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sfafkit.typing.models import ErrorDetail, Record, ReferenceData, WarningDetail


class RecordPredicate(Protocol):
    """Condition evaluated against a record snapshot."""

    def __call__(self, record: Record) -> bool:
        """Evaluate the condition.

        Args:
            record: Record under validation.

        Returns:
            bool: True when the condition holds.
        """


class FieldRule(Protocol):
    """Field-specific structural check."""

    def __call__(self, value: str, reference: ReferenceData) -> Iterable[ErrorDetail | WarningDetail]:
        """Check one stripped, non-empty value.

        Args:
            value: Value to check.
            reference: Reference data tables.

        Returns:
            Iterable[ErrorDetail | WarningDetail]: Findings for the value.
        """
