"""Field format validation."""

from sfafkit.validation.validators import FIELD_RULES, validate_field

__all__ = ["FIELD_RULES", "validate_field"]
