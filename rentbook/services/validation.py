"""Field checks shared by the tenant, notice and payment stores."""

from typing import Any

from rentbook.services.errors import ValidationError

# Largest value a signed 64-bit INTEGER column holds
MAX_AMOUNT = 2**63 - 1


def require_text(field: str, value: Any) -> str:
    """Return ``value`` stripped of surrounding whitespace.

    Raises:
        ValidationError: If value is not a string or is blank
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def require_amount(field: str, value: Any) -> int:
    """Check an amount in minor currency units.

    Raises:
        ValidationError: If value is not an int (bools rejected), is negative,
            or does not fit a 64-bit column
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"{field} must not be negative")
    if value > MAX_AMOUNT:
        raise ValidationError(f"{field} must not exceed {MAX_AMOUNT}")
    return value


__all__ = ["MAX_AMOUNT", "require_amount", "require_text"]
