from __future__ import annotations

from decimal import Decimal, InvalidOperation

from ..core.exceptions import DataIntegrityError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive_int(value, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}")
    if number <= 0:
        raise ValidationError(f"Invalid {field_name}")
    return number


def parse_amount(value, field_name: str = "amount") -> Decimal:
    """Convert a stored monetary value to Decimal.

    Fails on None, NaN, infinities and unparseable strings rather than
    treating them as zero.
    """

    if isinstance(value, bool) or value is None:
        raise DataIntegrityError(f"Invalid {field_name}: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise DataIntegrityError(f"Invalid {field_name}: {value!r}")
    if not amount.is_finite():
        raise DataIntegrityError(f"Invalid {field_name}: {value!r}")
    return amount
