"""
Numeric type utilities for Decimal precision.

Conversions never substitute a default: a value that cannot be parsed
raises InputValidationError.
"""

from typing import Any
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
import logging

from ..constants import FIXED_POINT_FACTOR
from ..exceptions import InputValidationError

logger = logging.getLogger(__name__)


def to_decimal(value: Any, field_name: str = "value") -> Decimal:
    """
    Convert a value to Decimal.

    Args:
        value: Value to convert (str, int, float, Decimal)
        field_name: Name used in error messages

    Returns:
        Decimal

    Raises:
        InputValidationError: If the value is not a finite number

    Examples:
        >>> to_decimal("0.65")
        Decimal('0.65')
        >>> to_decimal(0.05)
        Decimal('0.05')
    """
    if isinstance(value, bool) or value is None:
        raise InputValidationError(f"{field_name} must be numeric, got {value!r}")

    try:
        if isinstance(value, Decimal):
            dec = value
        elif isinstance(value, str):
            dec = Decimal(value.strip())
        elif isinstance(value, (int, float)):
            # Via string to avoid float representation noise
            dec = Decimal(str(value))
        else:
            raise InputValidationError(f"{field_name} must be numeric, got {type(value).__name__}")
    except InvalidOperation:
        raise InputValidationError(f"{field_name} is not a number: {value!r}")

    if not dec.is_finite():
        raise InputValidationError(f"{field_name} must be finite, got {value!r}")
    return dec


def to_fixed_point(amount: Decimal) -> int:
    """
    Scale an amount to 6-decimal fixed point (USDC/CTF units), rounding half-up.

    Args:
        amount: Amount in whole units

    Returns:
        Scaled integer

    Examples:
        >>> to_fixed_point(Decimal("5"))
        5000000
        >>> to_fixed_point(Decimal("0.0000005"))
        1
    """
    scaled = amount * FIXED_POINT_FACTOR
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_fixed_point(value: int) -> Decimal:
    """Convert a fixed-point integer back to whole units."""
    return Decimal(value) / FIXED_POINT_FACTOR
