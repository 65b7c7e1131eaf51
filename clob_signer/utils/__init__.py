"""Utility modules for the CLOB signing client."""

from .validators import (
    validate_private_key,
    validate_address,
    validate_price,
    validate_size,
    validate_side,
    validate_token_id,
)
from .numeric import to_decimal, to_fixed_point, from_fixed_point
from .structured_logging import CredentialRedactionFilter

__all__ = [
    "validate_private_key",
    "validate_address",
    "validate_price",
    "validate_size",
    "validate_side",
    "validate_token_id",
    "to_decimal",
    "to_fixed_point",
    "from_fixed_point",
    "CredentialRedactionFilter",
]
