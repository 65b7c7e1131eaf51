"""
Input validation utilities.

Validates keys, addresses and order parameters before anything is signed.
"""

import re
from decimal import Decimal
from typing import Any, Union

from eth_utils import is_hex_address, to_checksum_address

from ..constants import MAX_UINT256
from ..exceptions import InputValidationError
from ..models import Side
from .numeric import to_decimal

_HEX_KEY = re.compile(r"^[0-9a-fA-F]{64}$")
_DECIMAL_DIGITS = re.compile(r"[0-9]+")

# 2**256 - 1 has 78 decimal digits
_MAX_UINT256_DIGITS = len(str(MAX_UINT256))


def validate_private_key(private_key: Union[str, bytes]) -> bytes:
    """
    Validate private key format.

    Args:
        private_key: 64 hex chars (optional 0x prefix) or 32 raw bytes

    Returns:
        32-byte key

    Raises:
        InputValidationError: If the key is not 32 bytes of hex
    """
    if isinstance(private_key, (bytes, bytearray)):
        if len(private_key) != 32:
            raise InputValidationError(
                f"Private key must be 32 bytes, got {len(private_key)}"
            )
        return bytes(private_key)

    if not isinstance(private_key, str):
        raise InputValidationError(f"Private key must be string, got {type(private_key).__name__}")

    key = private_key.strip()
    if key[:2] in ("0x", "0X"):
        key = key[2:]

    # Never echo the key back in the message
    if not _HEX_KEY.match(key):
        raise InputValidationError("Invalid private key format: expected 64 hex characters")

    return bytes.fromhex(key)


def validate_address(address: str) -> str:
    """
    Validate Ethereum address.

    Args:
        address: Ethereum address

    Returns:
        Checksummed address

    Raises:
        InputValidationError: If address is invalid
    """
    if not isinstance(address, str) or not is_hex_address(address):
        raise InputValidationError(f"Invalid Ethereum address: {address!r}")
    return to_checksum_address(address)


def validate_token_id(token_id: Union[str, int]) -> int:
    """
    Parse a token ID into a uint256.

    A malformed ID is an error, never zero: a defaulted ID would produce a
    valid-looking signature for the wrong token.

    Args:
        token_id: ERC1155 token ID as a decimal string (or int)

    Returns:
        Token ID as int

    Raises:
        InputValidationError: If token ID is not a non-negative decimal integer < 2**256
    """
    if isinstance(token_id, bool):
        raise InputValidationError(f"Token ID must be a decimal string, got {token_id!r}")

    if isinstance(token_id, int):
        value = token_id
    elif isinstance(token_id, str):
        if not _DECIMAL_DIGITS.fullmatch(token_id):
            raise InputValidationError(f"Token ID must be numeric string, got {token_id[:80]!r}")
        # Stripped first so zero padding never hits the int conversion digit limit
        digits = token_id.lstrip("0") or "0"
        if len(digits) > _MAX_UINT256_DIGITS:
            raise InputValidationError(f"Token ID out of uint256 range ({len(token_id)} digits)")
        value = int(digits)
    else:
        raise InputValidationError(f"Token ID must be string, got {type(token_id).__name__}")

    if value < 0 or value > MAX_UINT256:
        raise InputValidationError(f"Token ID out of uint256 range: {token_id}")

    return value


def validate_price(price: Any) -> Decimal:
    """
    Validate order price.

    Args:
        price: Price per share, strictly between 0 and 1

    Returns:
        Price as Decimal

    Raises:
        InputValidationError: If price is not in (0, 1)
    """
    dec = to_decimal(price, "price")
    if dec <= 0 or dec >= 1:
        raise InputValidationError(f"Price must be between 0 and 1 (exclusive), got {price}")
    return dec


def validate_size(size: Any) -> Decimal:
    """
    Validate order size (shares).

    Raises:
        InputValidationError: If size is not positive
    """
    dec = to_decimal(size, "size")
    if dec <= 0:
        raise InputValidationError(f"Size must be positive, got {size}")
    return dec


def validate_side(side: Union[Side, str]) -> Side:
    """Normalize BUY/SELL (case-insensitive) to Side."""
    if isinstance(side, Side):
        return side
    if isinstance(side, str):
        try:
            return Side(side.strip().upper())
        except ValueError:
            pass
    raise InputValidationError(f"Side must be BUY or SELL, got {side!r}")
