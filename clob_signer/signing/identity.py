"""
Account identity: secret key -> Ethereum-style address.

The secret scalar never leaves this object; callers only see the derived
address and signatures it produces.
"""

import logging
from typing import Union

from eth_keys import keys
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import to_checksum_address

from ..exceptions import InputValidationError
from ..utils.validators import validate_private_key
from .primitives import SECP256K1_N, keccak256, sign_digest

logger = logging.getLogger(__name__)

_UNCOMPRESSED_PREFIX = 0x04


def address_from_public_key(public_key: bytes) -> bytes:
    """
    Derive the 20-byte address from an uncompressed public key.

    Args:
        public_key: 65 bytes (0x04 || X || Y) or the 64-byte X || Y pair

    Returns:
        Low 20 bytes of keccak-256(X || Y)
    """
    if len(public_key) == 65:
        if public_key[0] != _UNCOMPRESSED_PREFIX:
            raise InputValidationError("Public key is not in uncompressed form")
        public_key = public_key[1:]
    if len(public_key) != 64:
        raise InputValidationError(f"Public key must be 64 or 65 bytes, got {len(public_key)}")

    return keccak256(public_key)[-20:]


class AccountIdentity:
    """
    Immutable signing identity derived once from a 32-byte secret.

    SECURITY: the key is not exposed through attributes, repr or errors.
    """

    __slots__ = ("_private_key", "_address_bytes", "_address")

    def __init__(self, private_key: Union[str, bytes]):
        """
        Derive identity.

        Args:
            private_key: 64 hex chars (optional 0x prefix) or 32 raw bytes

        Raises:
            InputValidationError: If the key is malformed or not a valid secp256k1 scalar
        """
        key_bytes = validate_private_key(private_key)

        scalar = int.from_bytes(key_bytes, "big")
        if not 0 < scalar < SECP256K1_N:
            raise InputValidationError("Private key is not a valid secp256k1 scalar")

        try:
            signing_key = keys.PrivateKey(key_bytes)
        except KeyValidationError:
            raise InputValidationError("Private key is not a valid secp256k1 scalar")

        # eth_keys serializes X || Y without the 0x04 prefix
        address_bytes = address_from_public_key(signing_key.public_key.to_bytes())

        object.__setattr__(self, "_private_key", signing_key)
        object.__setattr__(self, "_address_bytes", address_bytes)
        object.__setattr__(self, "_address", to_checksum_address(address_bytes))

        logger.debug(f"Derived account identity {self._address}")

    @classmethod
    def from_private_key(cls, private_key: Union[str, bytes]) -> "AccountIdentity":
        """Alternate constructor, reads better at call sites."""
        return cls(private_key)

    def __setattr__(self, name, value):
        raise AttributeError("AccountIdentity is immutable")

    @property
    def address(self) -> str:
        """EIP-55 checksummed address."""
        return self._address

    @property
    def address_bytes(self) -> bytes:
        """Raw 20-byte address."""
        return self._address_bytes

    def sign_digest(self, digest: bytes) -> str:
        """Sign a 32-byte digest; see primitives.sign_digest."""
        return sign_digest(self._private_key, digest)

    def __repr__(self) -> str:
        return f"AccountIdentity(address={self._address})"
