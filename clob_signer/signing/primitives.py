"""
Hash and signature primitives.

keccak-256 hashing and deterministic (RFC 6979) secp256k1 ECDSA with a
recovery id, via eth_keys (the signing backend of eth_account).
"""

import logging
from typing import Union

from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_keys.exceptions import ValidationError as KeyValidationError
from eth_utils import keccak, decode_hex

from ..constants import RECOVERY_ID_OFFSET
from ..exceptions import InputValidationError, SigningError

logger = logging.getLogger(__name__)

# Order of the secp256k1 group
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

SIGNATURE_LENGTH = 65


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte keccak-256 hash of data."""
    return keccak(primitive=data)


def sign_digest(private_key: keys.PrivateKey, digest: bytes) -> str:
    """
    Sign a 32-byte digest directly (no re-hashing).

    Args:
        private_key: secp256k1 private key
        digest: Message digest to sign

    Returns:
        0x-prefixed hex of r || s || (recoveryId + 27), 65 bytes

    Raises:
        SigningError: If the digest is malformed or the curve operation fails
    """
    if not isinstance(digest, (bytes, bytearray)) or len(digest) != 32:
        raise SigningError("Digest must be exactly 32 bytes")

    try:
        signature = private_key.sign_msg_hash(bytes(digest))
    except (KeyValidationError, BadSignature, ValueError) as e:
        # SECURITY: type name only, the key may appear in the message
        error_type = type(e).__name__
        logger.error(f"Digest signing failed: {error_type}")
        raise SigningError(f"Digest signing failed: {error_type}")

    raw = (
        signature.r.to_bytes(32, "big")
        + signature.s.to_bytes(32, "big")
        + bytes([signature.v + RECOVERY_ID_OFFSET])
    )
    return "0x" + raw.hex()


def split_signature(signature: Union[str, bytes]) -> tuple[int, int, int]:
    """
    Split a 65-byte signature into (recoveryId, r, s).

    Accepts v encoded either as 27/28 or as a bare 0/1 recovery id.

    Raises:
        InputValidationError: If the signature is not 65 bytes or v is out of range
    """
    try:
        raw = decode_hex(signature) if isinstance(signature, str) else bytes(signature)
    except (ValueError, TypeError):
        raise InputValidationError("Signature is not valid hex")

    if len(raw) != SIGNATURE_LENGTH:
        raise InputValidationError(
            f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}"
        )

    v = raw[64]
    if v >= RECOVERY_ID_OFFSET:
        v -= RECOVERY_ID_OFFSET
    if v not in (0, 1):
        raise InputValidationError(f"Invalid recovery id: {raw[64]}")

    return v, int.from_bytes(raw[:32], "big"), int.from_bytes(raw[32:64], "big")


def recover_public_key(digest: bytes, signature: Union[str, bytes]) -> keys.PublicKey:
    """
    Recover the signer's public key from a digest and signature.

    Raises:
        SigningError: If recovery fails
    """
    v, r, s = split_signature(signature)
    try:
        return keys.Signature(vrs=(v, r, s)).recover_public_key_from_msg_hash(bytes(digest))
    except (KeyValidationError, BadSignature, ValueError) as e:
        raise SigningError(f"Public key recovery failed: {type(e).__name__}")


def recover_address(digest: bytes, signature: Union[str, bytes]) -> str:
    """Recover the checksummed address that produced signature over digest."""
    return recover_public_key(digest, signature).to_checksum_address()
