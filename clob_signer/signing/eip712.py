"""
EIP-712 encoding for Polymarket CLOB messages.

Uses poly_eip712_structs (Polymarket's fork of eip712-structs) for the
struct schemas. Every field encodes to a 32-byte big-endian word;
addresses are left-zero-padded and strings are keccak-hashed first.
"""

import logging
from typing import Optional

from poly_eip712_structs import EIP712Struct, Address, String, Uint, make_domain

from .. import models
from ..constants import (
    AUTH_DOMAIN_NAME,
    ORDER_DOMAIN_NAME,
    DOMAIN_VERSION,
    POLYGON_CHAIN_ID,
    CLOB_AUTH_MESSAGE,
    exchange_for,
)
from ..exceptions import InputValidationError
from ..utils.validators import validate_address, validate_token_id
from .primitives import keccak256

logger = logging.getLogger(__name__)

EIP712_PREFIX = b"\x19\x01"

# Canonical type strings (must match the verifying contracts exactly)
DOMAIN_TYPE = "EIP712Domain(string name,string version,uint256 chainId)"
DOMAIN_WITH_CONTRACT_TYPE = (
    "EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
CLOB_AUTH_TYPE = "ClobAuth(address address,string timestamp,uint256 nonce,string message)"
ORDER_TYPE = (
    "Order(uint256 salt,address maker,address signer,address taker,"
    "uint256 tokenId,uint256 makerAmount,uint256 takerAmount,"
    "uint256 expiration,uint256 nonce,uint256 feeRateBps,"
    "uint8 side,uint8 signatureType)"
)


class ClobAuth(EIP712Struct):
    """
    CLOB authentication attestation.

    Signed once to derive API credentials.
    """
    address = Address()
    timestamp = String()
    nonce = Uint()
    message = String()


class Order(EIP712Struct):
    """Exchange order as hashed by the CTF exchange contracts."""
    salt = Uint()
    maker = Address()
    signer = Address()
    taker = Address()
    tokenId = Uint()
    makerAmount = Uint()
    takerAmount = Uint()
    expiration = Uint()
    nonce = Uint()
    feeRateBps = Uint()
    side = Uint(8)
    signatureType = Uint(8)


DOMAIN_TYPE_HASH = keccak256(DOMAIN_TYPE.encode())
DOMAIN_WITH_CONTRACT_TYPE_HASH = keccak256(DOMAIN_WITH_CONTRACT_TYPE.encode())
CLOB_AUTH_TYPE_HASH = ClobAuth.type_hash()
ORDER_TYPE_HASH = Order.type_hash()


def _validate_chain_id(chain_id: int) -> int:
    if isinstance(chain_id, bool) or not isinstance(chain_id, int) or chain_id < 0:
        raise InputValidationError(f"Chain ID must be a non-negative integer, got {chain_id!r}")
    return chain_id


def build_domain(
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: Optional[str] = None
) -> EIP712Struct:
    """
    Build an EIP712Domain struct.

    The verifyingContract member is only present when a contract is given,
    which selects the four-field domain type.
    """
    chain_id = _validate_chain_id(chain_id)
    if verifying_contract is None:
        return make_domain(name=name, version=version, chainId=chain_id)

    return make_domain(
        name=name,
        version=version,
        chainId=chain_id,
        verifyingContract=validate_address(verifying_contract)
    )


def domain_separator(
    name: str,
    version: str,
    chain_id: int,
    verifying_contract: Optional[str] = None
) -> bytes:
    """
    Compute an EIP-712 domain separator.

    keccak256(typeHash || keccak(name) || keccak(version) || chainId [|| contract])

    Args:
        name: Domain name
        version: Domain version
        chain_id: Chain ID
        verifying_contract: Optional contract address

    Returns:
        32-byte domain separator
    """
    return build_domain(name, version, chain_id, verifying_contract).hash_struct()


def auth_domain_separator(chain_id: int = POLYGON_CHAIN_ID) -> bytes:
    """Domain separator for credential derivation (no verifying contract)."""
    return domain_separator(AUTH_DOMAIN_NAME, DOMAIN_VERSION, chain_id)


def order_domain_separator(chain_id: int = POLYGON_CHAIN_ID, neg_risk: bool = False) -> bytes:
    """Domain separator for orders, bound to the standard or negative-risk exchange."""
    return domain_separator(ORDER_DOMAIN_NAME, DOMAIN_VERSION, chain_id, exchange_for(neg_risk))


def clob_auth_struct(
    address: str,
    timestamp: str,
    nonce: int = 0,
    message: str = CLOB_AUTH_MESSAGE
) -> ClobAuth:
    """Build the ClobAuth struct; timestamp is a decimal string."""
    if isinstance(nonce, bool) or not isinstance(nonce, int) or nonce < 0:
        raise InputValidationError(f"Nonce must be a non-negative integer, got {nonce!r}")

    return ClobAuth(
        address=validate_address(address),
        timestamp=str(timestamp),
        nonce=nonce,
        message=message
    )


def clob_auth_struct_hash(
    address: str,
    timestamp: str,
    nonce: int = 0,
    message: str = CLOB_AUTH_MESSAGE
) -> bytes:
    """keccak256(CLOB_AUTH_TYPE_HASH || address || keccak(timestamp) || nonce || keccak(message))."""
    return clob_auth_struct(address, timestamp, nonce, message).hash_struct()


def order_struct(order: models.Order) -> Order:
    """Map an order model onto the EIP-712 Order struct."""
    return Order(
        salt=order.salt,
        maker=validate_address(order.maker),
        signer=validate_address(order.signer),
        taker=validate_address(order.taker),
        tokenId=validate_token_id(order.token_id),
        makerAmount=order.maker_amount,
        takerAmount=order.taker_amount,
        expiration=order.expiration,
        nonce=order.nonce,
        feeRateBps=order.fee_rate_bps,
        side=order.side.code,
        signatureType=int(order.signature_type),
    )


def order_struct_hash(order: models.Order) -> bytes:
    """keccak256(ORDER_TYPE_HASH || 12 encoded field words)."""
    return order_struct(order).hash_struct()


def eip712_digest(domain_sep: bytes, struct_hash: bytes) -> bytes:
    """
    Final signable digest.

    keccak256(0x19 || 0x01 || domainSeparator || structHash)

    Raises:
        InputValidationError: If either input is not 32 bytes
    """
    if len(domain_sep) != 32 or len(struct_hash) != 32:
        raise InputValidationError("Domain separator and struct hash must be 32 bytes each")
    return keccak256(EIP712_PREFIX + bytes(domain_sep) + bytes(struct_hash))


def auth_digest(
    address: str,
    timestamp: str,
    nonce: int = 0,
    chain_id: int = POLYGON_CHAIN_ID
) -> bytes:
    """Digest signed during credential derivation."""
    return eip712_digest(
        auth_domain_separator(chain_id),
        clob_auth_struct_hash(address, timestamp, nonce)
    )


def order_digest(
    order: models.Order,
    chain_id: int = POLYGON_CHAIN_ID,
    neg_risk: bool = False
) -> bytes:
    """Digest signed for an order under the selected exchange's domain."""
    return eip712_digest(
        order_domain_separator(chain_id, neg_risk),
        order_struct_hash(order)
    )
