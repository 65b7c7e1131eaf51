"""EIP-712 encoding, digest signing and account identity."""

from .identity import AccountIdentity, address_from_public_key
from .primitives import keccak256, sign_digest, recover_address, split_signature
from .eip712 import (
    domain_separator,
    auth_domain_separator,
    order_domain_separator,
    clob_auth_struct_hash,
    order_struct_hash,
    eip712_digest,
    auth_digest,
    order_digest,
)

__all__ = [
    "AccountIdentity",
    "address_from_public_key",
    "keccak256",
    "sign_digest",
    "recover_address",
    "split_signature",
    "domain_separator",
    "auth_domain_separator",
    "order_domain_separator",
    "clob_auth_struct_hash",
    "order_struct_hash",
    "eip712_digest",
    "auth_digest",
    "order_digest",
]
