"""
Polymarket CLOB signing client.

Derives a wallet identity from a secp256k1 secret key, authenticates against
the CLOB with an EIP-712 attestation, and signs, submits and cancels limit
orders with HMAC-authenticated requests.

Adapted from Polymarket's official clients (MIT License):
- https://github.com/Polymarket/py-clob-client
- https://github.com/Polymarket/python-order-utils
"""

from .client import ClobClient
from .config import ClobSignerSettings, get_settings
from .models import (
    Side,
    OrderType,
    SignatureType,
    Order,
    SignedOrder,
    OrderResult,
    ApiCredentialsResponse,
)
from .exceptions import (
    ClobSignerError,
    InputValidationError,
    AuthenticationFailedError,
    NotAuthenticatedError,
    SigningError,
    TransportError,
    RequestTimeoutError,
    ExchangeRejectionError,
)
from .signing import AccountIdentity
from .auth import Session, SessionCredentials, RequestSigner
from .logging_config import setup_logging

__version__ = "1.0.0"

__all__ = [
    # Client
    "ClobClient",
    "ClobSignerSettings",
    "get_settings",
    "setup_logging",

    # Signing & auth
    "AccountIdentity",
    "Session",
    "SessionCredentials",
    "RequestSigner",

    # Models
    "Side",
    "OrderType",
    "SignatureType",
    "Order",
    "SignedOrder",
    "OrderResult",
    "ApiCredentialsResponse",

    # Exceptions
    "ClobSignerError",
    "InputValidationError",
    "AuthenticationFailedError",
    "NotAuthenticatedError",
    "SigningError",
    "TransportError",
    "RequestTimeoutError",
    "ExchangeRejectionError",
]
