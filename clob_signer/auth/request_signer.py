"""
L2 request signing for Polymarket CLOB.

Per-request HMAC-SHA256 over timestamp + METHOD + path + body, keyed with
the session's base64url API secret.
Adapted from Polymarket's py-clob-client (MIT License).
"""

import base64
import hashlib
import hmac
import logging
import time
from typing import Optional, Union

from ..constants import (
    POLY_ADDRESS,
    POLY_SIGNATURE,
    POLY_TIMESTAMP,
    POLY_API_KEY,
    POLY_PASSPHRASE,
)
from .credentials import Session

logger = logging.getLogger(__name__)


def _body_text(body: Union[str, bytes, None]) -> str:
    if body is None:
        return ""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body).decode("utf-8")
    return body


def build_hmac_signature(
    secret: Union[str, bytes],
    timestamp: Union[int, str],
    method: str,
    path: str,
    body: Union[str, bytes, None] = ""
) -> str:
    """
    Compute the L2 HMAC signature.

    Args:
        secret: API secret, base64url string or already-decoded key bytes
        timestamp: Unix timestamp (seconds)
        method: HTTP method (uppercased before signing)
        path: Request path
        body: Exact request body sent on the wire (may be empty)

    Returns:
        base64url-encoded HMAC-SHA256 digest
    """
    key = base64.urlsafe_b64decode(secret) if isinstance(secret, str) else bytes(secret)

    message = str(timestamp) + str(method).upper() + str(path) + _body_text(body)

    h = hmac.new(key, message.encode("utf-8"), hashlib.sha256)
    return base64.urlsafe_b64encode(h.digest()).decode("utf-8")


def verify_hmac_signature(
    secret: Union[str, bytes],
    signature: str,
    timestamp: Union[int, str],
    method: str,
    path: str,
    body: Union[str, bytes, None] = ""
) -> bool:
    """Constant-time check of an L2 signature."""
    expected = build_hmac_signature(secret, timestamp, method, path, body)
    return hmac.compare_digest(signature, expected)


class RequestSigner:
    """
    Builds L2 authentication headers from a session.

    Holds the session by reference; nothing is cached between calls.
    """

    def __init__(self, session: Session):
        self.session = session

    def headers(
        self,
        method: str,
        path: str,
        body: Union[str, bytes, None] = "",
        timestamp: Optional[int] = None
    ) -> dict[str, str]:
        """
        Create L2 authentication headers.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            path: Request path
            body: Exact request body (JSON string or bytes)
            timestamp: Unix timestamp (uses current time if None)

        Returns:
            L2 headers dict

        Raises:
            NotAuthenticatedError: If the session has no credentials
        """
        credentials = self.session.credentials

        if timestamp is None:
            timestamp = int(time.time())

        signature = build_hmac_signature(
            credentials.secret_bytes,
            timestamp,
            method,
            path,
            body
        )

        logger.debug(f"Created L2 headers for {method.upper()} {path}")
        return {
            POLY_ADDRESS: self.session.address,
            POLY_SIGNATURE: signature,
            POLY_TIMESTAMP: str(timestamp),
            POLY_API_KEY: credentials.api_key,
            POLY_PASSPHRASE: credentials.api_passphrase,
        }
