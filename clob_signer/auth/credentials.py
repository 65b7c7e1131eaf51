"""
Session credential records.

A Session is owned by the authenticator and handed by reference to every
RequestSigner built from it, so independent sessions can coexist.
"""

import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..exceptions import AuthenticationFailedError, ClobSignerError, NotAuthenticatedError

logger = logging.getLogger(__name__)


def _decode_secret(secret: str) -> bytes:
    """Strict base64url decode; stray characters are rejected, not skipped."""
    key = base64.b64decode(secret, altchars=b"-_", validate=True)
    if not key:
        raise ValueError("empty HMAC key")
    return key


@dataclass(frozen=True)
class SessionCredentials:
    """
    L2 API credentials derived from a wallet signature.

    SECURITY: Sensitive fields are hidden from repr to prevent credential leakage in logs.
    """
    api_key: str
    api_secret: str = field(repr=False)  # base64url
    api_passphrase: str = field(repr=False)

    def __post_init__(self):
        if not self.api_key or not self.api_secret or not self.api_passphrase:
            raise AuthenticationFailedError("API credentials incomplete")
        try:
            _decode_secret(self.api_secret)
        except (binascii.Error, ValueError):
            raise AuthenticationFailedError("API secret is not valid base64url")

    @property
    def secret_bytes(self) -> bytes:
        """Decoded HMAC key."""
        return _decode_secret(self.api_secret)


class Session:
    """
    Authentication state for one wallet.

    Unauthenticated until credentials are established; then terminal.
    Not locked: concurrent authenticate() calls must be serialized by the caller.
    """

    def __init__(self, address: str):
        self.address = address
        self._credentials: Optional[SessionCredentials] = None

    @property
    def authenticated(self) -> bool:
        """True once credentials have been established."""
        return self._credentials is not None

    @property
    def credentials(self) -> SessionCredentials:
        """
        Established credentials.

        Raises:
            NotAuthenticatedError: If authenticate() has not succeeded yet
        """
        if self._credentials is None:
            raise NotAuthenticatedError(f"Session for {self.address} is not authenticated")
        return self._credentials

    def establish(self, credentials: SessionCredentials) -> None:
        """Store credentials. May only happen once."""
        if self._credentials is not None:
            raise ClobSignerError(f"Session for {self.address} already authenticated")
        self._credentials = credentials
        logger.info(f"Session established for {self.address}")

    def __repr__(self) -> str:
        return f"Session(address={self.address}, authenticated={self.authenticated})"
