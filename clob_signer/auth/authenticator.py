"""
Session authentication for Polymarket CLOB.

Exchanges a one-time EIP-712 wallet signature (L1) for API credentials
used by L2 request signing.
Adapted from Polymarket's py-clob-client (MIT License).
"""

import time
import logging
from typing import Optional, Any, TYPE_CHECKING

from ..constants import CLOB_AUTH_MESSAGE, POLYGON_CHAIN_ID
from ..exceptions import AuthenticationFailedError, TransportError
from ..metrics import get_metrics
from ..signing.eip712 import auth_digest
from ..signing.identity import AccountIdentity
from .credentials import Session, SessionCredentials
from .request_signer import RequestSigner

if TYPE_CHECKING:
    from ..api.clob import CLOBAPI

logger = logging.getLogger(__name__)


class SessionAuthenticator:
    """
    Derives and owns session credentials for one identity.

    State: unauthenticated -> authenticated (terminal). A failed attempt
    leaves the session untouched and may be retried.
    """

    def __init__(
        self,
        identity: AccountIdentity,
        api: "CLOBAPI",
        chain_id: int = POLYGON_CHAIN_ID
    ):
        """
        Initialize authenticator.

        Args:
            identity: Signing identity
            api: CLOB API client used for /auth/derive-api-key
            chain_id: Chain ID bound into the auth domain (default: 137)
        """
        self.identity = identity
        self.api = api
        self.chain_id = chain_id
        self.session = Session(identity.address)

    @property
    def authenticated(self) -> bool:
        return self.session.authenticated

    def build_attestation(self, timestamp: Optional[int] = None, nonce: int = 0) -> dict[str, Any]:
        """
        Build the signed ClobAuth attestation body.

        Args:
            timestamp: Unix timestamp (uses current time if None)
            nonce: Attestation nonce (default: 0)

        Returns:
            {address, timestamp, nonce, message, signature}
        """
        if timestamp is None:
            timestamp = int(time.time())

        address = self.identity.address
        digest = auth_digest(address, str(timestamp), nonce, self.chain_id)
        signature = self.identity.sign_digest(digest)

        return {
            "address": address,
            "timestamp": str(timestamp),
            "nonce": str(nonce),
            "message": CLOB_AUTH_MESSAGE,
            "signature": signature,
        }

    def authenticate(self) -> SessionCredentials:
        """
        Derive API credentials and establish the session.

        No retry: on failure the session stays unauthenticated.

        Returns:
            Session credentials

        Raises:
            AuthenticationFailedError: Non-2xx or malformed response
            TransportError: Network failure or timeout
        """
        if self.session.authenticated:
            logger.debug(f"Session for {self.identity.address} already authenticated")
            return self.session.credentials

        logger.info(f"Deriving CLOB API key for {self.identity.address}")
        metrics = get_metrics()

        try:
            response = self.api.derive_api_key(self.build_attestation())
            credentials = SessionCredentials(
                api_key=response.api_key,
                api_secret=response.secret,
                api_passphrase=response.passphrase
            )
        except AuthenticationFailedError:
            metrics.track_auth("failed")
            raise
        except TransportError:
            metrics.track_auth("error")
            raise

        self.session.establish(credentials)
        metrics.track_auth("success")
        logger.info(f"CLOB API key derived for {self.identity.address}")
        return credentials

    def request_signer(self) -> RequestSigner:
        """L2 signer bound to this authenticator's session."""
        return RequestSigner(self.session)
