"""
Main CLOB signing client.

Single entry point for agents: derive identity from a secret key,
authenticate once, then sign and submit or cancel orders.
"""

from typing import Optional, Union
from decimal import Decimal
import logging

from .config import get_settings, ClobSignerSettings
from .models import OrderResult, OrderType, Side, SignedOrder
from .auth.authenticator import SessionAuthenticator
from .auth.credentials import SessionCredentials
from .auth.request_signer import RequestSigner
from .api.clob import CLOBAPI
from .signing.identity import AccountIdentity
from .trading.order_builder import OrderBuilder
from .exceptions import InputValidationError, NotAuthenticatedError
from .metrics import get_metrics

logger = logging.getLogger(__name__)


class ClobClient:
    """
    Wallet-authenticated client for the Polymarket CLOB.

    One instance per process (per wallet). No internal locking: signing is
    pure and thread-safe once authenticated, but authenticate() must not be
    called concurrently.

    Usage:
        client = ClobClient(private_key)
        client.authenticate()
        result = client.place_limit_order("123", 0.05, 100, Side.BUY)
        if result.success:
            client.cancel_order(result.order_id)
    """

    def __init__(
        self,
        private_key: Union[str, bytes],
        settings: Optional[ClobSignerSettings] = None
    ):
        """
        Initialize client.

        Args:
            private_key: Hex secret key (optional 0x prefix) or 32 raw bytes
            settings: Optional settings (loads from env if not provided)

        Raises:
            InputValidationError: If the key is malformed
        """
        self.settings = settings or get_settings()

        self.metrics = get_metrics(
            enabled=self.settings.enable_metrics,
            port=self.settings.metrics_port if self.settings.enable_metrics else None
        )

        self.identity = AccountIdentity(private_key)
        self.clob = CLOBAPI(settings=self.settings)
        self.authenticator = SessionAuthenticator(
            identity=self.identity,
            api=self.clob,
            chain_id=self.settings.chain_id
        )
        self.order_builder = OrderBuilder(
            identity=self.identity,
            chain_id=self.settings.chain_id
        )
        self._signer: RequestSigner = self.authenticator.request_signer()

        logger.info(f"CLOB client initialized for {self.identity.address}")

    @classmethod
    def from_settings(cls, settings: Optional[ClobSignerSettings] = None) -> "ClobClient":
        """
        Build a client from POLYMARKET_PRIVATE_KEY.

        Raises:
            InputValidationError: If no private key is configured
        """
        settings = settings or get_settings()
        if settings.private_key is None:
            raise InputValidationError("POLYMARKET_PRIVATE_KEY is not set")
        return cls(settings.private_key.get_secret_value(), settings=settings)

    # ========== Identity & Session ==========

    @property
    def address(self) -> str:
        """Checksummed wallet address."""
        return self.identity.address

    @property
    def is_authenticated(self) -> bool:
        return self.authenticator.authenticated

    def authenticate(self) -> SessionCredentials:
        """
        Derive API credentials (one wallet signature).

        Raises:
            AuthenticationFailedError: Exchange refused or answered malformed
            TransportError: Network failure or timeout
        """
        return self.authenticator.authenticate()

    def l2_headers(self, method: str, path: str, body: Union[str, bytes] = "") -> dict[str, str]:
        """
        L2 headers for an arbitrary authenticated request.

        Raises:
            NotAuthenticatedError: Before authenticate()
        """
        return self._signer.headers(method, path, body)

    # ========== Trading ==========

    def build_order(
        self,
        token_id: str,
        price: Union[Decimal, float, str],
        size: Union[Decimal, float, str],
        side: Union[Side, str],
        neg_risk: bool = False
    ) -> SignedOrder:
        """Build and sign an order without submitting it."""
        return self.order_builder.build_signed_order(token_id, price, size, side, neg_risk)

    def place_limit_order(
        self,
        token_id: str,
        price: Union[Decimal, float, str],
        size: Union[Decimal, float, str],
        side: Union[Side, str],
        neg_risk: bool = False
    ) -> OrderResult:
        """
        Sign and submit a GTC limit order.

        Args:
            token_id: ERC1155 token ID (decimal string)
            price: Price per share, strictly between 0 and 1
            size: Number of shares
            side: BUY or SELL
            neg_risk: Market settles through the negative-risk exchange

        Returns:
            OrderResult (success=False for exchange rejections)

        Raises:
            NotAuthenticatedError: Before authenticate()
            InputValidationError: Invalid order parameters
            TransportError: Network failure, timeout or non-JSON response
        """
        if not self.is_authenticated:
            raise NotAuthenticatedError(f"Session for {self.address} is not authenticated")

        signed_order = self.build_order(token_id, price, size, side, neg_risk)
        return self.clob.post_order(signed_order, self._signer, OrderType.GTC)

    def cancel_order(self, order_id: str) -> bool:
        """
        Cancel an order.

        Returns:
            True if the exchange answered 2xx, False otherwise

        Raises:
            NotAuthenticatedError: Before authenticate()
            TransportError: Network failure or timeout
        """
        return self.clob.cancel_order(order_id, self._signer)

    # ========== Lifecycle ==========

    def close(self) -> None:
        """Close client and cleanup resources."""
        self.clob.close()
        logger.info("CLOB client closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return f"ClobClient(address={self.address}, authenticated={self.is_authenticated})"
