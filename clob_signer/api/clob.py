"""
CLOB API client for authentication and trading operations.

Handles credential derivation, order placement and cancellation.
Adapted from py-clob-client (MIT License).
"""

from typing import Any, Dict
import logging

from pydantic import ValidationError as PydanticValidationError

from .base import BaseAPIClient, encode_json
from ..config import ClobSignerSettings
from ..constants import DERIVE_API_KEY_PATH, ORDER_PATH
from ..exceptions import AuthenticationFailedError, TransportError
from ..metrics import get_metrics, track_time
from ..models import ApiCredentialsResponse, OrderResult, OrderType, SignedOrder
from ..auth.request_signer import RequestSigner

logger = logging.getLogger(__name__)


class CLOBAPI(BaseAPIClient):
    """
    CLOB API client.

    Credential derivation is L1 (wallet signature in the body); order
    operations require L2 headers from a RequestSigner.
    """

    def __init__(self, settings: ClobSignerSettings):
        """
        Initialize CLOB API client.

        Args:
            settings: Client settings
        """
        super().__init__(base_url=settings.clob_url, settings=settings)

    @staticmethod
    def _is_success(status_code: int) -> bool:
        return 200 <= status_code < 300

    # ========== Authentication ==========

    @track_time("POST", DERIVE_API_KEY_PATH)
    def derive_api_key(self, attestation: Dict[str, Any]) -> ApiCredentialsResponse:
        """
        Exchange a signed attestation for API credentials.

        Args:
            attestation: {address, timestamp, nonce, message, signature}

        Returns:
            Parsed credentials

        Raises:
            AuthenticationFailedError: Non-2xx or malformed response body
            TransportError: Network failure or timeout
        """
        response = self._make_request(
            "POST",
            DERIVE_API_KEY_PATH,
            body=encode_json(attestation)
        )

        if not self._is_success(response.status_code):
            logger.error(f"API key derivation failed with {response.status_code}")
            raise AuthenticationFailedError(
                f"API key derivation failed ({response.status_code}): {response.text[:200]}",
                status_code=response.status_code,
                response_body=response.text
            )

        try:
            data = self._parse_json(response, DERIVE_API_KEY_PATH)
            return ApiCredentialsResponse.model_validate(data)
        except (TransportError, PydanticValidationError) as e:
            logger.error(f"Malformed API key response: {type(e).__name__}")
            raise AuthenticationFailedError(
                "Malformed API key response",
                status_code=response.status_code,
                response_body=response.text[:200]
            )

    # ========== Trading Operations (Authenticated) ==========

    @track_time("POST", ORDER_PATH)
    def post_order(
        self,
        signed_order: SignedOrder,
        signer: RequestSigner,
        order_type: OrderType = OrderType.GTC
    ) -> OrderResult:
        """
        Post signed order to exchange.

        The body is serialized once; the L2 signature covers exactly those bytes.

        Args:
            signed_order: Signed order
            signer: L2 request signer for the owning session
            order_type: Order type (default: GTC)

        Returns:
            OrderResult; a business rejection is success=False, not an exception

        Raises:
            NotAuthenticatedError: If the session has no credentials
            TransportError: Network failure, timeout, 5xx status, or non-JSON/non-object body
        """
        owner = signer.session.address
        body = encode_json(signed_order.to_payload(owner=owner, order_type=order_type))
        headers = signer.headers("POST", ORDER_PATH, body)

        response = self._make_request("POST", ORDER_PATH, headers=headers, body=body)

        if response.status_code >= 500:
            raise TransportError(
                f"Server error {response.status_code} posting order",
                status_code=response.status_code,
                response_body=response.text[:500]
            )

        data = self._parse_json(response, ORDER_PATH)

        if not isinstance(data, dict):
            raise TransportError(
                f"Invalid order response format: expected object, got {type(data).__name__}",
                status_code=response.status_code,
                response_body=response.text[:500]
            )

        try:
            result = OrderResult.model_validate(data)
        except PydanticValidationError as e:
            raise TransportError(
                f"Invalid order response: {e.error_count()} field error(s)",
                status_code=response.status_code,
                response_body=response.text[:500]
            )

        # Non-2xx rejections carry the reason under "error"
        if not result.success and result.error_msg is None and isinstance(data.get("error"), str):
            result = result.model_copy(update={"error_msg": data["error"]})

        side = signed_order.order.side.value
        if result.success:
            get_metrics().track_order(side, "accepted")
            logger.info(f"Order placed: {result.order_id}")
        else:
            get_metrics().track_order(side, "rejected")
            logger.warning(f"Order rejected ({response.status_code}): {result.error_msg}")

        return result

    @track_time("DELETE", ORDER_PATH)
    def cancel_order(self, order_id: str, signer: RequestSigner) -> bool:
        """
        Cancel single order.

        Success is decided by HTTP status alone; the body is not parsed.

        Args:
            order_id: Order ID to cancel
            signer: L2 request signer for the owning session

        Returns:
            True if the exchange answered 2xx

        Raises:
            NotAuthenticatedError: If the session has no credentials
            TransportError: Network failure or timeout
        """
        body = encode_json({"orderID": order_id})
        headers = signer.headers("DELETE", ORDER_PATH, body)

        response = self._make_request("DELETE", ORDER_PATH, headers=headers, body=body)

        if self._is_success(response.status_code):
            logger.info(f"Order cancelled: {order_id}")
            return True

        logger.warning(f"Cancel of {order_id} failed with {response.status_code}")
        return False
