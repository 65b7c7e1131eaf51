"""
Order builder with EIP-712 signing.

Implements order construction and signing for Polymarket CLOB.
Adapted from py-clob-client and python-order-utils (MIT License).
"""

import random
import logging
from decimal import Decimal
from typing import Union

from ..constants import (
    POLYGON_CHAIN_ID,
    ZERO_ADDRESS,
    ORDER_EXPIRATION,
    ORDER_NONCE,
    FEE_RATE_BPS,
)
from ..models import Order, Side, SignatureType, SignedOrder
from ..signing.eip712 import order_digest
from ..signing.identity import AccountIdentity
from ..utils.numeric import to_fixed_point
from ..utils.validators import validate_price, validate_side, validate_size, validate_token_id

logger = logging.getLogger(__name__)


def generate_salt() -> int:
    """Random 64-bit salt. Uniqueness against replay, not secrecy."""
    return random.getrandbits(64)


def compute_amounts(price: Decimal, size: Decimal, side: Side) -> tuple[int, int]:
    """
    Compute (makerAmount, takerAmount) at 6-decimal fixed point.

    BUY pays price * size collateral for size shares; SELL swaps the roles.

    Args:
        price: Price per share, in (0, 1)
        size: Number of shares

    Returns:
        (maker_amount, taker_amount)

    Example:
        >>> compute_amounts(Decimal("0.05"), Decimal("100"), Side.BUY)
        (5000000, 100000000)
    """
    quote = to_fixed_point(price * size)
    shares = to_fixed_point(size)

    if side is Side.BUY:
        return quote, shares
    return shares, quote


class OrderBuilder:
    """
    Builds and signs GTC limit orders for one identity.

    Maker and signer are both the identity's address; taker is the zero
    address (anyone may fill).
    """

    def __init__(self, identity: AccountIdentity, chain_id: int = POLYGON_CHAIN_ID):
        """
        Initialize order builder.

        Args:
            identity: Signing identity
            chain_id: Polygon chain ID (137 for mainnet)
        """
        self.identity = identity
        self.chain_id = chain_id

    def build_order(
        self,
        token_id: Union[str, int],
        price: Union[Decimal, float, str],
        size: Union[Decimal, float, str],
        side: Union[Side, str]
    ) -> Order:
        """
        Build an unsigned order.

        Raises:
            InputValidationError: If any parameter is invalid
        """
        token = validate_token_id(token_id)
        price_dec = validate_price(price)
        size_dec = validate_size(size)
        side_enum = validate_side(side)

        maker_amount, taker_amount = compute_amounts(price_dec, size_dec, side_enum)
        address = self.identity.address

        return Order(
            salt=generate_salt(),
            maker=address,
            signer=address,
            taker=ZERO_ADDRESS,
            token_id=token,
            maker_amount=maker_amount,
            taker_amount=taker_amount,
            expiration=ORDER_EXPIRATION,
            nonce=ORDER_NONCE,
            fee_rate_bps=FEE_RATE_BPS,
            side=side_enum,
            signature_type=SignatureType.POLY_GNOSIS_SAFE,
        )

    def digest(self, order: Order, neg_risk: bool = False) -> bytes:
        """EIP-712 digest of order under the selected exchange's domain."""
        return order_digest(order, self.chain_id, neg_risk)

    def sign_order(self, order: Order, neg_risk: bool = False) -> SignedOrder:
        """
        Sign an order.

        Raises:
            SigningError: If signing fails
        """
        signature = self.identity.sign_digest(self.digest(order, neg_risk))
        return SignedOrder(order=order, signature=signature)

    def build_signed_order(
        self,
        token_id: Union[str, int],
        price: Union[Decimal, float, str],
        size: Union[Decimal, float, str],
        side: Union[Side, str],
        neg_risk: bool = False
    ) -> SignedOrder:
        """
        Build and sign order.

        Args:
            token_id: ERC1155 token ID (decimal string)
            price: Price per share, strictly between 0 and 1
            size: Number of shares
            side: BUY or SELL
            neg_risk: Market settles through the negative-risk exchange

        Returns:
            Signed order ready for submission

        Raises:
            InputValidationError: If order parameters invalid
            SigningError: If signing fails
        """
        order = self.build_order(token_id, price, size, side)
        signed = self.sign_order(order, neg_risk)

        logger.info(
            f"Built order: {order.side.value} {size} @ {price} "
            f"(token={order.token_id}, neg_risk={neg_risk})"
        )
        return signed
