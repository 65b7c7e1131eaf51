"""
Type definitions for the CLOB signing client.

Uses Pydantic for runtime validation of orders and exchange responses.
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, ConfigDict, field_validator

from .constants import (
    FEE_RATE_BPS,
    MAX_UINT256,
    ORDER_EXPIRATION,
    ORDER_NONCE,
    ZERO_ADDRESS,
)
from .exceptions import ExchangeRejectionError


class Side(str, Enum):
    """Order side."""
    BUY = "BUY"
    SELL = "SELL"

    @property
    def code(self) -> int:
        """uint8 value signed in the Order struct."""
        return 0 if self is Side.BUY else 1


class OrderType(str, Enum):
    """Order type."""
    GTC = "GTC"  # Good-til-cancelled
    GTD = "GTD"  # Good-til-date
    FOK = "FOK"  # Fill-or-kill
    FAK = "FAK"  # Fill-and-kill


class SignatureType(int, Enum):
    """Wallet signature type."""
    EOA = 0
    POLY_PROXY = 1
    POLY_GNOSIS_SAFE = 2


_UINT256 = {"ge": 0, "le": MAX_UINT256}


class Order(BaseModel):
    """
    Unsigned exchange order.

    All integer fields are encoded as uint256 words except side and
    signature_type (uint8).
    """
    model_config = ConfigDict(frozen=True)

    salt: int = Field(..., **_UINT256)
    maker: str
    signer: str
    taker: str = ZERO_ADDRESS
    token_id: int = Field(..., **_UINT256)
    maker_amount: int = Field(..., **_UINT256)
    taker_amount: int = Field(..., **_UINT256)
    expiration: int = Field(default=ORDER_EXPIRATION, **_UINT256)
    nonce: int = Field(default=ORDER_NONCE, **_UINT256)
    fee_rate_bps: int = Field(default=FEE_RATE_BPS, **_UINT256)
    side: Side
    signature_type: SignatureType = SignatureType.POLY_GNOSIS_SAFE


class SignedOrder(BaseModel):
    """Order plus its 65-byte hex signature."""
    model_config = ConfigDict(frozen=True)

    order: Order
    signature: str

    def to_payload(self, owner: str, order_type: OrderType = OrderType.GTC) -> dict[str, Any]:
        """
        Serialize for POST /order.

        Numeric fields are decimal strings so no precision is lost in transport.

        Args:
            owner: Address owning the API key
            order_type: Order type (GTC by default)

        Returns:
            Request body dict
        """
        order = self.order
        return {
            "order": {
                "salt": str(order.salt),
                "maker": order.maker,
                "signer": order.signer,
                "taker": order.taker,
                "tokenId": str(order.token_id),
                "makerAmount": str(order.maker_amount),
                "takerAmount": str(order.taker_amount),
                "expiration": str(order.expiration),
                "nonce": str(order.nonce),
                "feeRateBps": str(order.fee_rate_bps),
                "side": order.side.value,
                "signatureType": int(order.signature_type),
                "signature": self.signature,
            },
            "owner": owner,
            "orderType": OrderType(order_type).value,
        }


# Response Models
class ApiCredentialsResponse(BaseModel):
    """Body returned by /auth/derive-api-key."""
    model_config = ConfigDict(populate_by_name=True)

    api_key: str = Field(..., alias="apiKey", min_length=1)
    secret: str = Field(..., min_length=1)
    passphrase: str = Field(..., min_length=1)


class OrderResult(BaseModel):
    """
    Structured outcome of an order submission.

    A business rejection is reported as success=False, never raised.
    """
    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    order_id: Optional[str] = Field(default=None, alias="orderID")
    error_msg: Optional[str] = Field(default=None, alias="errorMsg")
    status: Optional[str] = None

    @field_validator("order_id", "error_msg", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Optional[str]:
        """Exchange sends empty strings for absent values."""
        if v == "":
            return None
        return v

    def raise_for_rejection(self) -> "OrderResult":
        """
        Raise ExchangeRejectionError if the exchange rejected the order.

        Returns:
            self, for chaining when accepted
        """
        if not self.success:
            raise ExchangeRejectionError(
                f"Order rejected: {self.error_msg or 'unknown reason'}",
                order_id=self.order_id,
                reason=self.error_msg
            )
        return self
