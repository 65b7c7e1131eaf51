"""
Custom exceptions for the CLOB signing client.

Provides typed exceptions so callers can tell malformed input, failed
authentication, fatal signing errors, transient transport errors and
final exchange rejections apart.
"""

from typing import Optional, Any


class ClobSignerError(Exception):
    """Base exception for all clob_signer errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputValidationError(ClobSignerError):
    """Input validation failed (malformed key, token id, price, size or side)."""
    pass


class AuthenticationFailedError(ClobSignerError):
    """Credential derivation failed or returned a malformed response."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_body: Optional[str] = None):
        super().__init__(message, {"status_code": status_code, "response_body": response_body})
        self.status_code = status_code
        self.response_body = response_body


class NotAuthenticatedError(AuthenticationFailedError):
    """Operation requires session credentials that have not been derived yet."""
    pass


class SigningError(ClobSignerError):
    """Underlying curve operation failed. Treated as fatal."""
    pass


class TransportError(ClobSignerError):
    """Network failure, timeout or non-JSON response. Caller may retry."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_body: Optional[str] = None):
        super().__init__(message, {"status_code": status_code, "response_body": response_body})
        self.status_code = status_code
        self.response_body = response_body


class RequestTimeoutError(TransportError):
    """Request exceeded the configured timeout."""
    pass


class ExchangeRejectionError(ClobSignerError):
    """Exchange returned a well-formed rejection (success=false). Final for that order."""

    def __init__(self, message: str, order_id: Optional[str] = None,
                 reason: Optional[str] = None):
        super().__init__(message, {"order_id": order_id, "reason": reason})
        self.order_id = order_id
        self.reason = reason
