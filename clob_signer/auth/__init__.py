"""Authentication modules for the CLOB signing client."""

from .authenticator import SessionAuthenticator
from .credentials import Session, SessionCredentials
from .request_signer import RequestSigner, build_hmac_signature, verify_hmac_signature

__all__ = [
    "SessionAuthenticator",
    "Session",
    "SessionCredentials",
    "RequestSigner",
    "build_hmac_signature",
    "verify_hmac_signature",
]
