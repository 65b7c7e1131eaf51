"""HTTP clients for the Polymarket CLOB."""

from .base import BaseAPIClient
from .clob import CLOBAPI

__all__ = ["BaseAPIClient", "CLOBAPI"]
