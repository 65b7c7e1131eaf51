"""
Configuration management for the CLOB signing client.

Settings come from POLYMARKET_* environment variables or a .env file.
"""

from typing import Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import POLYGON_CHAIN_ID


class ClobSignerSettings(BaseSettings):
    """
    Client settings.

    Every field maps to POLYMARKET_<FIELD>; the private key stays a SecretStr.
    """
    model_config = SettingsConfigDict(
        env_prefix="POLYMARKET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # API URL
    clob_url: str = Field(
        default="https://clob.polymarket.com",
        description="CLOB API URL"
    )

    # Chain configuration
    chain_id: int = Field(default=POLYGON_CHAIN_ID, description="Polygon chain ID")

    # Wallet
    private_key: Optional[SecretStr] = Field(default=None, description="Hex secret key (optional 0x)")

    # Timeouts (no retries: retry/backoff belongs to the caller)
    request_timeout: float = Field(default=30.0, ge=1.0, description="Request timeout (seconds)")
    connect_timeout: float = Field(default=10.0, ge=1.0, description="Connection timeout (seconds)")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_requests: bool = Field(default=False, description="Log all HTTP requests")

    # Metrics
    enable_metrics: bool = Field(default=False, description="Enable Prometheus metrics")
    metrics_port: int = Field(default=9090, ge=1024, le=65535, description="Metrics server port")

    def __repr__(self) -> str:
        """Never includes the private key."""
        return (
            f"ClobSignerSettings("
            f"clob_url={self.clob_url}, "
            f"chain_id={self.chain_id}, "
            f"request_timeout={self.request_timeout}"
            ")"
        )


def get_settings() -> ClobSignerSettings:
    """
    Get client settings.

    Returns:
        Fresh settings instance (re-reads the environment)
    """
    return ClobSignerSettings()
