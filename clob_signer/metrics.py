"""
Prometheus metrics for monitoring.

Tracks HTTP requests, order submissions and credential derivations.
"""

import time
from typing import Optional
from functools import wraps
import logging

from prometheus_client import CollectorRegistry, Counter, Histogram, REGISTRY, start_http_server

logger = logging.getLogger(__name__)


class Metrics:
    """
    Prometheus metrics collector.

    Tracks:
    - API request count and latency
    - Order submissions by side and result
    - Authentication attempts
    """

    def __init__(
        self,
        enabled: bool = True,
        port: Optional[int] = None,
        registry: Optional[CollectorRegistry] = None
    ):
        """
        Initialize metrics.

        Args:
            enabled: Enable metrics collection
            port: Metrics HTTP server port (no server if None)
            registry: Collector registry (default: global registry)
        """
        self.enabled = enabled

        if not self.enabled:
            return

        registry = registry if registry is not None else REGISTRY

        self.api_requests = Counter(
            'clob_signer_api_requests_total',
            'Total API requests',
            ['method', 'endpoint', 'status'],
            registry=registry
        )

        self.api_latency = Histogram(
            'clob_signer_api_latency_seconds',
            'API request latency',
            ['method', 'endpoint'],
            registry=registry
        )

        self.orders_submitted = Counter(
            'clob_signer_orders_submitted_total',
            'Total orders submitted',
            ['side', 'result'],
            registry=registry
        )

        self.auth_attempts = Counter(
            'clob_signer_auth_attempts_total',
            'API credential derivation attempts',
            ['result'],
            registry=registry
        )

        if port is not None:
            try:
                start_http_server(port, registry=registry)
                logger.info(f"Metrics server started on port {port}")
            except OSError as e:
                logger.error(f"Failed to start metrics server: {e}")

    def track_api_request(self, method: str, endpoint: str, status: str) -> None:
        """Record API request."""
        if self.enabled:
            self.api_requests.labels(method=method, endpoint=endpoint, status=status).inc()

    def track_api_latency(self, method: str, endpoint: str, duration: float) -> None:
        """Record API latency."""
        if self.enabled:
            self.api_latency.labels(method=method, endpoint=endpoint).observe(duration)

    def track_order(self, side: str, result: str) -> None:
        """Record order submission outcome (accepted, rejected)."""
        if self.enabled:
            self.orders_submitted.labels(side=side, result=result).inc()

    def track_auth(self, result: str) -> None:
        """Record credential derivation outcome."""
        if self.enabled:
            self.auth_attempts.labels(result=result).inc()


# Global metrics instance
_metrics: Optional[Metrics] = None


def get_metrics(enabled: bool = False, port: Optional[int] = None) -> Metrics:
    """Get or create metrics instance. The first call decides configuration."""
    global _metrics
    if _metrics is None:
        _metrics = Metrics(enabled=enabled, port=port)
    return _metrics


def track_time(method: str, endpoint: str):
    """Decorator to record API latency of a call."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not _metrics or not _metrics.enabled:
                return func(*args, **kwargs)

            start = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                _metrics.track_api_latency(method, endpoint, time.time() - start)
        return wrapper
    return decorator
