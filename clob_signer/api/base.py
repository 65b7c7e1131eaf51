"""
Base HTTP client with typed error handling.

One pooled requests.Session per client, fixed timeouts, no internal retry:
retry and backoff belong to the caller.

JSON is encoded and parsed with orjson. Bodies are sent as the exact bytes
that were authenticated.
"""

import orjson
import requests
from typing import Optional, Any, Dict
from urllib.parse import urljoin
import logging

from ..config import ClobSignerSettings
from ..exceptions import TransportError, RequestTimeoutError
from ..metrics import get_metrics

logger = logging.getLogger(__name__)


def encode_json(payload: Any) -> bytes:
    """Compact JSON encoding used for both the wire body and its signature."""
    return orjson.dumps(payload)


class BaseAPIClient:
    """
    Base HTTP client.

    Safe to share across threads for independent requests.
    """

    def __init__(self, base_url: str, settings: ClobSignerSettings):
        """
        Initialize base API client.

        Args:
            base_url: API base URL
            settings: Client settings
        """
        self.base_url = base_url
        self.settings = settings

        self.session = requests.Session()

        from requests.adapters import HTTPAdapter

        adapter = HTTPAdapter(max_retries=0)  # No transport-level retries either
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

        self.timeout = (settings.connect_timeout, settings.request_timeout)

        # Request ID tracking
        self._request_counter = 0

    def _make_request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None
    ) -> requests.Response:
        """
        Send an HTTP request.

        Args:
            method: HTTP method
            path: Request path
            headers: Additional headers
            body: Raw request body

        Returns:
            Response (any status; callers interpret it)

        Raises:
            RequestTimeoutError: On timeout
            TransportError: On connection or other request failure
        """
        url = urljoin(self.base_url, path)

        self._request_counter += 1
        request_id = f"{method}:{path}:{self._request_counter}"

        if self.settings.log_requests:
            logger.debug(f"[{request_id}] {method} {url}")

        metrics = get_metrics()

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                data=body,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timeout: {method} {url}")
            metrics.track_api_request(method, path, "timeout")
            raise RequestTimeoutError(f"Request timeout: {method} {path}: {e}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Connection error: {method} {url}: {type(e).__name__}")
            metrics.track_api_request(method, path, "error")
            raise TransportError(f"Request failed: {method} {path}: {e}")

        metrics.track_api_request(method, path, str(response.status_code))

        if self.settings.log_requests:
            logger.debug(f"[{request_id}] -> {response.status_code}")

        return response

    @staticmethod
    def _parse_json(response: requests.Response, path: str) -> Any:
        """
        Parse a JSON response body.

        Raises:
            TransportError: If the body is not JSON
        """
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            logger.error(f"Invalid JSON response from {path}: {response.text[:200]}")
            raise TransportError(
                f"Invalid JSON response from {path}: {e}",
                status_code=response.status_code,
                response_body=response.text[:500]
            )

    def close(self) -> None:
        """Close session and cleanup resources."""
        self.session.close()
        logger.info("API client session closed")
