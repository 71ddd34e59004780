"""Base HTTP client with rate limiting and common configuration.

Provides shared functionality for API clients:
- Rate limiting with configurable delay
- Session management with custom User-Agent
- Default query parameters merged into every request
- GET helpers returning raw bytes or parsed JSON
- Generic error dataclass for result-or-error return values
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_RATE_LIMIT_DELAY = 0.34  # seconds between requests (NCBI: 3 req/sec without key)
DEFAULT_TIMEOUT = 30.0  # request timeout in seconds
DEFAULT_USER_AGENT = "taxonomy-finder/0.1.0 (https://github.com/taxonomy-finder/taxonomy-finder)"


@dataclass
class ClientError:
    """Error from a failed API request.

    Attributes:
        query: The query that was attempted
        error_code: Error code (e.g., "HTTP_ERROR", "NOT_FOUND", "PARSE_ERROR")
        error_message: Human-readable error message
        status_code: HTTP status code if available
    """

    query: str
    error_code: str
    error_message: str
    status_code: int | None = None


class HTTPClientBase:
    """Base class for HTTP API clients with rate limiting.

    Provides:
    - Session management with custom User-Agent
    - Rate limiting between requests
    - GET methods with timeout handling
    - JSON response parsing

    Subclasses should:
    - Set BASE_URL class attribute
    - Override _default_params() to add parameters sent with every request
    - Add domain-specific methods

    Example:
        >>> class MyClient(HTTPClientBase):
        ...     BASE_URL = "https://api.example.com"
        ...
        ...     def get_item(self, item_id: str) -> dict | ClientError:
        ...         url = f"{self.BASE_URL}/items/{item_id}"
        ...         try:
        ...             return self._get_json(url)
        ...         except requests.HTTPError as e:
        ...             return ClientError(
        ...                 query=item_id,
        ...                 error_code="HTTP_ERROR",
        ...                 error_message=str(e),
        ...             )
    """

    BASE_URL: str = ""

    def __init__(
        self,
        rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
    ):
        """Initialize the client.

        Args:
            rate_limit_delay: Seconds to wait between requests
            timeout: Request timeout in seconds
            user_agent: Custom User-Agent string (uses default if not provided)
        """
        self.rate_limit_delay = rate_limit_delay
        self.timeout = timeout
        self._last_request_time: float = 0
        self._session = requests.Session()
        self._session.headers.update({"User-Agent": user_agent or DEFAULT_USER_AGENT})

    def _default_params(self) -> dict[str, Any]:
        """Parameters added to every request. Empty by default."""
        return {}

    def _wait_for_rate_limit(self) -> None:
        """Wait if needed to respect rate limit."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self.rate_limit_delay:
            time.sleep(self.rate_limit_delay - elapsed)
        self._last_request_time = time.time()

    def _get(self, url: str, params: dict[str, Any] | None = None) -> requests.Response:
        """Make a GET request with rate limiting.

        Args:
            url: Full URL to fetch
            params: Query parameters

        Returns:
            Response object

        Raises:
            requests.RequestException: On network errors
        """
        merged = {**self._default_params(), **(params or {})}
        self._wait_for_rate_limit()
        logger.debug(f"GET {url} params={params}")
        response = self._session.get(url, params=merged, timeout=self.timeout)
        response.raise_for_status()
        return response

    def _get_content(self, url: str, params: dict[str, Any] | None = None) -> bytes:
        """Make a GET request and return the raw response body."""
        return self._get(url, params).content

    def _get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Make a GET request and return parsed JSON.

        Args:
            url: Full URL to fetch
            params: Query parameters

        Returns:
            Parsed JSON response as dict

        Raises:
            requests.RequestException: On network errors or if the body is not valid JSON
        """
        response = self._get(url, params)
        result: dict[str, Any] = response.json()
        return result

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> "HTTPClientBase":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit - close session."""
        self.close()
