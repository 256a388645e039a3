"""
HTTP client abstraction for API conformance testing.

Provides a unified interface for sending requests to the service under test
with a chosen authorization mode. Status codes are reported, never raised:
the suites assert on them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
import json
import logging
from typing import Any

import httpx

from api_conformance.config import TIMEOUT_CONSTANTS
from api_conformance.settings import ConformanceSettings

logger = logging.getLogger(__name__)


class HTTPClientError(Exception):
    """Raised when a request cannot be delivered to the service."""

    pass


class AuthMode(str, Enum):
    """How a request authenticates."""

    VALID = "valid"
    MISSING = "missing"
    INVALID = "invalid"


@dataclass
class ApiResponse:
    """Transport-independent view of an HTTP response."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    text: str = ""
    elapsed: float = 0.0
    is_json: bool = False

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "ApiResponse":
        """Build a response from an httpx response.

        Args:
            response: Response returned by httpx

        Returns:
            ApiResponse with the decoded JSON body; is_json tells a JSON null
            apart from a body that is empty or not JSON
        """
        text = response.text
        body = None
        is_json = False
        if text:
            try:
                body = response.json()
                is_json = True
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.debug(f"Response body is not JSON: {text[:80]!r}")

        try:
            elapsed = response.elapsed.total_seconds()
        except RuntimeError:
            # elapsed is only set once the response is closed
            elapsed = 0.0

        return cls(
            status_code=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=body,
            text=text,
            elapsed=elapsed,
            is_json=is_json,
        )

    @property
    def content_type(self) -> str:
        """Value of the content-type header, empty when absent."""
        return self.headers.get("content-type", "")

    def __str__(self) -> str:
        """String representation of the response."""
        return f"HTTP {self.status_code} ({self.content_type or 'no content-type'})"


class HTTPClient(ABC):
    """Abstract base class for API clients."""

    def __init__(self, base_url: str, timeout: float = TIMEOUT_CONSTANTS["request_default"]):
        """Initialize HTTP client.

        Args:
            base_url: Root URL of the service under test
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @abstractmethod
    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        content: str | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request to the service.

        Args:
            method: HTTP method
            path: URL path (will be appended to base_url)
            params: Optional query parameters
            json: Optional JSON body; None sends no body
            content: Optional raw body, exclusive with json
            headers: Optional additional headers

        Returns:
            Response of the service, whatever its status code

        Raises:
            HTTPClientError: If the request cannot be delivered
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release connections held by the client."""
        pass

    def get(self, path: str, params: dict[str, Any] | None = None, **kwargs: Any) -> ApiResponse:
        """Send GET request to the service."""
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        """Send POST request to the service."""
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs: Any) -> ApiResponse:
        """Send PUT request to the service."""
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> ApiResponse:
        """Send DELETE request to the service."""
        return self.request("DELETE", path, **kwargs)

    def is_reachable(self) -> bool:
        """Check if the service is responding.

        Returns:
            True if any HTTP response came back, False otherwise
        """
        try:
            # Any status, even 404, means the server is up
            self.get("/")
            return True
        except HTTPClientError:
            return False

    def __enter__(self) -> "HTTPClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit closing the client."""
        self.close()


class HttpxAPIClient(HTTPClient):
    """HTTP client using the httpx library."""

    def __init__(
        self,
        base_url: str,
        timeout: float = TIMEOUT_CONSTANTS["request_default"],
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize httpx-based HTTP client.

        Args:
            base_url: Root URL of the service under test
            timeout: Request timeout in seconds
            headers: Headers sent with every request
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        super().__init__(base_url, timeout)
        default_headers = {"Accept": "application/json"}
        if headers:
            default_headers.update(headers)
        self.client = httpx.Client(
            base_url=self.base_url,
            headers=default_headers,
            timeout=timeout,
            transport=transport,
        )

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        content: str | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        """Send a request using httpx."""
        has_json = json is not None
        if has_json and content is not None:
            raise ValueError("json and content are mutually exclusive")

        request_headers = dict(headers or {})
        if content is not None:
            request_headers.setdefault("Content-Type", "application/json")

        try:
            response = self.client.request(
                method,
                path,
                params=params,
                json=json,
                content=content,
                headers=request_headers,
            )
        except httpx.RequestError as e:
            raise HTTPClientError(f"Request failed: {method} {path}: {e}") from e

        api_response = ApiResponse.from_httpx(response)
        logger.debug(
            f"{method} {path[:120]} -> {api_response.status_code} ({api_response.elapsed:.3f}s)"
        )
        return api_response

    def close(self) -> None:
        """Close the underlying httpx client."""
        self.client.close()


def build_auth_headers(settings: ConformanceSettings, auth: AuthMode) -> dict[str, str]:
    """Build the Authorization header for an auth mode.

    Args:
        settings: Conformance settings holding the tokens
        auth: Authorization mode

    Returns:
        Headers to send, empty for AuthMode.MISSING
    """
    auth = AuthMode(auth)
    if auth is AuthMode.MISSING:
        return {}
    token = settings.auth_token if auth is AuthMode.VALID else settings.invalid_token
    return {"Authorization": f"Bearer {token}"}


def create_http_client(
    settings: ConformanceSettings,
    auth: AuthMode = AuthMode.VALID,
    transport: httpx.BaseTransport | None = None,
) -> HTTPClient:
    """Create an API client for the configured service.

    Args:
        settings: Conformance settings
        auth: Authorization mode of every request sent by the client
        transport: Optional httpx transport override

    Returns:
        Configured HTTP client

    Raises:
        HTTPClientError: If no base URL is configured
    """
    if not settings.base_url:
        raise HTTPClientError("No API base URL configured")

    return HttpxAPIClient(
        settings.base_url,
        timeout=settings.timeout,
        headers=build_auth_headers(settings, auth),
        transport=transport,
    )
