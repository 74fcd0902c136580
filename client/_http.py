"""Internal HTTP handling utilities for the filesystem client.

This module provides the low-level HTTP communication layer used by the
sub-clients. It handles:
- Making async HTTP requests
- Response parsing and error mapping
- Retry logic with exponential backoff

This is an internal module and should not be imported directly by users.
"""

import asyncio
import logging
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConnectionError,
    NetworkError,
    NotFoundError,
    ServerError,
    TimeoutError,
)

logger = logging.getLogger(__name__)

# HTTP methods used by the filesystem service
HttpMethod = Literal["GET", "POST"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

# Default backoff settings for retry logic
DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds


def _parse_error_response(response: httpx.Response) -> str:
    """Extract a human-readable message from an error response.

    Understands the command result shape (``{"success": false, "output": ...}``),
    the ``detail``/``message``/``error`` keys used by common web frameworks,
    and bare JSON strings. Falls back to the raw text.

    Args:
        response: The HTTP response to parse.

    Returns:
        The error message.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        if text:
            return text
        return f"HTTP {response.status_code} error"

    if isinstance(body, str):
        return body
    if isinstance(body, dict):
        for key in ("output", "detail", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return str(body)


def _raise_for_status(response: httpx.Response) -> None:
    """Raise an appropriate exception for error status codes.

    Args:
        response: The HTTP response to check.

    Raises:
        NotFoundError: For HTTP 404 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other non-success responses.
    """
    if response.is_success:
        return

    message = _parse_error_response(response)
    status_code = response.status_code

    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code == 404:
        raise NotFoundError(message=message, response_body=response_body)
    elif status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            response_body=response_body,
        )
    else:
        raise APIError(
            message=message,
            status_code=status_code,
            response_body=response_body,
        )


def _parse_json_body(response: httpx.Response, url: str) -> Any:
    """Decode the body of a successful response.

    Args:
        response: A response with a success status.
        url: The requested URL, for the error message.

    Returns:
        The parsed JSON body, or None for an empty body.

    Raises:
        NetworkError: If the body is not valid JSON.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise NetworkError(f"Invalid JSON response from {url}") from e


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Calculate exponential backoff delay for retry attempts.

    Args:
        attempt: The retry attempt number (0-indexed).
        base: Base delay in seconds.

    Returns:
        The delay in seconds, capped at DEFAULT_RETRY_BACKOFF_MAX.
    """
    delay = base * (2 ** attempt)
    return min(delay, DEFAULT_RETRY_BACKOFF_MAX)


class AsyncHTTPClient:
    """Asynchronous HTTP client for the filesystem service.

    Wraps httpx.AsyncClient with error mapping and optional retry.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager and close client."""
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        The JSON body may be any JSON value; ``None`` sends no body.

        Args:
            method: The HTTP method.
            path: The URL path (appended to base_url).
            params: Query parameters to include in the URL.
            json: JSON body to send with the request.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error status.
            NetworkError: For any other transport failure, or a success
                response whose body is not JSON.
        """
        url = f"{self.base_url}{path}"

        # Filter out None values from params
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempts = self.max_retries + 1 if self.retry_enabled else 1

        for attempt in range(attempts):
            last_attempt = attempt >= attempts - 1
            try:
                response = await self._client.request(
                    method=method,
                    url=path,
                    params=params,
                    json=json,
                )

                if (
                    self.retry_enabled
                    and response.status_code in RETRYABLE_STATUS_CODES
                    and not last_attempt
                ):
                    delay = _calculate_backoff(attempt)
                    logger.debug(
                        f"{method} {path} returned {response.status_code}, retrying in {delay}s"
                    )
                    await asyncio.sleep(delay)
                    continue

                _raise_for_status(response)
                return _parse_json_body(response, url)

            except httpx.ConnectError as e:
                if not self.retry_enabled or last_attempt:
                    raise ConnectionError(
                        message=f"Failed to connect to {url}",
                        url=url,
                        cause=e,
                    ) from e
                await asyncio.sleep(_calculate_backoff(attempt))

            except httpx.TimeoutException as e:
                if not self.retry_enabled or last_attempt:
                    raise TimeoutError(
                        message=f"Request to {url} timed out",
                        timeout=self.timeout,
                        url=url,
                    ) from e
                await asyncio.sleep(_calculate_backoff(attempt))

            except httpx.TransportError as e:
                # Reset connections and protocol errors are not retried.
                raise NetworkError(f"Request to {url} failed: {e}") from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make an async GET request.

        Args:
            path: The URL path.
            params: Query parameters.

        Returns:
            The parsed JSON response.
        """
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an async POST request.

        Args:
            path: The URL path.
            json: JSON body to send.
            params: Query parameters.

        Returns:
            The parsed JSON response.
        """
        return await self.request("POST", path, params=params, json=json)
