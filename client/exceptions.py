"""Exception hierarchy for the filesystem service client.

This module defines all exceptions that can be raised by the client library.
Every failure to obtain a usable response from the backend is a
``NetworkError``; callers that only care whether the round-trip worked can
catch that single type.

Exception Hierarchy:
    FSClientError (base)
    └── NetworkError - Transport or status failure on any request
        ├── ConnectionError - Network/connection failures
        ├── TimeoutError - Request timeout
        └── APIError - Server returned an error status
            ├── NotFoundError (HTTP 404)
            └── ServerError (HTTP 5xx)

A well-formed ``{"success": false, "output": ...}`` body is not an error at
this level. The backend sends such bodies with 4xx/5xx statuses for failed
commands, and the command sub-client turns them back into a
``CommandResult`` (see ``client._commands``).

Example:
    Catching any transport failure::

        try:
            listing = await client.directory.listing()
        except NetworkError as e:
            print(f"Failed to load directory: {e}")
"""

from typing import Any


class FSClientError(Exception):
    """Base exception for all filesystem client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class NetworkError(FSClientError):
    """The request did not produce a successful response.

    Raised for transport-level failures and for non-success HTTP statuses
    whose body cannot be read as a command result.
    """


class ConnectionError(NetworkError):
    """Failed to connect to the filesystem service.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception that caused the connection failure.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            url: The URL that failed to connect.
            cause: The underlying exception that caused the failure.
        """
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including URL if available."""
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(NetworkError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            timeout: The timeout value in seconds.
            url: The URL that timed out.
        """
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including timeout if available."""
        if self.timeout is not None:
            return f"{self.message} (timeout: {self.timeout}s)"
        return self.message


class APIError(NetworkError):
    """Server returned an error status.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        response_body: Parsed JSON body (or raw text) for inspection.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from the server.
            response_body: Parsed JSON body, or raw text if not JSON.
        """
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including status code."""
        return f"[HTTP {self.status_code}] {self.message}"


class NotFoundError(APIError):
    """Endpoint or resource not found (HTTP 404)."""

    def __init__(self, message: str, response_body: Any = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            response_body: Raw response body for debugging.
        """
        super().__init__(message=message, status_code=404, response_body=response_body)


class ServerError(APIError):
    """Server-side error (HTTP 5xx).

    If retry logic is enabled, 502/503/504 responses are retried before this
    is raised.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        response_body: Any = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message.
            status_code: The specific 5xx status code (default: 500).
            response_body: Raw response body for debugging.
        """
        super().__init__(
            message=message,
            status_code=status_code,
            response_body=response_body,
        )
