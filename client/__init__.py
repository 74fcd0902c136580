"""Filesystem service client library.

This module provides a typed async Python client for the HTTP/JSON
filesystem service that backs the browser session.

Example:
    Asynchronous usage::

        from client import AsyncFSClient

        async with AsyncFSClient(base_url="http://127.0.0.1:8080") as client:
            listing = await client.directory.listing()
            result = await client.commands.change_directory("docs")

Exports:
    AsyncFSClient: Asynchronous client for the filesystem service.

    Exceptions:
        FSClientError: Base exception for all client errors.
        NetworkError: Any transport or status failure.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error status.
        NotFoundError: Resource not found (HTTP 404).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._commands import AsyncCommandClient
from client._directory import AsyncDirectoryClient
from client.client import DEFAULT_BASE_URL, AsyncFSClient
from client.exceptions import (
    APIError,
    ConnectionError,
    FSClientError,
    NetworkError,
    NotFoundError,
    ServerError,
    TimeoutError,
)
from client.models import (
    PARENT_ENTRY_NAME,
    CommandRequest,
    CommandResult,
    DirectoryEntry,
    DirectoryListing,
)

__all__ = [
    # Main client
    "AsyncFSClient",
    "DEFAULT_BASE_URL",
    # Sub-clients
    "AsyncDirectoryClient",
    "AsyncCommandClient",
    # Exceptions
    "FSClientError",
    "NetworkError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "NotFoundError",
    "ServerError",
    # Models
    "PARENT_ENTRY_NAME",
    "CommandRequest",
    "CommandResult",
    "DirectoryEntry",
    "DirectoryListing",
]
