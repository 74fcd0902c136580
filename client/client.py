"""Main filesystem client class.

This module provides AsyncFSClient, the entry point for talking to the
filesystem service. Endpoint groups are exposed as sub-client properties
(``client.directory``, ``client.commands``).

Example:
    Asynchronous usage::

        from client import AsyncFSClient

        async with AsyncFSClient(base_url="http://127.0.0.1:8080") as client:
            listing = await client.directory.listing()
            result = await client.commands.execute("mkdir", ["docs"])
"""

from typing import Any

from client._commands import AsyncCommandClient
from client._directory import AsyncDirectoryClient
from client._http import AsyncHTTPClient

DEFAULT_BASE_URL = "http://127.0.0.1:8080"


class AsyncFSClient:
    """Asynchronous client for the filesystem service.

    Attributes:
        base_url: The base URL of the filesystem service.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the filesystem service.
            timeout: Request timeout in seconds (default: 30.0).
            retry_enabled: Whether to retry on connection errors, timeouts
                and HTTP 502/503/504 with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom async HTTP transport (e.g., ASGITransport for testing).
        """
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        self._directory: AsyncDirectoryClient | None = None
        self._commands: AsyncCommandClient | None = None

    async def __aenter__(self) -> "AsyncFSClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager and close the client."""
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def base_url(self) -> str:
        """The base URL of the filesystem service."""
        return self._http.base_url

    @property
    def timeout(self) -> float:
        """Request timeout in seconds."""
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        """Whether automatic retry is enabled."""
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        """Maximum number of retry attempts."""
        return self._http.max_retries

    # Sub-client properties (lazy initialization)

    @property
    def directory(self) -> AsyncDirectoryClient:
        """Access the directory listing endpoint (/api/directory)."""
        if self._directory is None:
            self._directory = AsyncDirectoryClient(self._http)
        return self._directory

    @property
    def commands(self) -> AsyncCommandClient:
        """Access the change-directory and command endpoints (/api/cd, /api/command)."""
        if self._commands is None:
            self._commands = AsyncCommandClient(self._http)
        return self._commands
