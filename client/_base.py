"""Base class for the filesystem sub-clients.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient


class AsyncBaseClient:
    """Base class for asynchronous sub-clients.

    The endpoint-specific clients (AsyncDirectoryClient, AsyncCommandClient)
    inherit from this class and share one HTTP client.

    Attributes:
        _http: The shared async HTTP client for making requests.
    """

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        """Initialize the async sub-client.

        Args:
            http_client: The shared async HTTP client instance.
        """
        self._http = http_client

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make an async GET request and return the parsed JSON response."""
        return await self._http.get(path, params=params)

    async def _post(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an async POST request and return the parsed JSON response."""
        return await self._http.post(path, json=json, params=params)
