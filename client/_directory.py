"""Directory listing sub-client.

This module provides AsyncDirectoryClient for the ``/api/directory``
endpoint.

This is an internal module. Import from `client` instead.
"""

from pydantic import ValidationError as PydanticValidationError

from client._base import AsyncBaseClient
from client.exceptions import NetworkError
from client.models import DirectoryListing


class AsyncDirectoryClient(AsyncBaseClient):
    """Async client for the directory listing endpoint.

    Example:
        async with AsyncFSClient() as client:
            listing = await client.directory.listing()
            for entry in listing.items:
                print(entry.name, "/" if entry.is_dir else "")
    """

    _BASE_PATH = "/api/directory"

    async def listing(self) -> DirectoryListing:
        """Fetch the current directory and its entries.

        Returns:
            DirectoryListing with the backend's current path and items.

        Raises:
            NetworkError: If the request fails, returns a non-success status,
                or the body is not a directory listing.
        """
        data = await self._get(self._BASE_PATH)
        try:
            return DirectoryListing.model_validate(data)
        except PydanticValidationError as e:
            raise NetworkError(f"Malformed directory listing: {e.error_count()} error(s)") from e
