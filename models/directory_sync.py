"""Directory synchronization with the backend.

DirectorySyncClient keeps the session's current path and the browser's
entry list in step with the backend. It owns the two round-trips that touch
"where am I": the listing refresh and the change-directory protocol.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from client.exceptions import FSClientError
from client.models import DirectoryEntry, DirectoryListing
from models.session import Session
from models.terminal import LineKind, TerminalBuffer

if TYPE_CHECKING:
    from client.client import AsyncFSClient

logger = logging.getLogger(__name__)

PATH_QUERY_COMMAND = "pwd"


class DirectorySyncClient:
    """Holds the current listing and performs the refresh round-trip.

    Args:
        session: Session whose ``current_path`` this client maintains.
        client: Filesystem service client.
        terminal: Where failures and the path echo are written.
        on_refresh: Called with each new listing; the view re-renders from
            the top.
    """

    def __init__(
        self,
        session: Session,
        client: "AsyncFSClient",
        terminal: TerminalBuffer,
        on_refresh: Optional[Callable[[DirectoryListing], None]] = None,
    ) -> None:
        self.session = session
        self.on_refresh = on_refresh
        self._client = client
        self._terminal = terminal
        self._entries: tuple[DirectoryEntry, ...] = ()

    @property
    def entries(self) -> tuple[DirectoryEntry, ...]:
        """Entries from the last successful refresh, in backend order."""
        return self._entries

    def find(self, name: str) -> Optional[DirectoryEntry]:
        """Look up an entry of the current listing by name."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    async def refresh(self) -> bool:
        """Re-fetch the listing and replace path and entries together.

        A failed fetch leaves the previous path and entries in place and is
        reported as an error line.

        Returns:
            True if the listing was replaced.
        """
        try:
            listing = await self._client.directory.listing()
        except FSClientError as e:
            logger.warning(f"Directory refresh failed: {e}")
            self._terminal.write(f"Failed to load directory: {e}", LineKind.ERROR)
            return False

        self.session.current_path = listing.path
        self._entries = tuple(listing.items)
        logger.debug(f"Refreshed {listing.path}: {len(self._entries)} entries")

        if self.on_refresh is not None:
            self.on_refresh(listing)
        return True

    async def change_directory(self, target: str) -> bool:
        """Change the backend's directory, then resynchronize.

        Phases, strictly in order:

        1. Send the change-directory request with the raw target.
        2. On success, refresh the listing.
        3. Then echo the resulting path by running the path query, so the
           user sees the post-change state confirmed in the terminal.

        On a reported failure, the backend's message is written as an error
        line and nothing is refreshed.

        Args:
            target: Target path exactly as typed or clicked.

        Returns:
            True if the backend reported success.

        Raises:
            NetworkError: If the change-directory request or the path query
                fails at the transport level.
        """
        result = await self._client.commands.change_directory(target)
        if not result.success:
            logger.debug(f"cd {target!r} refused: {result.output}")
            self._terminal.write(result.output, LineKind.ERROR)
            return False

        await self.refresh()
        await self.echo_path()
        logger.info(f"Changed directory to {self.session.current_path}")
        return True

    async def echo_path(self) -> None:
        """Run the path query and write its result to the terminal."""
        result = await self._client.commands.execute(PATH_QUERY_COMMAND)
        self._terminal.write(result.output, LineKind.OUTPUT if result.success else LineKind.ERROR)
