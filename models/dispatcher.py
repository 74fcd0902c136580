"""Command dispatch.

Every input source (typed lines, double-clicks, context menu actions,
confirmed dialogs) ends up here as a Command. The dispatcher decides whether
the command is handled locally, is a directory change, or runs on the
backend, and whether a directory refresh follows.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Optional

from client.exceptions import FSClientError
from client.models import CommandResult, DirectoryEntry
from models.command import Command
from models.directory_sync import DirectorySyncClient
from models.modal import ModalWorkflowController
from models.terminal import LineKind, TerminalBuffer

if TYPE_CHECKING:
    from client.client import AsyncFSClient

logger = logging.getLogger(__name__)

READ_COMMAND = "cat"


class DispatchKind(str, Enum):
    """Route a command takes through the dispatcher."""

    LOCAL = "local"
    DIRECTORY_CHANGE = "directory_change"
    REMOTE = "remote"


class CommandDispatcher:
    """Routes commands to local handling, the cd protocol, or the backend.

    Routing:
        - ``clear``: empties the terminal. No network call.
        - ``write`` with zero or one argument: opens the editor dialog,
          pre-filled with the named file's current content when a name is
          given.
        - ``cd``: the change-directory protocol of DirectorySyncClient.
        - Anything else: executed by the backend. The output is written as
          an output or error line depending on the reported success flag.
          Mutating commands are followed by a refresh whether or not the
          backend reported success, since a partially applied command may
          still have changed backend state.

    Transport failures are written to the terminal as error lines and never
    escape ``dispatch``.

    Args:
        client: Filesystem service client.
        terminal: Terminal the results are written to.
        sync: Directory synchronization client.
        modals: Dialog controller used by the local ``write`` command.
    """

    def __init__(
        self,
        client: "AsyncFSClient",
        terminal: TerminalBuffer,
        sync: DirectorySyncClient,
        modals: ModalWorkflowController,
    ) -> None:
        self._client = client
        self._terminal = terminal
        self._sync = sync
        self._modals = modals

    @staticmethod
    def classify(command: Command) -> DispatchKind:
        """Decide which route a command takes."""
        if command.name == "clear":
            return DispatchKind.LOCAL
        if command.name == "write" and len(command.args) <= 1:
            return DispatchKind.LOCAL
        if command.name == "cd":
            return DispatchKind.DIRECTORY_CHANGE
        return DispatchKind.REMOTE

    async def dispatch(self, command: Command) -> DispatchKind:
        """Run a command along its route.

        Args:
            command: The command to run.

        Returns:
            The route the command took.
        """
        kind = self.classify(command)
        logger.debug(f"Dispatching {command} via {kind.value}")
        try:
            if kind is DispatchKind.LOCAL:
                await self._run_local(command)
            elif kind is DispatchKind.DIRECTORY_CHANGE:
                target = command.args[0] if command.args else ""
                await self._sync.change_directory(target)
            else:
                await self._run_remote(command)
        except FSClientError as e:
            logger.warning(f"{command.name} failed: {e}")
            self._terminal.write(f"Command failed: {e}", LineKind.ERROR)
        return kind

    async def _run_local(self, command: Command) -> None:
        if command.name == "clear":
            self._terminal.clear()
            return
        await self.open_editor(command.args[0] if command.args else "")

    async def _run_remote(self, command: Command) -> None:
        result = await self._client.commands.execute(command.name, command.args)
        self._terminal.write(result.output, LineKind.OUTPUT if result.success else LineKind.ERROR)
        if command.is_mutating:
            await self._sync.refresh()

    async def read(self, name: str) -> CommandResult:
        """Read a file's content through the backend's read command.

        Raises:
            NetworkError: If the request fails at the transport level.
        """
        return await self._client.commands.execute(READ_COMMAND, [name])

    async def open_editor(self, name: str = "", target: Optional[DirectoryEntry] = None) -> None:
        """Open the editor dialog, pre-filled with the file's current content.

        A failed read is not reported; the editor simply starts empty.

        Args:
            name: File to edit. Empty opens a blank editor.
            target: Entry being edited, if opened from the browser.
        """
        state = self._modals.open_write(name=name, target=target, loading=bool(name))
        if not name:
            return

        content = ""
        try:
            result = await self.read(name)
        except FSClientError as e:
            logger.debug(f"Could not pre-read {name}: {e}")
        else:
            if result.success:
                content = result.output
        self._modals.show_content(state.revision, content)
