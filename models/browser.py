"""Browser session controller.

BrowserSession is the single owner of all client state for one page
lifetime: the Session, the terminal scrollback, the directory listing and
the two UI state machines. Front-ends call its methods for every gesture or
keystroke; every gesture that changes backend state is turned into a
Command and sent down the one dispatch path.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from client.exceptions import FSClientError
from client.models import DirectoryEntry, DirectoryListing
from models.command import Command
from models.context_menu import ContextMenuController, ContextMenuState, MenuAction
from models.directory_sync import DirectorySyncClient
from models.dispatcher import CommandDispatcher, DispatchKind
from models.modal import ModalState, ModalWorkflowController
from models.session import Session
from models.terminal import DEFAULT_SCROLLBACK, LineKind, TerminalBuffer, TerminalLine

if TYPE_CHECKING:
    from client.client import AsyncFSClient

logger = logging.getLogger(__name__)

WELCOME_LINES = (
    "Welcome to the Ext2 filesystem browser!",
    'Type "help" or "?" for a list of available commands.',
)


class BrowserSession:
    """Wires the session core together for one active session.

    Attributes:
        session: Current path and command history.
        terminal: Terminal scrollback.
        sync: Directory listing and change-directory protocol.
        modals: Dialog state machine.
        menu: Context menu state machine.
        dispatcher: The single command dispatch path.
        input_text: Current content of the terminal input field.

    Example:
        async with AsyncFSClient() as client:
            browser = BrowserSession(client, on_line=print_line)
            await browser.start()
            await browser.submit("mkdir docs")
    """

    def __init__(
        self,
        client: "AsyncFSClient",
        scrollback: int = DEFAULT_SCROLLBACK,
        on_line: Optional[Callable[[TerminalLine], None]] = None,
        on_refresh: Optional[Callable[[DirectoryListing], None]] = None,
        on_clear: Optional[Callable[[], None]] = None,
    ) -> None:
        """Create the session and its components.

        Args:
            client: Filesystem service client.
            scrollback: Terminal capacity in lines.
            on_line: Called with every appended terminal line.
            on_refresh: Called with every new directory listing.
            on_clear: Called after the terminal is cleared.
        """
        self.session = Session()
        self.terminal = TerminalBuffer(capacity=scrollback, on_append=on_line, on_clear=on_clear)
        self.sync = DirectorySyncClient(self.session, client, self.terminal, on_refresh=on_refresh)
        self.modals = ModalWorkflowController()
        self.menu = ContextMenuController()
        self.dispatcher = CommandDispatcher(client, self.terminal, self.sync, self.modals)
        self.input_text = ""

    @property
    def prompt(self) -> str:
        """Terminal prompt for the current path."""
        return self.session.prompt

    @property
    def current_path(self) -> str:
        """Backend's current directory, as last reported."""
        return self.session.current_path

    @property
    def entries(self) -> tuple[DirectoryEntry, ...]:
        """Entries of the current directory."""
        return self.sync.entries

    async def start(self) -> None:
        """Greet the user and load the initial listing."""
        for text in WELCOME_LINES:
            self.terminal.write(text, LineKind.SYSTEM)
        await self.sync.refresh()
        logger.info(f"Session started at {self.session.current_path or '<unknown>'}")

    # ===== Terminal input =====

    async def submit(self, line: Optional[str] = None) -> Optional[DispatchKind]:
        """Submit a command line.

        Blank lines are ignored. Otherwise the line is echoed with the prompt,
        recorded in history and dispatched. The input field is cleared once
        the dispatch settles, unless the user has typed something new in the
        meantime.

        Args:
            line: Line to submit; defaults to the current input text.

        Returns:
            The route the command took, or None for a blank line.
        """
        submitted = self.input_text
        text = (submitted if line is None else line).strip()
        if not text:
            self.input_text = ""
            return None

        self.terminal.write(f"{self.session.prompt}{text}", LineKind.INPUT)
        self.session.history.submit(text)
        try:
            return await self.dispatcher.dispatch(Command.parse(text))
        finally:
            if self.input_text == submitted:
                self.input_text = ""

    def history_previous(self) -> str:
        """Recall the previous history entry into the input field."""
        entry = self.session.history.previous()
        if entry is not None:
            self.input_text = entry
        return self.input_text

    def history_next(self) -> str:
        """Recall the next history entry, or clear the input past the end."""
        self.input_text = self.session.history.next()
        return self.input_text

    # ===== Browser gestures =====

    async def refresh(self) -> bool:
        """Re-fetch the directory listing."""
        return await self.sync.refresh()

    async def double_click(self, entry: DirectoryEntry) -> None:
        """Open an entry: enter directories, view everything else."""
        if entry.is_dir:
            await self.dispatcher.dispatch(Command(name="cd", args=(entry.name,)))
        else:
            await self.view(entry)

    async def view(self, entry: DirectoryEntry) -> ModalState:
        """Open the file viewer and load the entry's content into it.

        A failed read is shown inside the viewer, not in the terminal.
        """
        state = self.modals.open_view(entry)
        try:
            result = await self.dispatcher.read(entry.name)
        except FSClientError as e:
            self.modals.show_error(state.revision, str(e))
        else:
            if result.success:
                self.modals.show_content(state.revision, result.output)
            else:
                self.modals.show_error(state.revision, result.output)
        return self.modals.state

    def right_click(self, x: int, y: int, entry: Optional[DirectoryEntry] = None) -> ContextMenuState:
        """Show the background menu, or the item menu for ``entry``."""
        return self.menu.right_click(x, y, entry)

    def primary_click(self, inside_menu: bool = False) -> ContextMenuState:
        """Dismiss the context menu unless the click landed inside it."""
        return self.menu.primary_click(inside_menu)

    def escape(self) -> None:
        """Dismiss the context menu and close any dialog."""
        self.menu.escape()
        if self.modals.is_open:
            self.modals.close()

    async def menu_action(self, action: MenuAction) -> None:
        """Carry out a context menu action and hide the menu.

        Raises:
            ValueError: If an item action is chosen without a target entry.
        """
        target = self.menu.state.target
        self.menu.hide()

        if action is MenuAction.NEW_FILE:
            self.modals.open_create_file()
            return
        if action is MenuAction.NEW_FOLDER:
            self.modals.open_create_folder()
            return
        if action is MenuAction.REFRESH:
            await self.sync.refresh()
            return

        if target is None:
            raise ValueError(f"{action.value} needs a target entry")

        # Directories have no content to view or edit; open them instead.
        if action is MenuAction.OPEN or (target.is_dir and action in (MenuAction.VIEW, MenuAction.EDIT)):
            await self.double_click(target)
        elif action is MenuAction.VIEW:
            await self.view(target)
        elif action is MenuAction.EDIT:
            await self.dispatcher.open_editor(target.name, target=target)
        elif action is MenuAction.CREATE_SHORTCUT:
            self.modals.open_create_shortcut(target)
        elif action is MenuAction.DELETE:
            name = "rmdir" if target.is_dir and not target.is_symlink else "rm"
            await self.dispatcher.dispatch(Command(name=name, args=(target.name,)))

    # ===== Dialogs =====

    def update_modal(self, **fields: str) -> ModalState:
        """Record user input in the open dialog."""
        return self.modals.update(**fields)

    def edit_viewed_file(self) -> ModalState:
        """Switch from the file viewer to the editor."""
        return self.modals.edit()

    async def confirm_modal(self) -> Optional[Command]:
        """Confirm the open dialog and dispatch the resulting command.

        Returns:
            The dispatched command, or None if the dialog rejected the input
            or had nothing to confirm.
        """
        command = self.modals.confirm()
        if command is not None:
            await self.dispatcher.dispatch(command)
        return command

    def close_modal(self) -> ModalState:
        """Close the open dialog without dispatching anything."""
        return self.modals.close()
