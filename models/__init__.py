"""Browser session models package.

This package contains the client-side session core: the command model, the
terminal scrollback, command history, directory synchronization, command
dispatch, the dialog and context menu state machines, and the
BrowserSession controller that owns them all.
"""

from models.browser import WELCOME_LINES, BrowserSession
from models.command import MUTATING_COMMANDS, Command
from models.context_menu import (
    ContextMenuController,
    ContextMenuKind,
    ContextMenuState,
    MenuAction,
)
from models.directory_sync import DirectorySyncClient
from models.dispatcher import CommandDispatcher, DispatchKind
from models.history import CommandHistoryNavigator
from models.modal import ModalKind, ModalState, ModalWorkflowController
from models.session import Session
from models.terminal import DEFAULT_SCROLLBACK, LineKind, TerminalBuffer, TerminalLine

__all__ = [
    "BrowserSession",
    "WELCOME_LINES",
    "Command",
    "MUTATING_COMMANDS",
    "CommandDispatcher",
    "DispatchKind",
    "CommandHistoryNavigator",
    "ContextMenuController",
    "ContextMenuKind",
    "ContextMenuState",
    "MenuAction",
    "DirectorySyncClient",
    "ModalKind",
    "ModalState",
    "ModalWorkflowController",
    "Session",
    "DEFAULT_SCROLLBACK",
    "LineKind",
    "TerminalBuffer",
    "TerminalLine",
]
