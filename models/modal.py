"""Modal dialog workflow models.

This module provides the dialog state machine used by the browser:
- ModalKind: Closed set of dialog kinds
- ModalState: The single open dialog and its in-progress input
- ModalWorkflowController: Transitions between dialogs and turns a confirmed
  dialog into a Command

The controller performs no I/O. Content reads for the view and write dialogs
are issued by the caller, which reports the outcome back with the revision
it was given; a result for a dialog that has since been closed or replaced
is ignored.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from client.models import DirectoryEntry
from models.command import Command

SHORTCUT_SUFFIX = "_shortcut"

EDITABLE_FIELDS = frozenset({"name", "link_name", "content"})


class ModalKind(str, Enum):
    """Closed set of dialog kinds."""

    NONE = "none"
    CREATE_FILE = "create_file"
    CREATE_FOLDER = "create_folder"
    CREATE_SHORTCUT = "create_shortcut"
    VIEW_FILE = "view_file"
    WRITE_FILE = "write_file"


class ModalState(BaseModel):
    """The open dialog, if any, and its in-progress input.

    Args:
        kind: Which dialog is open.
        target: Entry the dialog was opened on, if any.
        name: Primary field. File or folder name for creation dialogs, link
            target for the shortcut dialog, file name for view and write.
        link_name: Proposed link name (shortcut dialog only).
        content: File content (view and write dialogs).
        error: Inline read error shown by the view dialog.
        validation_message: Inline message for a rejected confirmation.
        focus: Field that should receive input focus.
        loading: Whether a content read is outstanding.
        revision: Identifies this dialog instance; bumped on every transition.
    """

    model_config = ConfigDict(frozen=True)

    kind: ModalKind = Field(default=ModalKind.NONE, description="Which dialog is open")
    target: Optional[DirectoryEntry] = Field(default=None, description="Entry the dialog acts on")
    name: str = Field(default="", description="Primary field")
    link_name: str = Field(default="", description="Proposed link name")
    content: str = Field(default="", description="File content")
    error: Optional[str] = Field(default=None, description="Inline read error")
    validation_message: Optional[str] = Field(default=None, description="Inline validation message")
    focus: Optional[str] = Field(default=None, description="Field to focus")
    loading: bool = Field(default=False, description="Whether a content read is outstanding")
    revision: int = Field(default=0, description="Dialog instance identifier")

    @property
    def is_open(self) -> bool:
        """Whether any dialog is open."""
        return self.kind is not ModalKind.NONE


class ModalWorkflowController:
    """State machine for the mutually exclusive dialogs.

    At most one dialog is open. Opening a dialog replaces whatever was open
    and discards its unsaved input. Every path out of a dialog leads back to
    ``ModalKind.NONE``.

    Examples:
        modals = ModalWorkflowController()
        modals.open_create_shortcut(entry)        # entry.name == "report.txt"
        modals.state.link_name                    # "report.txt_shortcut"
        command = modals.confirm()
        str(command)                              # "ln -s report.txt report.txt_shortcut"
        modals.state.kind                         # ModalKind.NONE
    """

    def __init__(self) -> None:
        self._revision = 0
        self._state = ModalState()

    @property
    def state(self) -> ModalState:
        """The current dialog state."""
        return self._state

    @property
    def is_open(self) -> bool:
        """Whether any dialog is open."""
        return self._state.is_open

    def _enter(self, kind: ModalKind, **fields) -> ModalState:
        self._revision += 1
        self._state = ModalState(kind=kind, revision=self._revision, **fields)
        return self._state

    def _replace(self, **fields) -> ModalState:
        self._state = self._state.model_copy(update=fields)
        return self._state

    # ===== Opening dialogs =====

    def open_create_file(self) -> ModalState:
        """Open the new-file dialog with an empty name."""
        return self._enter(ModalKind.CREATE_FILE, focus="name")

    def open_create_folder(self) -> ModalState:
        """Open the new-folder dialog with an empty name."""
        return self._enter(ModalKind.CREATE_FOLDER, focus="name")

    def open_create_shortcut(self, entry: DirectoryEntry) -> ModalState:
        """Open the shortcut dialog for an entry.

        The link target is the entry's name and the proposed link name is the
        entry's name with ``_shortcut`` appended.
        """
        return self._enter(
            ModalKind.CREATE_SHORTCUT,
            target=entry,
            name=entry.name,
            link_name=f"{entry.name}{SHORTCUT_SUFFIX}",
            focus="link_name",
        )

    def open_view(self, entry: DirectoryEntry) -> ModalState:
        """Open the file viewer for an entry and mark its content as loading.

        The caller reads the content and reports back through
        ``show_content`` or ``show_error`` with the returned revision.
        """
        return self._enter(
            ModalKind.VIEW_FILE,
            target=entry,
            name=entry.name,
            loading=True,
        )

    def open_write(
        self,
        name: str = "",
        content: str = "",
        target: Optional[DirectoryEntry] = None,
        loading: bool = False,
    ) -> ModalState:
        """Open the file editor.

        Args:
            name: File name to pre-fill.
            content: Initial editor content.
            target: Entry being edited, if opened from the browser.
            loading: Whether the caller is about to read existing content.

        Returns:
            The new dialog state.
        """
        return self._enter(
            ModalKind.WRITE_FILE,
            target=target,
            name=name,
            content=content,
            loading=loading,
            focus="content" if name else "name",
        )

    def edit(self) -> ModalState:
        """Switch from the file viewer to the editor for the same file.

        The editor starts with the content the viewer fetched; if that fetch
        failed or has not finished, it starts empty.

        Raises:
            RuntimeError: If the file viewer is not open.
        """
        state = self._state
        if state.kind is not ModalKind.VIEW_FILE:
            raise RuntimeError("No file is being viewed")
        content = state.content if state.error is None and not state.loading else ""
        return self.open_write(name=state.name, content=content, target=state.target)

    # ===== Read results =====

    def show_content(self, revision: int, content: str) -> bool:
        """Deliver fetched content to the dialog that asked for it.

        Args:
            revision: Revision returned when the dialog was opened.
            content: The fetched content.

        Returns:
            False if the dialog has since been closed or replaced.
        """
        if self._state.revision != revision or not self._state.loading:
            return False
        self._replace(content=content, error=None, loading=False)
        return True

    def show_error(self, revision: int, message: str) -> bool:
        """Report a failed read inside the dialog that asked for it.

        Returns:
            False if the dialog has since been closed or replaced.
        """
        if self._state.revision != revision or not self._state.loading:
            return False
        self._replace(content="", error=message, loading=False)
        return True

    # ===== Editing and closing =====

    def update(self, **fields: str) -> ModalState:
        """Record user input in the open dialog.

        Args:
            **fields: New values for ``name``, ``link_name`` or ``content``.

        Raises:
            RuntimeError: If no dialog is open.
            ValueError: If a field is not user-editable.
        """
        if not self.is_open:
            raise RuntimeError("No dialog is open")
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields are not editable: {sorted(unknown)}")
        return self._replace(**fields)

    def close(self) -> ModalState:
        """Close the open dialog without dispatching anything."""
        return self._enter(ModalKind.NONE)

    def _reject(self, message: str) -> None:
        self._replace(validation_message=message)

    def confirm(self) -> Optional[Command]:
        """Confirm the open dialog.

        A valid creation or write dialog is closed and its Command returned
        for dispatch. An empty required field leaves the dialog open with a
        validation message and returns None. The viewer has nothing to
        confirm.

        Returns:
            The synthesized Command, or None if nothing should be dispatched.
        """
        state = self._state
        name = state.name.strip()

        if state.kind is ModalKind.CREATE_FILE:
            if not name:
                self._reject("File name is required")
                return None
            command = Command(name="touch", args=(name,))
        elif state.kind is ModalKind.CREATE_FOLDER:
            if not name:
                self._reject("Folder name is required")
                return None
            command = Command(name="mkdir", args=(name,))
        elif state.kind is ModalKind.CREATE_SHORTCUT:
            link_name = state.link_name.strip()
            if not name:
                self._reject("Link target is required")
                return None
            if not link_name:
                self._reject("Link name is required")
                return None
            command = Command(name="ln", args=("-s", name, link_name))
        elif state.kind is ModalKind.WRITE_FILE:
            if not name:
                self._reject("File name is required")
                return None
            command = Command(name="write", args=(name, state.content))
        else:
            return None

        self.close()
        return command
