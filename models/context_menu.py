"""Context menu state machine for the directory browser."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from client.models import DirectoryEntry


class ContextMenuKind(str, Enum):
    """Which context menu is showing."""

    HIDDEN = "hidden"
    BACKGROUND = "background"
    ITEM = "item"


class MenuAction(str, Enum):
    """Actions offered by the two context menus."""

    # Background menu
    NEW_FILE = "new_file"
    NEW_FOLDER = "new_folder"
    REFRESH = "refresh"
    # Item menu
    OPEN = "open"
    VIEW = "view"
    EDIT = "edit"
    CREATE_SHORTCUT = "create_shortcut"
    DELETE = "delete"


BACKGROUND_ACTIONS = (MenuAction.NEW_FILE, MenuAction.NEW_FOLDER, MenuAction.REFRESH)
ITEM_ACTIONS = (
    MenuAction.OPEN,
    MenuAction.VIEW,
    MenuAction.EDIT,
    MenuAction.CREATE_SHORTCUT,
    MenuAction.DELETE,
)


class ContextMenuState(BaseModel):
    """The visible context menu, where it is, and what it was opened on.

    Args:
        kind: Which menu is showing.
        x: Pointer x coordinate at the right-click.
        y: Pointer y coordinate at the right-click.
        target: Entry the item menu was opened on.
    """

    model_config = ConfigDict(frozen=True)

    kind: ContextMenuKind = Field(default=ContextMenuKind.HIDDEN, description="Visible menu")
    x: int = Field(default=0, description="Pointer x coordinate")
    y: int = Field(default=0, description="Pointer y coordinate")
    target: Optional[DirectoryEntry] = Field(default=None, description="Entry under the pointer")

    @property
    def actions(self) -> tuple[MenuAction, ...]:
        """Actions offered by the visible menu."""
        if self.kind is ContextMenuKind.BACKGROUND:
            return BACKGROUND_ACTIONS
        if self.kind is ContextMenuKind.ITEM:
            return ITEM_ACTIONS
        return ()


class ContextMenuController:
    """Shows and dismisses the background and item context menus.

    Only one menu is visible at a time. Right-clicking the parent-navigation
    entry does nothing at all.
    """

    def __init__(self) -> None:
        self._state = ContextMenuState()

    @property
    def state(self) -> ContextMenuState:
        """The current menu state."""
        return self._state

    @property
    def is_visible(self) -> bool:
        """Whether a menu is showing."""
        return self._state.kind is not ContextMenuKind.HIDDEN

    def right_click(self, x: int, y: int, entry: Optional[DirectoryEntry] = None) -> ContextMenuState:
        """Handle a right-click inside the browser area.

        Args:
            x: Pointer x coordinate.
            y: Pointer y coordinate.
            entry: Entry under the pointer, or None for empty background.

        Returns:
            The resulting menu state.
        """
        if entry is None:
            self._state = ContextMenuState(kind=ContextMenuKind.BACKGROUND, x=x, y=y)
        elif not entry.is_parent:
            self._state = ContextMenuState(kind=ContextMenuKind.ITEM, x=x, y=y, target=entry)
        return self._state

    def primary_click(self, inside_menu: bool = False) -> ContextMenuState:
        """Handle a primary click; clicks outside the visible menu dismiss it."""
        if not inside_menu:
            self.hide()
        return self._state

    def escape(self) -> ContextMenuState:
        """Dismiss any visible menu."""
        return self.hide()

    def hide(self) -> ContextMenuState:
        """Return to the hidden state."""
        self._state = ContextMenuState()
        return self._state
