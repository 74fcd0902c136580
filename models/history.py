"""Command history with an up/down navigation cursor."""

from typing import Optional


class CommandHistoryNavigator:
    """Previously submitted command lines plus a navigation cursor.

    The cursor ranges over ``[0, len(entries)]``. Position ``len(entries)``
    is the empty-line state just past the newest entry; ``submit`` puts the
    cursor there, so the next ``previous`` lands on the line just submitted.

    Examples:
        history = CommandHistoryNavigator()
        history.submit("ls")
        history.submit("pwd")
        history.previous()  # "pwd"
        history.previous()  # "ls"
        history.previous()  # None (already at the oldest entry)
        history.next()      # "pwd"
        history.next()      # "" (fell off the end, input is cleared)
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor = 0

    @property
    def entries(self) -> tuple[str, ...]:
        """Submitted lines, oldest first."""
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        """Current navigation position."""
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    def submit(self, line: str) -> None:
        """Record a submitted line and reset the cursor past the end."""
        self._entries.append(line)
        self._cursor = len(self._entries)

    def reset_cursor(self) -> None:
        """Move the cursor back to the empty-line state."""
        self._cursor = len(self._entries)

    def previous(self) -> Optional[str]:
        """Step back one entry.

        Returns:
            The entry at the new cursor, or None if the cursor is already at
            the oldest entry (the input stays as it is).
        """
        if self._cursor <= 0:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def next(self) -> str:
        """Step forward one entry.

        Returns:
            The entry at the new cursor, or ``""`` once the cursor reaches the
            end of the history (the input is cleared).
        """
        if self._cursor < len(self._entries) - 1:
            self._cursor += 1
            return self._entries[self._cursor]
        self._cursor = len(self._entries)
        return ""
