"""Terminal scrollback models.

This module provides:
- LineKind: Presentation tag for a terminal line
- TerminalLine: One immutable rendered line
- TerminalBuffer: Bounded, chronologically ordered scrollback
"""

from collections import deque
from enum import Enum
from typing import Callable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SCROLLBACK = 100


class LineKind(str, Enum):
    """Presentation tag for a terminal line. Carries no behavior."""

    SYSTEM = "system"
    INPUT = "input"
    OUTPUT = "output"
    ERROR = "error"


class TerminalLine(BaseModel):
    """One rendered terminal line.

    Args:
        text: Line text as displayed.
        kind: Presentation tag.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Line text as displayed")
    kind: LineKind = Field(default=LineKind.OUTPUT, description="Presentation tag")


class TerminalBuffer:
    """Bounded scrollback of terminal lines.

    Lines are kept in insertion order, which is the only ordering. When the
    buffer is full, the oldest line is evicted *before* the new one is
    added, so the length never exceeds ``capacity``, not even momentarily.

    Every append notifies ``on_append`` with the new line; the view uses it
    to scroll to the end so the newest line is always visible.

    Args:
        capacity: Maximum number of lines kept (default: 100).
        on_append: Called with each appended line.
        on_clear: Called after the buffer is emptied.

    Raises:
        ValueError: If capacity is not positive.

    Examples:
        buffer = TerminalBuffer(capacity=3)
        for i in range(5):
            buffer.write(f"line {i}")
        [line.text for line in buffer.render()]
        # ["line 2", "line 3", "line 4"]
    """

    def __init__(
        self,
        capacity: int = DEFAULT_SCROLLBACK,
        on_append: Optional[Callable[[TerminalLine], None]] = None,
        on_clear: Optional[Callable[[], None]] = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.on_append = on_append
        self.on_clear = on_clear
        self._lines: deque[TerminalLine] = deque()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[TerminalLine]:
        return iter(tuple(self._lines))

    def append(self, line: TerminalLine) -> None:
        """Append a line, evicting the oldest one first if the buffer is full.

        Args:
            line: The line to append.
        """
        if len(self._lines) >= self.capacity:
            self._lines.popleft()
        self._lines.append(line)
        if self.on_append is not None:
            self.on_append(line)

    def write(self, text: str, kind: LineKind = LineKind.OUTPUT) -> TerminalLine:
        """Build a TerminalLine and append it.

        Args:
            text: Line text.
            kind: Presentation tag.

        Returns:
            The appended line.
        """
        line = TerminalLine(text=text, kind=kind)
        self.append(line)
        return line

    def clear(self) -> None:
        """Remove every line."""
        self._lines.clear()
        if self.on_clear is not None:
            self.on_clear()

    def render(self) -> list[TerminalLine]:
        """Return the lines oldest first."""
        return list(self._lines)
