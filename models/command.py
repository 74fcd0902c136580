"""Command model and the mutating-command policy."""

from pydantic import BaseModel, ConfigDict, Field

# Commands known to alter backend filesystem state. Dispatching any of these
# is followed by a directory refresh.
MUTATING_COMMANDS = frozenset({"mkdir", "touch", "rm", "rmdir", "cp", "write", "ln"})


class Command(BaseModel):
    """A command name plus its ordered arguments.

    Commands come from typed input (``Command.parse``) or are synthesized by
    UI workflows (dialogs, menus, double-clicks). Either way they travel the
    same dispatch path.

    Args:
        name: Command name, e.g. ``"mkdir"``.
        args: Arguments in order. Synthesized commands may carry arguments
            containing whitespace (file content for ``write``).

    Examples:
        Command.parse("ln  -s report.txt   link")
        # Command(name="ln", args=("-s", "report.txt", "link"))
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Command name")
    args: tuple[str, ...] = Field(default=(), description="Command arguments in order")

    @classmethod
    def parse(cls, line: str) -> "Command":
        """Parse a raw input line.

        Splits on whitespace and drops empty tokens; the first token is the
        command name.

        Args:
            line: Raw input line.

        Returns:
            The parsed Command.

        Raises:
            ValueError: If the line contains no tokens.
        """
        tokens = line.split()
        if not tokens:
            raise ValueError("Cannot parse an empty command line")
        return cls(name=tokens[0], args=tuple(tokens[1:]))

    @property
    def is_mutating(self) -> bool:
        """Whether this command is followed by a directory refresh."""
        return self.name in MUTATING_COMMANDS

    def __str__(self) -> str:
        return " ".join((self.name, *self.args))
