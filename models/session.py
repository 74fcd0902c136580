"""Session state model."""

from pydantic import BaseModel, ConfigDict, Field

from models.history import CommandHistoryNavigator


class Session(BaseModel):
    """The single live client state for one browser session.

    ``current_path`` is only ever overwritten from a backend directory
    listing; the client never computes paths itself.

    Args:
        current_path: Backend's current directory, as last reported.
        history: Submitted command lines and the navigation cursor.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    current_path: str = Field(default="", description="Backend's current directory")
    history: CommandHistoryNavigator = Field(
        default_factory=CommandHistoryNavigator,
        description="Submitted command lines and navigation cursor",
    )

    @property
    def prompt(self) -> str:
        """Terminal prompt for the current path, e.g. ``[/home]$ ``."""
        return f"[{self.current_path}]$ "
