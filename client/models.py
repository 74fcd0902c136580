"""Wire models for the filesystem service API.

These mirror the JSON bodies exchanged with the backend:

- ``GET /api/directory`` -> ``DirectoryListing``
- ``POST /api/cd`` (body: JSON string) -> ``CommandResult``
- ``POST /api/command`` (body: ``CommandRequest``) -> ``CommandResult``
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PARENT_ENTRY_NAME = ".."

__all__ = [
    "PARENT_ENTRY_NAME",
    "CommandRequest",
    "CommandResult",
    "DirectoryEntry",
    "DirectoryListing",
]


class DirectoryEntry(BaseModel):
    """One filesystem object in the current directory.

    The parent-navigation entry (``name == ".."``) is supplied by the backend
    like any other entry; the client never synthesizes it.

    Attributes:
        name: Entry name within the directory.
        is_dir: Whether the entry is (or resolves to) a directory.
        is_symlink: Whether the entry is a symbolic link.
        size: Display size as reported by the backend.
        owner: Owning user name.
        mode: Permission string.
        create_time: Creation timestamp as reported by the backend.
        edit_time: Last modification timestamp as reported by the backend.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Entry name within the directory")
    is_dir: bool = Field(description="Whether the entry is a directory")
    is_symlink: bool = Field(default=False, description="Whether the entry is a symlink")
    size: Optional[Union[int, str]] = Field(default=None, description="Display size")
    owner: Optional[str] = Field(default=None, description="Owning user name")
    mode: Optional[str] = Field(default=None, description="Permission string")
    create_time: Optional[str] = Field(default=None, description="Creation time")
    edit_time: Optional[str] = Field(default=None, description="Modification time")

    @property
    def is_parent(self) -> bool:
        """Whether this is the parent-navigation entry."""
        return self.name == PARENT_ENTRY_NAME


class DirectoryListing(BaseModel):
    """Response body of ``GET /api/directory``.

    Attributes:
        path: Absolute path of the current directory.
        items: Entries of the current directory, in backend order.
    """

    path: str = Field(description="Absolute path of the current directory")
    items: list[DirectoryEntry] = Field(
        default_factory=list, description="Entries of the current directory"
    )


class CommandRequest(BaseModel):
    """Request body of ``POST /api/command``."""

    cmd: str = Field(description="Command name")
    args: list[str] = Field(default_factory=list, description="Command arguments")


class CommandResult(BaseModel):
    """Response body of ``POST /api/cd`` and ``POST /api/command``.

    ``success=False`` is a remote failure: the backend understood the request
    and refused or failed it. It is reported, not raised.

    Attributes:
        success: Whether the backend reports success.
        output: Command output, or the failure message.
    """

    success: bool = Field(description="Whether the backend reports success")
    output: str = Field(default="", description="Command output or failure message")
