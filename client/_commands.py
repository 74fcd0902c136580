"""Command execution sub-client.

This module provides AsyncCommandClient for the ``/api/cd`` and
``/api/command`` endpoints.

The backend answers a failed command with an error status *and* a
well-formed ``{"success": false, "output": ...}`` body. That combination is
a remote failure, not a transport failure, so it is returned as a
``CommandResult`` rather than raised.

This is an internal module. Import from `client` instead.
"""

from typing import Any, Sequence

from pydantic import ValidationError as PydanticValidationError

from client._base import AsyncBaseClient
from client.exceptions import APIError, NetworkError
from client.models import CommandRequest, CommandResult


def _result_from_error(error: APIError) -> CommandResult | None:
    """Recover a command result from an error response body, if it has one.

    Args:
        error: The APIError raised for the response.

    Returns:
        The CommandResult carried by the body, or None if the body is not one.
    """
    body: Any = error.response_body
    if not isinstance(body, dict) or "success" not in body:
        return None
    try:
        return CommandResult.model_validate(body)
    except PydanticValidationError:
        return None


class AsyncCommandClient(AsyncBaseClient):
    """Async client for directory changes and generic command execution.

    Example:
        async with AsyncFSClient() as client:
            result = await client.commands.execute("mkdir", ["docs"])
            if not result.success:
                print(result.output)
    """

    _CD_PATH = "/api/cd"
    _COMMAND_PATH = "/api/command"

    async def _post_command(self, path: str, body: Any) -> CommandResult:
        try:
            data = await self._post(path, json=body)
        except APIError as e:
            result = _result_from_error(e)
            if result is None:
                raise
            return result
        try:
            return CommandResult.model_validate(data)
        except PydanticValidationError as e:
            raise NetworkError(f"Malformed command result: {e.error_count()} error(s)") from e

    async def change_directory(self, target: str) -> CommandResult:
        """Ask the backend to change its current directory.

        Args:
            target: Raw target path, sent as a JSON string literal.

        Returns:
            CommandResult; on success ``output`` is the new path.

        Raises:
            NetworkError: If the request fails without a command result body.
        """
        return await self._post_command(self._CD_PATH, target)

    async def execute(self, cmd: str, args: Sequence[str] = ()) -> CommandResult:
        """Run a command on the backend.

        Args:
            cmd: Command name.
            args: Command arguments, passed through unchanged.

        Returns:
            CommandResult with the success flag and output.

        Raises:
            NetworkError: If the request fails without a command result body.
        """
        request = CommandRequest(cmd=cmd, args=list(args))
        return await self._post_command(self._COMMAND_PATH, request.model_dump())
