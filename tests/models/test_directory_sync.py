"""Tests for DirectorySyncClient against the scripted backend."""

import pytest

from client import AsyncFSClient, DirectoryListing, NetworkError
from models.directory_sync import DirectorySyncClient
from models.session import Session
from models.terminal import LineKind, TerminalBuffer
from tests.fixtures.transport import CD, COMMAND, DIRECTORY, TRANSPORT_FAULTS, ScriptedBackend, parent_entry


@pytest.fixture
def terminal() -> TerminalBuffer:
    return TerminalBuffer()


@pytest.fixture
def sync(fs_client: AsyncFSClient, terminal: TerminalBuffer) -> DirectorySyncClient:
    return DirectorySyncClient(Session(), fs_client, terminal)


# =============================================================================
# Refresh
# =============================================================================

class TestRefresh:
    async def test_replaces_path_and_entries(
        self, backend: ScriptedBackend, sync: DirectorySyncClient
    ) -> None:
        backend.path = "/home"
        backend.items = [parent_entry(), {"name": "notes.txt", "is_dir": False}]

        assert await sync.refresh() is True

        assert sync.session.current_path == "/home"
        assert [entry.name for entry in sync.entries] == ["..", "notes.txt"]
        assert sync.find("notes.txt").is_dir is False
        assert sync.find("missing") is None

    async def test_notifies_listener(self, fs_client: AsyncFSClient, terminal: TerminalBuffer) -> None:
        listings: list[DirectoryListing] = []
        sync = DirectorySyncClient(Session(), fs_client, terminal, on_refresh=listings.append)

        await sync.refresh()

        assert [listing.path for listing in listings] == ["/"]

    async def test_failure_keeps_previous_state(
        self, backend: ScriptedBackend, sync: DirectorySyncClient, terminal: TerminalBuffer
    ) -> None:
        backend.path = "/home"
        backend.items = [parent_entry(), {"name": "a", "is_dir": True}]
        await sync.refresh()
        before = sync.entries

        backend.path = "/elsewhere"
        backend.directory_status = 500
        assert await sync.refresh() is False

        assert sync.session.current_path == "/home"
        assert sync.entries == before
        last = terminal.render()[-1]
        assert last.kind is LineKind.ERROR
        assert last.text.startswith("Failed to load directory:")

    async def test_unreachable_is_reported(
        self, backend: ScriptedBackend, sync: DirectorySyncClient, terminal: TerminalBuffer
    ) -> None:
        backend.unreachable.add(DIRECTORY)

        assert await sync.refresh() is False
        assert terminal.render()[-1].kind is LineKind.ERROR
        assert sync.session.current_path == ""

    async def test_failure_does_not_notify(
        self, backend: ScriptedBackend, fs_client: AsyncFSClient, terminal: TerminalBuffer
    ) -> None:
        listings: list[DirectoryListing] = []
        sync = DirectorySyncClient(Session(), fs_client, terminal, on_refresh=listings.append)
        backend.directory_status = 503

        await sync.refresh()

        assert listings == []


# =============================================================================
# Change directory
# =============================================================================

class TestChangeDirectory:
    async def test_phases_in_order(
        self, backend: ScriptedBackend, sync: DirectorySyncClient, terminal: TerminalBuffer
    ) -> None:
        assert await sync.change_directory("docs") is True

        assert backend.paths == [CD, DIRECTORY, COMMAND]
        assert backend.requests[0] == (CD, "docs")
        assert backend.commands == [("pwd", [])]
        assert sync.session.current_path == "/docs"
        assert terminal.render()[-1].text == "/docs"
        assert terminal.render()[-1].kind is LineKind.OUTPUT

    async def test_refusal_skips_refresh(
        self, backend: ScriptedBackend, sync: DirectorySyncClient, terminal: TerminalBuffer
    ) -> None:
        await sync.refresh()
        backend.requests.clear()
        backend.cd_responses["nope"] = (400, {"success": False, "output": "no such directory"}, None)

        assert await sync.change_directory("nope") is False

        assert backend.paths == [CD]
        assert sync.session.current_path == "/"
        line = terminal.render()[-1]
        assert (line.text, line.kind) == ("no such directory", LineKind.ERROR)

    async def test_path_comes_from_listing(
        self, backend: ScriptedBackend, sync: DirectorySyncClient
    ) -> None:
        """The client never computes the new path; it takes the listing's."""
        backend.cd_responses[".."] = (200, {"success": True, "output": ""}, "/")
        backend.path = "/home/user"

        await sync.change_directory("..")

        assert sync.session.current_path == "/"

    async def test_transport_failure_propagates(
        self, backend: ScriptedBackend, sync: DirectorySyncClient
    ) -> None:
        backend.unreachable.add(CD)

        with pytest.raises(NetworkError):
            await sync.change_directory("docs")
        assert backend.paths == [CD]

    async def test_echo_path_failure_is_error_line(
        self, backend: ScriptedBackend, sync: DirectorySyncClient, terminal: TerminalBuffer
    ) -> None:
        backend.command_responses["pwd"] = (400, {"success": False, "output": "pwd failed"})

        await sync.echo_path()

        line = terminal.render()[-1]
        assert (line.text, line.kind) == ("pwd failed", LineKind.ERROR)


class TestTransportFailures:
    @pytest.mark.parametrize("fault", TRANSPORT_FAULTS)
    async def test_refresh_failure_is_one_error_line(
        self,
        backend: ScriptedBackend,
        sync: DirectorySyncClient,
        terminal: TerminalBuffer,
        fault,
    ) -> None:
        await sync.refresh()
        before = sync.entries
        backend.faults[DIRECTORY] = fault

        assert await sync.refresh() is False

        lines = terminal.render()
        assert len(lines) == 1
        assert lines[0].kind is LineKind.ERROR
        assert lines[0].text.startswith("Failed to load directory:")
        assert sync.session.current_path == "/"
        assert sync.entries == before

    @pytest.mark.parametrize("fault", TRANSPORT_FAULTS)
    async def test_refresh_recovers(
        self, backend: ScriptedBackend, sync: DirectorySyncClient, fault
    ) -> None:
        backend.faults[DIRECTORY] = fault
        await sync.refresh()
        del backend.faults[DIRECTORY]

        assert await sync.refresh() is True
        assert sync.session.current_path == "/"

    @pytest.mark.parametrize("fault", TRANSPORT_FAULTS)
    async def test_change_directory_raises_network_error(
        self, backend: ScriptedBackend, sync: DirectorySyncClient, fault
    ) -> None:
        backend.faults[CD] = fault

        with pytest.raises(NetworkError):
            await sync.change_directory("docs")
