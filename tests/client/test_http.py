"""Unit tests for the client HTTP utilities.

This module tests the HTTP handling layer defined in client/_http.py:

1. Helper functions:
   - _parse_error_response: Extracting a message from error bodies
   - _raise_for_status: Mapping HTTP status codes to exception types
   - _calculate_backoff: Exponential backoff calculation

2. AsyncHTTPClient:
   - Initialization and async context manager support
   - GET/POST requests, including bare JSON string bodies
   - Error and transport failure mapping
   - Retry logic

Note: These tests use httpx's mock transport to avoid real network calls.
"""

import json

import httpx
import pytest

from client._http import (
    DEFAULT_RETRY_BACKOFF_BASE,
    DEFAULT_RETRY_BACKOFF_MAX,
    AsyncHTTPClient,
    _calculate_backoff,
    _parse_error_response,
    _raise_for_status,
)
from client.exceptions import (
    APIError,
    ConnectionError,
    NetworkError,
    NotFoundError,
    ServerError,
    TimeoutError,
)


def make_client(handler, **kwargs) -> AsyncHTTPClient:
    """Build an AsyncHTTPClient whose requests go to ``handler``."""
    return AsyncHTTPClient(
        base_url="http://localhost:8080",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


@pytest.fixture
def no_backoff(monkeypatch):
    """Make retries immediate."""
    monkeypatch.setattr("client._http._calculate_backoff", lambda attempt: 0)


# =============================================================================
# Helper Function Tests: _parse_error_response
# =============================================================================

class TestParseErrorResponse:
    """Tests for _parse_error_response."""

    def test_command_result_output(self) -> None:
        """A failed command body yields its output."""
        response = httpx.Response(400, json={"success": False, "output": "no such directory"})
        assert _parse_error_response(response) == "no such directory"

    def test_detail_string(self) -> None:
        response = httpx.Response(404, json={"detail": "Not Found"})
        assert _parse_error_response(response) == "Not Found"

    def test_bare_json_string(self) -> None:
        """The service reports some internal errors as a bare JSON string."""
        response = httpx.Response(500, json="failed to read current path")
        assert _parse_error_response(response) == "failed to read current path"

    def test_plain_text(self) -> None:
        response = httpx.Response(502, text="Bad Gateway")
        assert _parse_error_response(response) == "Bad Gateway"

    def test_empty_body(self) -> None:
        response = httpx.Response(503, text="")
        assert _parse_error_response(response) == "HTTP 503 error"

    def test_unrecognized_object_falls_back_to_str(self) -> None:
        response = httpx.Response(400, json={"foo": "bar"})
        assert "foo" in _parse_error_response(response)


# =============================================================================
# Helper Function Tests: _raise_for_status
# =============================================================================

class TestRaiseForStatus:
    """Tests for _raise_for_status."""

    def test_success_does_not_raise(self) -> None:
        _raise_for_status(httpx.Response(200, json={}))

    def test_404_raises_not_found(self) -> None:
        with pytest.raises(NotFoundError):
            _raise_for_status(httpx.Response(404, json={"detail": "Not Found"}))

    def test_5xx_raises_server_error_with_status(self) -> None:
        with pytest.raises(ServerError) as exc_info:
            _raise_for_status(httpx.Response(503, text="down"))
        assert exc_info.value.status_code == 503

    def test_400_keeps_json_body(self) -> None:
        body = {"success": False, "output": "Unknown command: frob"}
        with pytest.raises(APIError) as exc_info:
            _raise_for_status(httpx.Response(400, json=body))

        assert exc_info.value.status_code == 400
        assert exc_info.value.response_body == body
        assert exc_info.value.message == "Unknown command: frob"

    def test_non_json_body_kept_as_text(self) -> None:
        with pytest.raises(APIError) as exc_info:
            _raise_for_status(httpx.Response(418, text="teapot"))
        assert exc_info.value.response_body == "teapot"


# =============================================================================
# Helper Function Tests: _calculate_backoff
# =============================================================================

class TestCalculateBackoff:
    def test_exponential_growth(self) -> None:
        assert _calculate_backoff(0) == DEFAULT_RETRY_BACKOFF_BASE
        assert _calculate_backoff(1) == DEFAULT_RETRY_BACKOFF_BASE * 2
        assert _calculate_backoff(2) == DEFAULT_RETRY_BACKOFF_BASE * 4

    def test_capped_at_max(self) -> None:
        assert _calculate_backoff(20) == DEFAULT_RETRY_BACKOFF_MAX


# =============================================================================
# AsyncHTTPClient Tests
# =============================================================================

class TestAsyncHTTPClientInit:
    def test_defaults(self) -> None:
        client = AsyncHTTPClient(base_url="http://localhost:8080/")

        assert client.base_url == "http://localhost:8080"
        assert client.timeout == 30.0
        assert client.retry_enabled is False
        assert client.max_retries == 3

    async def test_async_context_manager(self) -> None:
        async with AsyncHTTPClient(base_url="http://localhost:8080") as client:
            assert isinstance(client, AsyncHTTPClient)


class TestAsyncHTTPClientRequests:
    """Request and error mapping tests."""

    async def test_get_returns_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/directory"
            return httpx.Response(200, json={"path": "/", "items": []})

        async with make_client(handler) as client:
            assert await client.get("/api/directory") == {"path": "/", "items": []}

    async def test_post_sends_bare_json_string(self) -> None:
        """A string body is sent as a JSON string literal."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"success": True, "output": "/docs"})

        async with make_client(handler) as client:
            await client.post("/api/cd", json="docs")

        assert seen == ["docs"]

    async def test_post_sends_empty_string(self) -> None:
        """An empty target is still a body, not a missing one."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.content)
            return httpx.Response(200, json={"success": True, "output": "/"})

        async with make_client(handler) as client:
            await client.post("/api/cd", json="")

        assert seen == [b'""']

    async def test_empty_response_returns_none(self) -> None:
        async with make_client(lambda request: httpx.Response(204)) as client:
            assert await client.get("/api/directory") is None

    async def test_error_status_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"success": False, "output": "boom"})

        async with make_client(handler) as client:
            with pytest.raises(ServerError) as exc_info:
                await client.post("/api/command", json={"cmd": "ls", "args": []})

        assert exc_info.value.response_body == {"success": False, "output": "boom"}

    async def test_connect_error_raises_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(ConnectionError) as exc_info:
                await client.get("/api/directory")

        assert exc_info.value.url == "http://localhost:8080/api/directory"

    async def test_timeout_raises_timeout_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        async with make_client(handler, timeout=5.0) as client:
            with pytest.raises(TimeoutError) as exc_info:
                await client.get("/api/directory")

        assert exc_info.value.timeout == 5.0

    @pytest.mark.parametrize(
        "error_type",
        [httpx.ReadError, httpx.WriteError, httpx.RemoteProtocolError, httpx.NetworkError],
    )
    async def test_other_transport_errors_raise_network_error(self, error_type) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise error_type("connection reset", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.post("/api/command", json={"cmd": "ls", "args": []})

        assert isinstance(exc_info.value.__cause__, error_type)
        assert "connection reset" in str(exc_info.value)

    async def test_non_json_success_body_raises_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>proxy page</html>")

        async with make_client(handler) as client:
            with pytest.raises(NetworkError, match="Invalid JSON response"):
                await client.get("/api/directory")


class TestAsyncHTTPClientRetry:
    """Retry logic tests."""

    async def test_no_retry_by_default(self) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(503, text="Unavailable")

        async with make_client(handler) as client:
            with pytest.raises(ServerError):
                await client.get("/api/directory")

        assert attempts == 1

    async def test_retry_on_503_when_enabled(self, no_backoff) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            if attempts < 3:
                return httpx.Response(503, text="Unavailable")
            return httpx.Response(200, json={"path": "/", "items": []})

        async with make_client(handler, retry_enabled=True, max_retries=3) as client:
            result = await client.get("/api/directory")

        assert attempts == 3
        assert result["path"] == "/"

    async def test_retry_on_connect_error(self, no_backoff) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            if attempts == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"success": True, "output": "/"})

        async with make_client(handler, retry_enabled=True) as client:
            await client.post("/api/command", json={"cmd": "pwd", "args": []})

        assert attempts == 2

    async def test_max_retries_exhausted(self, no_backoff) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(502, text="Bad Gateway")

        async with make_client(handler, retry_enabled=True, max_retries=2) as client:
            with pytest.raises(ServerError):
                await client.get("/api/directory")

        assert attempts == 3

    async def test_400_is_never_retried(self, no_backoff) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(400, json={"success": False, "output": "no such directory"})

        async with make_client(handler, retry_enabled=True) as client:
            with pytest.raises(APIError):
                await client.post("/api/cd", json="nope")

        assert attempts == 1

    async def test_read_error_is_not_retried(self, no_backoff) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            raise httpx.ReadError("connection reset", request=request)

        async with make_client(handler, retry_enabled=True) as client:
            with pytest.raises(NetworkError):
                await client.get("/api/directory")

        assert attempts == 1

    async def test_connect_error_retries_exhausted(self, no_backoff) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler, retry_enabled=True, max_retries=2) as client:
            with pytest.raises(ConnectionError):
                await client.get("/api/directory")

        assert attempts == 3
