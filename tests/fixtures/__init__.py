"""Test fixtures for the browser session.

This package provides reusable test fixtures:
- transport: ScriptedBackend, a canned-response service behind
  httpx.MockTransport that records every request
- backend: FakeFileSystem and a FastAPI app serving it, reached through
  httpx.ASGITransport for end-to-end scenarios
"""
