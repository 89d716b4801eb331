"""Pytest configuration and fixtures for testing."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Generator

import httpx
import pytest

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

UPSTREAM_BASE_URL = "http://upstream.local/v1"


# =============================================================================
# Transport Registry Fixtures
# =============================================================================


@pytest.fixture
def clear_transport_registry() -> Generator[None, None, None]:
    """Clear upstream transport registry after test.

    Use this fixture in tests that register fake transports.
    """
    from chatbridge.core.upstream_transport import clear_upstream_transports

    yield
    clear_upstream_transports()


# =============================================================================
# Config Builders
# =============================================================================


def build_bridge_config(
    base_url: str = UPSTREAM_BASE_URL,
    *,
    api_key: str = "test-key",
    timeout: float = 5.0,
    target_model: str | None = None,
) -> dict[str, Any]:
    """Build a bridge config pointing at a fake upstream."""
    return {
        "server": {"host": "127.0.0.1", "port": 9999},
        "upstream": {
            "name": "fake-upstream",
            "base_url": base_url,
            "api_key": api_key,
            "timeout": timeout,
            "target_model": target_model,
        },
    }


class RecordingUpstream:
    """A fake Responses upstream served through ``httpx.MockTransport``.

    Every request is recorded so tests can inspect what the bridge sent.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def fake_upstream(clear_transport_registry) -> Callable[..., RecordingUpstream]:
    """Register a recording fake upstream for ``UPSTREAM_BASE_URL``."""
    from chatbridge.core.upstream_transport import register_upstream_transport

    def _install(handler: Callable[[httpx.Request], httpx.Response]) -> RecordingUpstream:
        upstream = RecordingUpstream(handler)
        register_upstream_transport(UPSTREAM_BASE_URL, upstream.transport)
        return upstream

    return _install
