"""Pytest configuration and fixtures."""

import asyncio
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from yelix_cloud import MachineIdentity, RequestEvent, YelixCloud  # noqa: E402


class FakeTransport:
    """In-memory collector transport recording every call."""

    def __init__(self, instance_id: str | None = "abc123"):
        self.instance_id = instance_id
        self.create_calls: list[tuple[str, dict]] = []
        self.sent: list[tuple[RequestEvent, str]] = []
        self.init_gate: asyncio.Event | None = None
        self.init_error: Exception | None = None
        self.send_result = True
        self.failing_paths: set[str] = set()
        self.send_gate: asyncio.Event | None = None
        self.closed = False

    async def create_instance(self, environment, schema, identity):
        self.create_calls.append((environment, dict(schema)))
        if self.init_gate is not None:
            await self.init_gate.wait()
        if self.init_error is not None:
            raise self.init_error
        return self.instance_id

    async def send_request(self, event, instance_id, identity):
        self.sent.append((event, instance_id))
        if self.send_gate is not None:
            await self.send_gate.wait()
        if event.path in self.failing_paths:
            raise RuntimeError(f"transport exploded on {event.path}")
        return self.send_result

    async def aclose(self):
        self.closed = True


@pytest.fixture
def identity():
    """Fixed machine identity."""
    return MachineIdentity(
        machine_name="test-host",
        machine_ip="10.0.0.2",
        machine_os="linux",
    )


@pytest.fixture
def transport():
    """Create fake collector transport."""
    return FakeTransport()


@pytest.fixture
def make_client(transport, identity):
    """Factory for clients wired to the fake transport."""

    def _make(**kwargs) -> YelixCloud:
        kwargs.setdefault("api_key", "test-key")
        return YelixCloud(transport=transport, identity=identity, **kwargs)

    return _make


@pytest.fixture
def client(make_client):
    """Create a client with default settings."""
    return make_client()


@pytest.fixture
def make_event():
    """Factory for request events."""

    def _make(path: str = "/x", method: str = "GET", duration: float = 12.5) -> RequestEvent:
        return RequestEvent(start_time=1000, path=path, duration=duration, method=method)

    return _make
