from __future__ import annotations

import pytest

from fake_oracle import FakeOracle, FakeOracleFactory
from trihex.board.hexgrid import BoardLayout
from trihex.board.registry import OracleRegistry
from trihex.board.session import BoardSession, InteractionMode


@pytest.fixture
def oracle():
    """A fake rules oracle at its starting position."""
    return FakeOracle.starting()


@pytest.fixture
def factory():
    return FakeOracleFactory()


@pytest.fixture
def test_registry(factory):
    registry = OracleRegistry()
    registry.register(factory)
    return registry


@pytest.fixture
def layout():
    return BoardLayout.for_height(600)


@pytest.fixture
def local_session(oracle, layout):
    return BoardSession(oracle, mode=InteractionMode.LOCAL, layout=layout)


class RecordingEmitter:
    """Collects outgoing socket events instead of sending them."""

    def __init__(self):
        self.sent: list[tuple[str, dict]] = []

    async def __call__(self, event: str, payload: dict) -> None:
        self.sent.append((event, payload))


@pytest.fixture
def emitter():
    return RecordingEmitter()
