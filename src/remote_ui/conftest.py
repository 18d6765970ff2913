from __future__ import annotations

import pytest

from remote_ui.session import shutdown_session, start_session
from remote_ui.transport.memory import MemoryTransport


@pytest.fixture(autouse=True)
def _reset_active_session():
    yield
    shutdown_session()


@pytest.fixture
def transport() -> MemoryTransport:
    return MemoryTransport()


@pytest.fixture
def session(transport):
    return start_session(transport)


@pytest.fixture
def connected(session, transport):
    transport.open()
    return session


@pytest.fixture
def established(connected, transport):
    connected.handle({"type": "acknowledge", "version": "1.0"})
    assert connected.established
    transport.sent.clear()
    return connected
