from __future__ import annotations

import asyncio
import json
import logging
from contextlib import suppress

import pytest

websockets = pytest.importorskip("websockets")

from websockets.exceptions import ConnectionClosed

from remote_ui.protocol import ProtocolErrorKind
from remote_ui.session import SessionState, start_session
from remote_ui.transport.websocket import WebSocketTransport


@pytest.fixture
def transport() -> WebSocketTransport:
    return WebSocketTransport("ws://localhost:9000/")


def _run_against(handler, on_transport=None):
    """Serve *handler* on an ephemeral port and run one client session against it."""

    async def scenario():
        async with websockets.serve(handler, "127.0.0.1", 0) as server:
            port = server.sockets[0].getsockname()[1]
            client = WebSocketTransport(f"ws://127.0.0.1:{port}/", open_timeout=5.0)
            session = start_session(client)
            if on_transport is not None:
                on_transport(client)
            await asyncio.wait_for(client.serve(), timeout=10.0)
            return client, session

    return asyncio.run(scenario())


def test_send_before_connect_returns_false(transport):
    assert transport.send({"type": "keepalive"}) is False
    assert not transport.connected


def test_send_rejects_unencodable(transport, caplog):
    with caplog.at_level(logging.WARNING, logger="remote_ui.transport.websocket"):
        assert transport.send({"type": "set", "value": object()}) is False
    assert "dropping unencodable set message" in caplog.text


def test_send_enqueues_compact_json(transport):
    loop = asyncio.new_event_loop()
    try:
        state = transport._loop_state
        state.loop = loop
        state.outbox = asyncio.Queue()
        assert transport.send({"type": "keepalive"}) is True
        loop.run_until_complete(asyncio.sleep(0))
        assert state.outbox.get_nowait() == '{"type":"keepalive"}'
    finally:
        state.loop = None
        state.outbox = None
        loop.close()


def test_deliver_emits_decoded_frames(transport):
    seen = []
    transport.events.data.connect(lambda event: seen.append((event.payload, event.error)))
    transport._deliver('{"type": "keepalive"}')
    transport._deliver("garbage")
    assert seen[0] == ({"type": "keepalive"}, None)
    assert seen[1][0] is None
    assert seen[1][1] is not None


def test_failed_connect_emits_close_once():
    transport = WebSocketTransport("ws://127.0.0.1:1/", open_timeout=1.0)
    closes = []
    opens = []
    transport.events.close.connect(lambda event: closes.append(event))
    transport.events.open.connect(lambda event: opens.append(event))
    transport.run()
    assert opens == []
    assert len(closes) == 1
    assert transport.error is not None


def test_session_over_live_socket():
    received = []

    async def handler(ws):
        received.append(json.loads(await ws.recv()))
        await ws.send(
            json.dumps(
                [
                    {"type": "acknowledge", "version": "1.0"},
                    {"type": "create", "class": "Label", "id": 1000},
                    {"type": "set", "id": 1000, "name": "text", "value": "hi"},
                ]
            )
        )
        received.append(json.loads(await ws.recv()))
        await ws.send(json.dumps({"type": "error", "msg": "done"}))
        with suppress(ConnectionClosed):
            await ws.recv()

    client, session = _run_against(handler)

    assert received == [
        {"type": "establish", "version": "1.0"},
        {"type": "set", "id": 1000, "name": "text", "value": "hi"},
    ]
    assert session.state is SessionState.CLOSED
    assert session.close_kind is ProtocolErrorKind.PEER_ERROR
    assert session.close_reason == "A serverside error occurred:\ndone"
    assert client.close_emitted
    assert not client.connected
    assert client._loop_state.close_task is None


def test_client_close_ends_connection():
    received = []

    async def handler(ws):
        received.append(json.loads(await ws.recv()))
        await ws.send(json.dumps({"type": "acknowledge", "version": "1.0"}))
        with suppress(ConnectionClosed):
            await ws.recv()

    def close_after_first_frame(client):
        client.events.data.connect(lambda event: client.close())

    client, session = _run_against(handler, close_after_first_frame)

    assert received == [{"type": "establish", "version": "1.0"}]
    assert session.established is False
    assert session.closed
    assert session.close_kind is None
    assert session.close_reason == "Connection closed."
    assert client.error is None
    assert client._loop_state.close_requested
    assert client._loop_state.close_task is None
