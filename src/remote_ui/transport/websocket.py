"""WebSocket client transport.

Connects once (reconnection is left to the caller), emits ``open`` when the
socket is up, ``data`` for every decoded JSON frame and ``close`` exactly
once when the socket goes away. All events fire on the transport's own
asyncio loop, one frame at a time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, Optional

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from remote_ui.config.logging_policy import maybe_enable_debug_logger
from remote_ui.protocol import MessageParser, ProtocolError, encode_json

from .base import Transport

logger = logging.getLogger(__name__)

_TRANSPORT_DEBUG = maybe_enable_debug_logger(logger, "REMOTE_UI_TRANSPORT_DEBUG")


@dataclass
class TransportLoop:
    loop: asyncio.AbstractEventLoop | None = None
    websocket: Any | None = None
    outbox: asyncio.Queue[str] | None = None
    close_requested: bool = False
    close_task: asyncio.Task[None] | None = None


class WebSocketTransport(Transport):
    def __init__(self, url: str, *, open_timeout: float = 10.0) -> None:
        super().__init__()
        self.url = url
        self.open_timeout = float(open_timeout)
        self.error: Optional[BaseException] = None
        self._loop_state = TransportLoop()
        self._parser = MessageParser()

    @property
    def connected(self) -> bool:
        return self._loop_state.websocket is not None

    def run(self) -> None:
        """Run the connection on a fresh event loop until it closes."""

        loop_state = self._loop_state
        loop = asyncio.new_event_loop()
        loop_state.loop = loop
        try:
            loop.run_until_complete(self.serve())
        finally:
            loop_state.loop = None
            loop.close()

    async def serve(self) -> None:
        """Connect, pump frames until the socket closes, then emit ``close``."""

        loop_state = self._loop_state
        loop_state.loop = asyncio.get_running_loop()
        logger.info("Connecting to %s", self.url)
        try:
            async with websockets.connect(self.url, open_timeout=self.open_timeout) as ws:
                loop_state.websocket = ws
                loop_state.outbox = asyncio.Queue()
                send_task = asyncio.create_task(self._sender(ws, loop_state.outbox))
                try:
                    self._emit_open()
                    if not loop_state.close_requested:
                        await self._receive(ws)
                finally:
                    # Give queued frames a chance to go out before closing.
                    await self._drain(loop_state.outbox)
                    send_task.cancel()
                    with suppress(asyncio.CancelledError):
                        await send_task
                    await ws.close()
                    close_task = loop_state.close_task
                    if close_task is not None:
                        with suppress(ConnectionClosed):
                            await close_task
        except (OSError, WebSocketException, asyncio.TimeoutError) as exc:
            self.error = exc
            logger.info("Connection to %s failed: %s", self.url, str(exc) or exc.__class__.__name__)
        finally:
            loop_state.websocket = None
            loop_state.outbox = None
            loop_state.close_task = None
            self._emit_close()

    async def _receive(self, ws: Any) -> None:
        try:
            async for raw in ws:
                if _TRANSPORT_DEBUG:
                    logger.debug("transport <- %s", raw)
                self._deliver(raw)
                if self._loop_state.close_requested:
                    break
        except ConnectionClosed as exc:
            logger.debug("websocket closed: %s", exc)

    def _deliver(self, raw: str | bytes) -> None:
        try:
            payload = self._parser.decode_json(raw)
        except ProtocolError as exc:
            logger.warning("undecodable frame: %s", exc)
            self._emit_data(None, error=exc)
            return
        self._emit_data(payload)

    async def _sender(self, ws: Any, outbox: asyncio.Queue[str]) -> None:
        while True:
            text = await outbox.get()
            try:
                await ws.send(text)
            except ConnectionClosed:
                logger.debug("send after close dropped")
                return
            finally:
                outbox.task_done()
            if _TRANSPORT_DEBUG:
                logger.debug("transport -> %s", text)

    @staticmethod
    async def _drain(outbox: asyncio.Queue[str] | None, timeout: float = 1.0) -> None:
        if outbox is None or outbox.empty():
            return
        with suppress(asyncio.TimeoutError):
            await asyncio.wait_for(outbox.join(), timeout=timeout)

    # ------------------------------------------------------------------
    def send(self, message: Mapping[str, Any]) -> bool:
        """Encode *message* and queue it for delivery.

        Returns False when the socket is not open or the message cannot be
        encoded. Safe to call from any thread.
        """

        try:
            text = encode_json(message)
        except (TypeError, ValueError):
            logger.warning("dropping unencodable %s message", message.get("type"), exc_info=True)
            return False
        loop = self._loop_state.loop
        outbox = self._loop_state.outbox
        if loop is None or outbox is None:
            return False
        loop.call_soon_threadsafe(outbox.put_nowait, text)
        return True

    def close(self) -> None:
        """Ask the connection to close; ``close`` is emitted once it has."""

        loop_state = self._loop_state
        loop_state.close_requested = True
        loop = loop_state.loop
        ws = loop_state.websocket
        if loop is None or ws is None:
            return

        def _schedule_close() -> None:
            if loop_state.websocket is not ws or loop_state.close_task is not None:
                return
            loop_state.close_task = loop.create_task(ws.close())

        loop.call_soon_threadsafe(_schedule_close)


__all__ = ["TransportLoop", "WebSocketTransport"]
