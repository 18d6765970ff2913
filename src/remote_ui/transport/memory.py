"""In-process transport for hosts that own the connection themselves."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional

from remote_ui.protocol import MessageParser, ProtocolError

from .base import Transport

logger = logging.getLogger(__name__)


class MemoryTransport(Transport):
    """Transport driven by explicit calls instead of a socket.

    The host calls :meth:`open`, :meth:`deliver` (or :meth:`deliver_text`)
    and :meth:`disconnect`; outbound messages are appended to ``sent`` and
    forwarded to ``on_send`` when provided.
    """

    def __init__(self, on_send: Optional[Callable[[Dict[str, Any]], None]] = None) -> None:
        super().__init__()
        self.sent: List[Dict[str, Any]] = []
        self.on_send = on_send
        self.is_open = False
        self.close_requested = False
        self._parser = MessageParser()

    def open(self) -> None:
        self.is_open = True
        self._emit_open()

    def deliver(self, payload: Any) -> None:
        self._emit_data(payload)

    def deliver_text(self, raw: str | bytes) -> None:
        try:
            payload = self._parser.decode_json(raw)
        except ProtocolError as exc:
            logger.warning("undecodable frame: %s", exc)
            self._emit_data(None, error=exc)
            return
        self._emit_data(payload)

    def disconnect(self) -> None:
        self.is_open = False
        self._emit_close()

    def send(self, message: Mapping[str, Any]) -> bool:
        if not self.is_open:
            return False
        payload = dict(message)
        self.sent.append(payload)
        if self.on_send is not None:
            self.on_send(payload)
        return True

    def close(self) -> None:
        self.close_requested = True
        if self.is_open:
            self.disconnect()


__all__ = ["MemoryTransport"]
