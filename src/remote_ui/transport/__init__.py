"""Transports carrying protocol frames between client and server."""

from .base import Transport
from .memory import MemoryTransport

__all__ = ["MemoryTransport", "Transport", "WebSocketTransport"]


def __getattr__(name: str):  # pragma: no cover - trivial delegation
    if name == "WebSocketTransport":
        from .websocket import WebSocketTransport

        return WebSocketTransport
    raise AttributeError(name)
