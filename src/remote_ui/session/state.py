"""Connection lifecycle states."""

from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ESTABLISHED = "established"
    CLOSED = "closed"


__all__ = ["SessionState"]
