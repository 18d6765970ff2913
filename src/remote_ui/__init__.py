"""Client that mirrors a server-owned widget tree over a WebSocket protocol."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "MemoryTransport",
    "Session",
    "WebSocketTransport",
    "current_session",
    "launch_client",
    "shutdown_session",
    "start_session",
]


def _lazy_attr(name: str) -> Any:
    module_map = {
        "ClientConfig": ("remote_ui.config", "ClientConfig"),
        "MemoryTransport": ("remote_ui.transport.memory", "MemoryTransport"),
        "Session": ("remote_ui.session", "Session"),
        "WebSocketTransport": ("remote_ui.transport.websocket", "WebSocketTransport"),
        "current_session": ("remote_ui.session", "current_session"),
        "launch_client": ("remote_ui.launcher", "launch_client"),
        "shutdown_session": ("remote_ui.session", "shutdown_session"),
        "start_session": ("remote_ui.session", "start_session"),
    }
    if name not in module_map:
        raise AttributeError(name)
    module_path, attr = module_map[name]
    module = import_module(module_path)
    return getattr(module, attr)


def __getattr__(name: str) -> Any:  # pragma: no cover - trivial delegation
    return _lazy_attr(name)
