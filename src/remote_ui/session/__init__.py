"""Session engine: state machine, dispatch, registry and argument codec."""

from .codec import ArgumentCodec
from .dispatcher import UNHANDLED_REASON, MessageDispatcher
from .handlers import DEFAULT_HANDLERS, MessageHandler
from .handshake import negotiate_version
from .notifier import OutboundNotifier
from .registry import ObjectRegistry, RemoteObjectHandle
from .runtime import SessionAlreadyActiveError, current_session, shutdown_session, start_session
from .session import Session
from .state import SessionState

__all__ = [
    "DEFAULT_HANDLERS",
    "UNHANDLED_REASON",
    "ArgumentCodec",
    "MessageDispatcher",
    "MessageHandler",
    "ObjectRegistry",
    "OutboundNotifier",
    "RemoteObjectHandle",
    "Session",
    "SessionAlreadyActiveError",
    "SessionState",
    "current_session",
    "negotiate_version",
    "shutdown_session",
    "start_session",
]
