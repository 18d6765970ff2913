"""Per-type message handlers.

Each handler takes the owning session and the raw message mapping and
returns a :class:`HandlerResult`. Protocol errors raised underneath are
converted at this boundary; exceptions thrown by proxy code are reported
as object-runtime failures.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Dict

from remote_ui.protocol import (
    ACKNOWLEDGE_TYPE,
    ACTION_TYPE,
    CLOSE_TYPE,
    CREATE_TYPE,
    ERROR_TYPE,
    KEEPALIVE_TYPE,
    SET_TYPE,
    AcknowledgeMessage,
    ActionMessage,
    CloseMessage,
    CreateMessage,
    ErrorMessage,
    HandlerResult,
    ProtocolError,
    ProtocolErrorKind,
    SetMessage,
)

from .handshake import negotiate_version
from .state import SessionState

if TYPE_CHECKING:  # pragma: no cover
    from .session import Session

logger = logging.getLogger(__name__)

MessageHandler = Callable[["Session", Mapping[str, Any]], HandlerResult]


def _protocol_handler(func: MessageHandler) -> MessageHandler:
    @functools.wraps(func)
    def wrapper(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
        try:
            return func(session, message)
        except ProtocolError as exc:
            return HandlerResult.from_error(exc)

    return wrapper


def _runtime_failure(what: str, exc: Exception) -> ProtocolError:
    return ProtocolError(ProtocolErrorKind.OBJECT_RUNTIME_FAILURE, f"{what} failed: {exc}")


@_protocol_handler
def handle_acknowledge(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
    logger.debug("Got an acknowledge message.")
    if session.state is not SessionState.CONNECTED:
        raise ProtocolError(
            ProtocolErrorKind.PROTOCOL_STATE_VIOLATION,
            f"Got an unexpected acknowledge message while {session.state.value}.",
        )
    ack = AcknowledgeMessage.from_dict(message)
    peer = negotiate_version(session.protocol_version, ack.version)
    session.mark_established(peer)
    return HandlerResult.handled()


@_protocol_handler
def handle_create(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
    session.require_established(CREATE_TYPE)
    create = CreateMessage.from_dict(message)
    session.registry.create(create.class_name, create.id)
    return HandlerResult.handled()


@_protocol_handler
def handle_action(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
    session.require_established(ACTION_TYPE)
    action = ActionMessage.from_dict(message)
    target = session.registry.lookup(action.id)
    if not target.has_action(action.name):
        raise ProtocolError(
            ProtocolErrorKind.UNKNOWN_ACTION,
            f"Object {action.id} does not have an action named '{action.name}'.",
        )
    args = session.codec.decode_arguments(action.args)
    try:
        target.do_action(action.name, args)
    except Exception as exc:
        raise _runtime_failure(f"Action '{action.name}' on object {action.id}", exc) from exc
    return HandlerResult.handled()


@_protocol_handler
def handle_set(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
    session.require_established(SET_TYPE)
    update = SetMessage.from_dict(message)
    target = session.registry.lookup(update.id)
    if not target.has_property(update.name) or not _writable(target, update.name):
        raise ProtocolError(
            ProtocolErrorKind.UNKNOWN_PROPERTY,
            f"Object {update.id} does not have a writable property named '{update.name}'.",
        )
    try:
        target.set_property(update.name, update.value)
    except Exception as exc:
        raise _runtime_failure(f"Setting '{update.name}' on object {update.id}", exc) from exc
    return HandlerResult.handled()


@_protocol_handler
def handle_keepalive(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
    session.require_established(KEEPALIVE_TYPE)
    return HandlerResult.handled()


def handle_close(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
    close = CloseMessage.from_dict(message)
    reason = "Serverside closed connection."
    if close.reason:
        reason = f"{reason} {close.reason}"
    return HandlerResult.failed(ProtocolErrorKind.PEER_CLOSED, reason)


def handle_error(session: "Session", message: Mapping[str, Any]) -> HandlerResult:
    error = ErrorMessage.from_dict(message)
    return HandlerResult.failed(
        ProtocolErrorKind.PEER_ERROR,
        f"A serverside error occurred:\n{error.msg}",
    )


def _writable(target: Any, name: str) -> bool:
    can_write = getattr(target, "can_write", None)
    return True if can_write is None else bool(can_write(name))


# SIGNAL has no handler: it is unsupported and closes the session.
DEFAULT_HANDLERS: Dict[str, MessageHandler] = {
    ACKNOWLEDGE_TYPE: handle_acknowledge,
    CREATE_TYPE: handle_create,
    ACTION_TYPE: handle_action,
    SET_TYPE: handle_set,
    KEEPALIVE_TYPE: handle_keepalive,
    CLOSE_TYPE: handle_close,
    ERROR_TYPE: handle_error,
}


__all__ = [
    "DEFAULT_HANDLERS",
    "MessageHandler",
    "handle_acknowledge",
    "handle_action",
    "handle_close",
    "handle_create",
    "handle_error",
    "handle_keepalive",
    "handle_set",
]
