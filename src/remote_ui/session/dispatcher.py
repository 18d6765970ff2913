"""Route incoming messages to their handlers and enforce fail-closed semantics."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Dict, Optional

from remote_ui.protocol import ProtocolErrorKind, iter_messages, message_type

from .handlers import DEFAULT_HANDLERS, MessageHandler

if TYPE_CHECKING:  # pragma: no cover
    from .session import Session

logger = logging.getLogger(__name__)

UNHANDLED_REASON = "Message handler did not succeed, or unknown message."


class MessageDispatcher:
    """Look up a handler by message type and act on its result.

    A failed result, a raised exception, or a missing handler closes the
    session. Messages left in a batch after the session closed are skipped.
    """

    def __init__(self, handlers: Optional[Mapping[str, MessageHandler]] = None) -> None:
        self._handlers: Dict[str, MessageHandler] = dict(DEFAULT_HANDLERS if handlers is None else handlers)

    def register(self, message_type_name: str, handler: MessageHandler) -> None:
        key = message_type_name.lower()
        if key in self._handlers:
            raise ValueError(f"handler for '{key}' already registered")
        self._handlers[key] = handler

    def handler_for(self, message_type_name: str) -> MessageHandler | None:
        return self._handlers.get(message_type_name.lower())

    def handled_types(self) -> tuple[str, ...]:
        return tuple(self._handlers.keys())

    def dispatch(self, session: "Session", payload: Any) -> int:
        """Process one message or a batch; return how many were handled."""

        messages = iter_messages(payload)
        handled = 0
        for index, message in enumerate(messages):
            if session.closed:
                skipped = len(messages) - index
                logger.debug("session closed; skipping %d remaining message(s) in batch", skipped)
                break
            if self._dispatch_one(session, message):
                handled += 1
        return handled

    def _dispatch_one(self, session: "Session", message: Any) -> bool:
        if session.debug_policy.log_messages:
            logger.info("Handling message: %s", message)

        if not isinstance(message, Mapping):
            session.fail(
                ProtocolErrorKind.MALFORMED_MESSAGE,
                f"Message must be an object, got {type(message).__name__}.",
            )
            return False

        msg_type = message_type(message)
        handler = self._handlers.get(msg_type or "")
        if handler is None:
            session.fail(ProtocolErrorKind.UNRECOGNIZED_MESSAGE_TYPE, UNHANDLED_REASON)
            return False

        try:
            result = handler(session, message)
        except Exception as exc:
            logger.debug("handler for %s raised", msg_type, exc_info=True)
            session.fail(ProtocolErrorKind.OBJECT_RUNTIME_FAILURE, str(exc) or exc.__class__.__name__)
            return False

        if result is None or not result.ok:
            kind = result.kind if result is not None and result.kind is not None else ProtocolErrorKind.UNRECOGNIZED_MESSAGE_TYPE
            reason = result.reason if result is not None and result.reason else UNHANDLED_REASON
            session.fail(kind, reason)
            return False
        return True


__all__ = ["UNHANDLED_REASON", "MessageDispatcher"]
