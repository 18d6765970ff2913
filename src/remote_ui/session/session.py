"""Connection-scoped state machine driving the object mirror."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Optional

from remote_ui.config.logging_policy import DebugPolicy, maybe_enable_debug_logger
from remote_ui.objects.base import RemoteObject
from remote_ui.objects.catalog import ClassFactoryTable, default_class_table
from remote_ui.objects.singletons import default_singletons
from remote_ui.protocol import (
    ESTABLISH_TYPE,
    PROTO_VERSION,
    ProtocolError,
    ProtocolErrorKind,
    build_establish,
    message_type,
)

from .codec import ArgumentCodec
from .dispatcher import MessageDispatcher
from .handlers import MessageHandler
from .notifier import OutboundNotifier
from .registry import ObjectRegistry
from .state import SessionState

if TYPE_CHECKING:  # pragma: no cover
    from remote_ui.transport.base import Transport

logger = logging.getLogger(__name__)

_SESSION_DEBUG = maybe_enable_debug_logger(logger, "REMOTE_UI_SESSION_DEBUG")


class Session:
    """Mirror a server-owned object graph over one transport connection.

    The session moves CONNECTING -> CONNECTED on transport open (sending the
    establish message), CONNECTED -> ESTABLISHED on an acceptable
    acknowledge, and to CLOSED on any failure or transport close. CLOSED is
    terminal; reconnecting requires a new session.
    """

    def __init__(
        self,
        transport: "Transport",
        *,
        protocol_version: str = PROTO_VERSION,
        singletons: Optional[Mapping[int, RemoteObject]] = None,
        classes: Optional[ClassFactoryTable] = None,
        handlers: Optional[Mapping[str, MessageHandler]] = None,
        debug_policy: Optional[DebugPolicy] = None,
    ) -> None:
        self.transport = transport
        self.protocol_version = str(protocol_version)
        self.peer_version: Optional[str] = None
        self.close_reason: Optional[str] = None
        self.close_kind: Optional[ProtocolErrorKind] = None
        self.debug_policy = debug_policy or DebugPolicy()
        self._state = SessionState.CONNECTING
        self.notifier = OutboundNotifier(self)
        table = classes if classes is not None else default_class_table()
        table.freeze()
        self.registry = ObjectRegistry(
            default_singletons() if singletons is None else singletons,
            table,
            on_property_changed=self.notifier.on_property_changed,
        )
        self.codec = ArgumentCodec(self.registry)
        self.dispatcher = MessageDispatcher(handlers)
        self._attached = False

    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state is SessionState.CLOSED

    @property
    def established(self) -> bool:
        return self._state is SessionState.ESTABLISHED

    # ------------------------------------------------------------------
    def attach(self) -> None:
        """Subscribe to the transport's open/close/data events."""

        if self._attached:
            return
        events = self.transport.events
        events.open.connect(self.on_transport_open)
        events.close.connect(self.on_transport_close)
        events.data.connect(self.on_transport_data)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        events = self.transport.events
        events.open.disconnect(self.on_transport_open)
        events.close.disconnect(self.on_transport_close)
        events.data.disconnect(self.on_transport_data)
        self._attached = False

    def on_transport_open(self, event: Any = None) -> None:
        if self._state is not SessionState.CONNECTING:
            self.fail(
                ProtocolErrorKind.PROTOCOL_STATE_VIOLATION,
                f"Transport opened while {self._state.value}.",
            )
            return
        logger.info("Connection has been opened.")
        self._state = SessionState.CONNECTED
        self.send(build_establish(self.protocol_version))

    def on_transport_close(self, event: Any = None) -> None:
        if self._state is SessionState.CLOSED:
            return
        self._state = SessionState.CLOSED
        if self.close_reason is None:
            self.close_reason = "Connection closed."
        logger.info("Connection closed.")

    def on_transport_data(self, event: Any) -> None:
        error = getattr(event, "error", None)
        if isinstance(error, ProtocolError):
            self.fail(error.kind, error.message)
            return
        self.handle(getattr(event, "payload", None))

    # ------------------------------------------------------------------
    def handle(self, payload: Any) -> int:
        """Dispatch one message or a batch; return how many were handled."""

        if self._state is SessionState.CLOSED:
            logger.debug("ignoring data on closed session")
            return 0
        if self._state is SessionState.CONNECTING:
            self.fail(
                ProtocolErrorKind.PROTOCOL_STATE_VIOLATION,
                "Got data before the connection was opened.",
            )
            return 0
        with self.notifier.deferred():
            return self.dispatcher.dispatch(self, payload)

    def send(self, message: Any) -> bool:
        """Send *message* if the current state allows it.

        Only ``establish`` may go out while CONNECTED; everything else waits
        for ESTABLISHED. Nothing is sent while CONNECTING or CLOSED.
        """

        payload = message.to_dict() if hasattr(message, "to_dict") else dict(message)
        msg_type = message_type(payload)
        if self._state is SessionState.CONNECTED:
            allowed = msg_type == ESTABLISH_TYPE
        else:
            allowed = self._state is SessionState.ESTABLISHED
        if not allowed:
            logger.debug("not sending %s while %s", msg_type, self._state.value)
            return False
        if self.debug_policy.log_sends:
            logger.info("Sending message: %s", payload)
        return bool(self.transport.send(payload))

    def require_established(self, message_type: str) -> None:
        if self._state is not SessionState.ESTABLISHED:
            raise ProtocolError(
                ProtocolErrorKind.PROTOCOL_STATE_VIOLATION,
                f"Got a {message_type} message, while connection not established.",
            )

    def mark_established(self, peer_version: str) -> None:
        self.peer_version = peer_version
        self._state = SessionState.ESTABLISHED
        logger.info("Established connection (server protocol %s).", peer_version)

    def fail(self, kind: ProtocolErrorKind, reason: str) -> None:
        """Record why the session ends, mark it CLOSED and close the transport."""

        if self._state is SessionState.CLOSED:
            return
        self.close_kind = ProtocolErrorKind(kind)
        self.close_reason = str(reason)
        self._state = SessionState.CLOSED
        logger.warning("Closing connection. Reason:\n%s", self.close_reason)
        try:
            self.transport.close()
        except Exception:
            logger.debug("transport close failed", exc_info=True)

    def shutdown(self) -> None:
        """Release registry subscriptions and close the transport if still open."""

        if self._state is not SessionState.CLOSED:
            self._state = SessionState.CLOSED
            if self.close_reason is None:
                self.close_reason = "Session shut down."
            try:
                self.transport.close()
            except Exception:
                logger.debug("transport close failed during shutdown", exc_info=True)
        self.registry.clear()
        self.detach()

    def __repr__(self) -> str:
        return f"<Session state={self._state.value} objects={len(self.registry)}>"


__all__ = ["Session"]
