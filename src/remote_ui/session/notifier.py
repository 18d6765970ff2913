"""Forward local property changes on dynamic objects to the peer."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Deque

from remote_ui.objects.base import RemoteObject
from remote_ui.protocol import SetMessage, build_set

if TYPE_CHECKING:  # pragma: no cover
    from .session import Session

logger = logging.getLogger(__name__)


def _contains_object(value: Any) -> bool:
    if isinstance(value, RemoteObject):
        return True
    if isinstance(value, Mapping):
        return any(_contains_object(v) for v in value.values())
    if isinstance(value, (list, tuple)):
        return any(_contains_object(v) for v in value)
    return False


class OutboundNotifier:
    """Build ``set`` messages for property changes and send them in order.

    The notifier is owned by exactly one session and always sends through
    that session's transport. While the session is dispatching, sends are
    held back and flushed once the outermost dispatch returns, so change
    notifications fired from inside a handler never interleave with it.
    """

    def __init__(self, session: "Session") -> None:
        self._session = session
        self._pending: Deque[SetMessage] = deque()
        self._hold_depth = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    @contextmanager
    def deferred(self) -> Iterator[None]:
        self._hold_depth += 1
        try:
            yield
        finally:
            self._hold_depth -= 1
            if self._hold_depth == 0:
                self.flush()

    def on_property_changed(self, object_id: int, proxy: RemoteObject, name: str) -> None:
        session = self._session
        if session.closed:
            logger.debug("dropping change of %s on object %s; session closed", name, object_id)
            return
        try:
            value = proxy.get_property(name)
        except Exception:
            logger.warning("could not read property %s of object %s", name, object_id, exc_info=True)
            return
        if _contains_object(value):
            # Outbound object references are not encoded.
            logger.debug("not forwarding object-valued property %s of object %s", name, object_id)
            return
        if session.debug_policy.log_property_changes:
            logger.info("A property has changed: id=%s name=%s", object_id, name)

        message = build_set(object_id, name, value)
        if self._hold_depth:
            self._pending.append(message)
            return
        session.send(message)

    def flush(self) -> int:
        """Send queued messages in order; return how many were sent."""

        sent = 0
        while self._pending:
            message = self._pending.popleft()
            if self._session.closed:
                dropped = len(self._pending) + 1
                self._pending.clear()
                logger.debug("dropping %d queued change(s); session closed", dropped)
                break
            if self._session.send(message):
                sent += 1
        return sent


__all__ = ["OutboundNotifier"]
