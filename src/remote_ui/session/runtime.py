"""Process-wide session lifecycle.

Only one session may be active per process. ``start_session`` creates and
attaches it, ``shutdown_session`` releases it so a new one can be started.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from .session import Session

if TYPE_CHECKING:  # pragma: no cover
    from remote_ui.transport.base import Transport

logger = logging.getLogger(__name__)

_ACTIVE_SESSION: Optional[Session] = None


class SessionAlreadyActiveError(RuntimeError):
    """Raised when a second session is started before the first is shut down."""


def start_session(transport: "Transport", **kwargs: Any) -> Session:
    global _ACTIVE_SESSION
    if _ACTIVE_SESSION is not None:
        raise SessionAlreadyActiveError(
            f"a session is already active ({_ACTIVE_SESSION!r}); call shutdown_session() first",
        )
    session = Session(transport, **kwargs)
    session.attach()
    _ACTIVE_SESSION = session
    logger.debug("session started: %r", session)
    return session


def current_session() -> Optional[Session]:
    return _ACTIVE_SESSION


def shutdown_session() -> Optional[Session]:
    """Shut down the active session (if any) and return it."""

    global _ACTIVE_SESSION
    session = _ACTIVE_SESSION
    if session is None:
        return None
    _ACTIVE_SESSION = None
    session.shutdown()
    logger.debug("session shut down: reason=%s", session.close_reason)
    return session


__all__ = [
    "SessionAlreadyActiveError",
    "current_session",
    "shutdown_session",
    "start_session",
]
