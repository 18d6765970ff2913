"""Abstract bidirectional channel consumed by the session."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from napari.utils.events import EmitterGroup

from remote_ui.protocol import ProtocolError

logger = logging.getLogger(__name__)


class Transport:
    """Base class for transports.

    Subclasses deliver ``events.open()``, ``events.data(payload=...)`` and
    ``events.close()`` and implement :meth:`send` and :meth:`close`. A
    payload is one message mapping or an ordered list of them; a frame that
    could not be decoded is delivered with ``error`` set instead.
    """

    def __init__(self) -> None:
        self.events = EmitterGroup(source=self, open=None, close=None, data=None)
        self._close_emitted = False

    def send(self, message: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    @property
    def close_emitted(self) -> bool:
        return self._close_emitted

    def _emit_open(self) -> None:
        self.events.open()

    def _emit_data(self, payload: Any, error: Optional[ProtocolError] = None) -> None:
        self.events.data(payload=payload, error=error)

    def _emit_close(self) -> None:
        if self._close_emitted:
            return
        self._close_emitted = True
        self.events.close()


__all__ = ["Transport"]
