"""Failure vocabulary shared by the protocol engine.

Registry and codec code raise :class:`ProtocolError`; message handlers turn
those into a :class:`HandlerResult` so the dispatcher only ever inspects a
tagged outcome.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProtocolErrorKind(str, Enum):
    PROTOCOL_STATE_VIOLATION = "protocol_state_violation"
    HANDSHAKE_VERSION_TOO_LOW = "handshake_version_too_low"
    UNKNOWN_CLASS = "unknown_class"
    RESERVED_ID_FOR_CREATE = "reserved_id_for_create"
    DUPLICATE_OBJECT_ID = "duplicate_object_id"
    UNKNOWN_OBJECT_ID = "unknown_object_id"
    UNKNOWN_ACTION = "unknown_action"
    UNKNOWN_PROPERTY = "unknown_property"
    MALFORMED_ARGUMENTS = "malformed_arguments"
    UNRESOLVABLE_ARGUMENT_REFERENCE = "unresolvable_argument_reference"
    MALFORMED_MESSAGE = "malformed_message"
    OBJECT_RUNTIME_FAILURE = "object_runtime_failure"
    PEER_CLOSED = "peer_closed"
    PEER_ERROR = "peer_error"
    UNRECOGNIZED_MESSAGE_TYPE = "unrecognized_message_type"


class ProtocolError(RuntimeError):
    """Raised for any protocol violation; always terminal for the session."""

    def __init__(self, kind: ProtocolErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = ProtocolErrorKind(kind)
        self.message = str(message)


class HandlerOutcome(str, Enum):
    HANDLED = "handled"
    FAILED = "failed"


@dataclass(frozen=True)
class HandlerResult:
    """Outcome of a single message handler."""

    outcome: HandlerOutcome
    kind: Optional[ProtocolErrorKind] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is HandlerOutcome.HANDLED

    @classmethod
    def handled(cls) -> "HandlerResult":
        return _HANDLED

    @classmethod
    def failed(cls, kind: ProtocolErrorKind, reason: str) -> "HandlerResult":
        return cls(outcome=HandlerOutcome.FAILED, kind=ProtocolErrorKind(kind), reason=str(reason))

    @classmethod
    def from_error(cls, error: ProtocolError) -> "HandlerResult":
        return cls.failed(error.kind, error.message)


_HANDLED = HandlerResult(outcome=HandlerOutcome.HANDLED)


__all__ = [
    "HandlerOutcome",
    "HandlerResult",
    "ProtocolError",
    "ProtocolErrorKind",
]
