"""Wire message shapes for the remote UI object protocol.

Every frame is a JSON object tagged by ``type``. The dataclasses below are
the typed view of those frames; ``from_dict`` validates the fields a handler
needs and ``to_dict`` produces the compact mapping handed to the transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping

from .errors import ProtocolError, ProtocolErrorKind

PROTO_VERSION = "1.0"

ESTABLISH_TYPE = "establish"
ACKNOWLEDGE_TYPE = "acknowledge"
CREATE_TYPE = "create"
ACTION_TYPE = "action"
SIGNAL_TYPE = "signal"
SET_TYPE = "set"
KEEPALIVE_TYPE = "keepalive"
CLOSE_TYPE = "close"
ERROR_TYPE = "error"

MESSAGE_TYPES = (
    ESTABLISH_TYPE,
    ACKNOWLEDGE_TYPE,
    CREATE_TYPE,
    ACTION_TYPE,
    SIGNAL_TYPE,
    SET_TYPE,
    KEEPALIVE_TYPE,
    CLOSE_TYPE,
    ERROR_TYPE,
)

# Ids below this value address the fixed singleton table.
DYNAMIC_ID_START = 1000


def _malformed(message_type: str, detail: str) -> ProtocolError:
    return ProtocolError(
        ProtocolErrorKind.MALFORMED_MESSAGE,
        f"Malformed '{message_type}' message: {detail}.",
    )


def _require(data: Mapping[str, Any], key: str, message_type: str) -> Any:
    if key not in data:
        raise _malformed(message_type, f"missing field '{key}'")
    return data[key]


def _require_str(data: Mapping[str, Any], key: str, message_type: str) -> str:
    value = _require(data, key, message_type)
    if not isinstance(value, str):
        raise _malformed(message_type, f"field '{key}' must be a string")
    return value


def _require_id(data: Mapping[str, Any], message_type: str) -> int:
    value = _require(data, "id", message_type)
    # bool is an int subclass but never a valid object id
    if isinstance(value, bool) or not isinstance(value, int):
        raise _malformed(message_type, "field 'id' must be an integer")
    return value


@dataclass(frozen=True)
class EstablishMessage:
    type: ClassVar[str] = ESTABLISH_TYPE

    version: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "version": self.version}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EstablishMessage":
        return cls(version=_require_str(data, "version", cls.type))


@dataclass(frozen=True)
class AcknowledgeMessage:
    type: ClassVar[str] = ACKNOWLEDGE_TYPE

    version: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "version": self.version}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AcknowledgeMessage":
        value = _require(data, "version", cls.type)
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise _malformed(cls.type, "field 'version' must be a string")
        return cls(version=str(value))


@dataclass(frozen=True)
class CreateMessage:
    type: ClassVar[str] = CREATE_TYPE

    class_name: str
    id: int

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "class": self.class_name, "id": self.id}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CreateMessage":
        return cls(
            class_name=_require_str(data, "class", cls.type),
            id=_require_id(data, cls.type),
        )


@dataclass(frozen=True)
class ActionMessage:
    type: ClassVar[str] = ACTION_TYPE

    id: int
    name: str
    args: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "id": self.id, "name": self.name, "args": self.args}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ActionMessage":
        # args shape is checked by the argument codec so the failure is
        # reported as malformed arguments rather than a malformed message.
        return cls(
            id=_require_id(data, cls.type),
            name=_require_str(data, "name", cls.type),
            args=data.get("args", []),
        )


@dataclass(frozen=True)
class SetMessage:
    type: ClassVar[str] = SET_TYPE

    id: int
    name: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "id": self.id, "name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SetMessage":
        return cls(
            id=_require_id(data, cls.type),
            name=_require_str(data, "name", cls.type),
            value=_require(data, "value", cls.type),
        )


@dataclass(frozen=True)
class KeepaliveMessage:
    type: ClassVar[str] = KEEPALIVE_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KeepaliveMessage":
        return cls()


@dataclass(frozen=True)
class CloseMessage:
    type: ClassVar[str] = CLOSE_TYPE

    reason: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"type": self.type}
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CloseMessage":
        reason = data.get("reason")
        return cls(reason=str(reason) if reason is not None else None)


@dataclass(frozen=True)
class ErrorMessage:
    type: ClassVar[str] = ERROR_TYPE

    msg: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "msg": self.msg}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ErrorMessage":
        msg = data.get("msg")
        return cls(msg="" if msg is None else str(msg))


def build_establish(version: str = PROTO_VERSION) -> EstablishMessage:
    return EstablishMessage(version=str(version))


def build_set(object_id: int, name: str, value: Any) -> SetMessage:
    return SetMessage(id=int(object_id), name=str(name), value=value)


__all__: List[str] = [
    "ACKNOWLEDGE_TYPE",
    "ACTION_TYPE",
    "CLOSE_TYPE",
    "CREATE_TYPE",
    "DYNAMIC_ID_START",
    "ERROR_TYPE",
    "ESTABLISH_TYPE",
    "KEEPALIVE_TYPE",
    "MESSAGE_TYPES",
    "PROTO_VERSION",
    "SET_TYPE",
    "SIGNAL_TYPE",
    "AcknowledgeMessage",
    "ActionMessage",
    "CloseMessage",
    "CreateMessage",
    "ErrorMessage",
    "EstablishMessage",
    "KeepaliveMessage",
    "SetMessage",
    "build_establish",
    "build_set",
]
