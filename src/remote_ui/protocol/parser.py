"""Decode raw transport payloads into typed protocol messages."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Mapping, Sequence, Union

from .errors import ProtocolError, ProtocolErrorKind
from .messages import (
    ACKNOWLEDGE_TYPE,
    ACTION_TYPE,
    CLOSE_TYPE,
    CREATE_TYPE,
    ERROR_TYPE,
    ESTABLISH_TYPE,
    KEEPALIVE_TYPE,
    SET_TYPE,
    AcknowledgeMessage,
    ActionMessage,
    CloseMessage,
    CreateMessage,
    ErrorMessage,
    EstablishMessage,
    KeepaliveMessage,
    SetMessage,
)

RawMessage = Mapping[str, Any]
RawPayload = Union[RawMessage, Sequence[RawMessage]]

_LOADERS: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
    ESTABLISH_TYPE: EstablishMessage.from_dict,
    ACKNOWLEDGE_TYPE: AcknowledgeMessage.from_dict,
    CREATE_TYPE: CreateMessage.from_dict,
    ACTION_TYPE: ActionMessage.from_dict,
    SET_TYPE: SetMessage.from_dict,
    KEEPALIVE_TYPE: KeepaliveMessage.from_dict,
    CLOSE_TYPE: CloseMessage.from_dict,
    ERROR_TYPE: ErrorMessage.from_dict,
}


def message_type(data: Any) -> str | None:
    """Return the lower-cased ``type`` tag of *data*, or None when absent."""

    if not isinstance(data, Mapping):
        return None
    raw_type = data.get("type")
    if not isinstance(raw_type, str) or not raw_type:
        return None
    return raw_type.lower()


def iter_messages(payload: Any) -> List[Any]:
    """Flatten a delivery into the ordered list of messages it carries.

    A single message is returned as a one-element list. A batch keeps its
    order; nested batches are flattened depth-first.
    """

    if isinstance(payload, (list, tuple)):
        flattened: List[Any] = []
        for entry in payload:
            flattened.extend(iter_messages(entry))
        return flattened
    return [payload]


class MessageParser:
    """Turn mappings (or JSON text) into typed message dataclasses."""

    def parse(self, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED_MESSAGE,
                f"Message must be an object, got {type(data).__name__}.",
            )
        msg_type = message_type(data)
        loader = _LOADERS.get(msg_type or "")
        if loader is None:
            raise ProtocolError(
                ProtocolErrorKind.UNRECOGNIZED_MESSAGE_TYPE,
                f"Unknown or unhandled message type '{data.get('type')}'.",
            )
        return loader(data)

    def decode_json(self, raw: str | bytes | bytearray) -> Any:
        """Decode a JSON frame into a message mapping or a batch list."""

        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ProtocolError(
                    ProtocolErrorKind.MALFORMED_MESSAGE,
                    "Frame payload was not UTF-8 text.",
                ) from exc
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED_MESSAGE,
                f"Frame payload was not valid JSON: {exc.msg}.",
            ) from exc
        if not isinstance(decoded, (Mapping, list)):
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED_MESSAGE,
                "Frame payload must be a JSON object or array.",
            )
        return decoded


def encode_json(message: Any) -> str:
    """Serialize a message dataclass or mapping as compact JSON."""

    to_dict = getattr(message, "to_dict", None)
    payload = to_dict() if callable(to_dict) else message
    return json.dumps(payload, separators=(",", ":"))


__all__ = [
    "MessageParser",
    "RawMessage",
    "RawPayload",
    "encode_json",
    "iter_messages",
    "message_type",
]
