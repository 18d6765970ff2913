"""Decode wire argument values into primitives and live object references."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List

from remote_ui.protocol.errors import ProtocolError, ProtocolErrorKind

from .registry import ObjectRegistry

_PRIMITIVES = (str, int, float, bool, type(None))


class ArgumentCodec:
    """Resolve ``{"id": n}`` references against an :class:`ObjectRegistry`.

    Decoding is one-directional: outbound values are never encoded.
    """

    def __init__(self, registry: ObjectRegistry) -> None:
        self._registry = registry

    def decode_arguments(self, args: Any) -> List[Any]:
        if not isinstance(args, list):
            raise ProtocolError(
                ProtocolErrorKind.MALFORMED_ARGUMENTS,
                f"Arguments is not an array (got {type(args).__name__}).",
            )
        return [self.decode_argument(arg) for arg in args]

    def decode_argument(self, arg: Any) -> Any:
        if isinstance(arg, (list, tuple)):
            return [self.decode_argument(item) for item in arg]
        if isinstance(arg, Mapping):
            if "id" not in arg:
                raise ProtocolError(
                    ProtocolErrorKind.MALFORMED_ARGUMENTS,
                    "Object argument has no 'id' field.",
                )
            object_id = arg["id"]
            if isinstance(object_id, bool) or not isinstance(object_id, int):
                raise ProtocolError(
                    ProtocolErrorKind.MALFORMED_ARGUMENTS,
                    f"Object argument id must be an integer, got {object_id!r}.",
                )
            try:
                return self._registry.lookup(object_id)
            except ProtocolError as exc:
                raise ProtocolError(
                    ProtocolErrorKind.UNRESOLVABLE_ARGUMENT_REFERENCE,
                    f"Argument references unknown object {object_id}.",
                ) from exc
        if isinstance(arg, _PRIMITIVES):
            return arg
        raise ProtocolError(
            ProtocolErrorKind.MALFORMED_ARGUMENTS,
            f"Argument of type {type(arg).__name__} is not representable.",
        )


__all__ = ["ArgumentCodec"]
