"""Protocol version negotiation for the establish/acknowledge exchange."""

from __future__ import annotations

from packaging.version import InvalidVersion, Version

from remote_ui.protocol.errors import ProtocolError, ProtocolErrorKind


def parse_version(text: str) -> Version:
    return Version(str(text).strip())


def negotiate_version(local: str, peer: str) -> str:
    """Return *peer* when it is at least *local*; otherwise refuse the session.

    Versions follow PEP 440 precedence, so ``"1.10"`` ranks above ``"1.9"``.
    """

    local_version = parse_version(local)
    try:
        peer_version = parse_version(peer)
    except InvalidVersion as exc:
        raise ProtocolError(
            ProtocolErrorKind.HANDSHAKE_VERSION_TOO_LOW,
            f"Server protocol version '{peer}' is not a valid version.",
        ) from exc
    if peer_version < local_version:
        raise ProtocolError(
            ProtocolErrorKind.HANDSHAKE_VERSION_TOO_LOW,
            f"Server protocol version {peer} is lower than ours ({local}).",
        )
    return str(peer)


__all__ = ["negotiate_version", "parse_version"]
