"""Configuration dataclasses for the remote UI client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from remote_ui.config.logging_policy import DebugPolicy, load_debug_policy
from remote_ui.protocol.messages import PROTO_VERSION


def _env_str(env: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    v = env.get(name)
    return v if v is not None and v != "" else default


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        v = env.get(name)
        return int(v) if v not in (None, "") else int(default)
    except (TypeError, ValueError):
        return int(default)


@dataclass(frozen=True)
class ClientConfig:
    """Connection and protocol settings for one client session."""

    host: str = "localhost"
    port: int = 9000
    path: str = ""
    protocol_version: str = PROTO_VERSION
    debug_policy: DebugPolicy = field(default_factory=DebugPolicy)

    @property
    def url(self) -> str:
        path = self.path.lstrip("/")
        return f"ws://{self.host}:{self.port}/{path}"

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            host=_env_str(source, "REMOTE_UI_HOST", defaults.host) or defaults.host,
            port=_env_int(source, "REMOTE_UI_PORT", defaults.port),
            path=_env_str(source, "REMOTE_UI_PATH", defaults.path) or "",
            protocol_version=_env_str(source, "REMOTE_UI_PROTOCOL_VERSION", defaults.protocol_version)
            or defaults.protocol_version,
            debug_policy=load_debug_policy(source),
        )
