"""Central debug/logging policy plumbing for the remote UI client."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

_TRUTHY = ("1", "true", "yes", "on", "dbg", "debug")
_GLOBAL_DEBUG_ENV = "REMOTE_UI_DEBUG"
_LOCAL_HANDLER_TAG = "_remote_ui_local"
_LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"


def _flag(env: Mapping[str, str], name: str) -> bool:
    return (env.get(name) or "").strip().lower() in _TRUTHY


def maybe_enable_debug_logger(
    logger: logging.Logger,
    *env_names: str,
    env: Optional[Mapping[str, str]] = None,
) -> bool:
    """Enable DEBUG logging for *logger* when any of *env_names* is set.

    ``REMOTE_UI_DEBUG`` switches every module at once. A single tagged
    stream handler is attached so repeated calls stay idempotent.
    """

    source = os.environ if env is None else env
    names = (*env_names, _GLOBAL_DEBUG_ENV)
    if not any(_flag(source, name) for name in names):
        return False
    has_local = any(getattr(h, _LOCAL_HANDLER_TAG, False) for h in logger.handlers)
    if not has_local:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler.setLevel(logging.DEBUG)
        setattr(handler, _LOCAL_HANDLER_TAG, True)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return True


@dataclass(frozen=True)
class DebugPolicy:
    enabled: bool = False
    log_messages: bool = False
    log_property_changes: bool = False
    log_sends: bool = False


def load_debug_policy(env: Optional[Mapping[str, str]] = None) -> DebugPolicy:
    """Resolve the debug policy from *env* (defaults to ``os.environ``)."""

    source = os.environ if env is None else env
    enabled = _flag(source, _GLOBAL_DEBUG_ENV)
    return DebugPolicy(
        enabled=enabled,
        log_messages=enabled or _flag(source, "REMOTE_UI_LOG_MESSAGES"),
        log_property_changes=enabled or _flag(source, "REMOTE_UI_LOG_PROPERTY_CHANGES"),
        log_sends=enabled or _flag(source, "REMOTE_UI_LOG_SENDS"),
    )


def configure_logging(level: int = logging.INFO) -> None:
    """Install a root handler using the shared log format."""

    logging.basicConfig(level=level, format=_LOG_FORMAT)


__all__ = [
    "DebugPolicy",
    "configure_logging",
    "load_debug_policy",
    "maybe_enable_debug_logger",
]
