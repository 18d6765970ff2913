"""Configuration dataclasses for the remote UI client."""

from .logging_policy import DebugPolicy, configure_logging, load_debug_policy, maybe_enable_debug_logger
from .models import ClientConfig

__all__ = [
    "ClientConfig",
    "DebugPolicy",
    "configure_logging",
    "load_debug_policy",
    "maybe_enable_debug_logger",
]
