"""Protocol definitions for the remote UI object mirror."""

from __future__ import annotations

from .errors import *  # noqa: F401,F403
from .messages import *  # noqa: F401,F403
from .parser import MessageParser, encode_json, iter_messages, message_type

__all__ = [name for name in globals().keys() if not name.startswith("_")]
