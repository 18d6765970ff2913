"""Root objects supplied by the embedding environment."""

from __future__ import annotations

from typing import Any, Dict

from .base import PropertySpec, RemoteObject, read_only

APPLICATION_ID = 1
SCREEN_ID = 2


class Application(RemoteObject):
    properties = {
        "name": PropertySpec(default=""),
        "main-window": PropertySpec(default=None),
        "running": read_only(default=True),
    }
    actions = {
        "quit": "quit",
    }

    def quit(self) -> None:
        self._store("running", False)


class Screen(RemoteObject):
    properties = {
        "width": read_only(default=0),
        "height": read_only(default=0),
        "size": read_only(getter="_size"),
    }

    def __init__(self, width: int = 0, height: int = 0, **initial: Any) -> None:
        super().__init__(**initial)
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        """Record a new screen size reported by the hosting environment."""

        self._store("width", int(width))
        self._store("height", int(height))

    def _size(self) -> Dict[str, int]:
        return {"width": self._values["width"], "height": self._values["height"]}


def default_singletons() -> Dict[int, RemoteObject]:
    return {
        APPLICATION_ID: Application(),
        SCREEN_ID: Screen(),
    }


__all__ = ["APPLICATION_ID", "SCREEN_ID", "Application", "Screen", "default_singletons"]
