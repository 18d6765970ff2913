"""Status bar proxy with a context-scoped message stack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .base import PropertySpec, read_only
from .widgets import Box


@dataclass(frozen=True)
class StatusMessage:
    message_id: int
    context_id: int
    text: str


class StatusBar(Box):
    """Report messages of minor importance to the user.

    Messages form a single display stack; the top entry is shown. Every
    message carries a context id (see ``getContextId``) so independent
    producers can push and pop their own entries.
    """

    properties = {
        "shadow-type": PropertySpec(default="in"),
        "text": read_only(default=""),
    }
    actions = {
        "getContextId": "get_context_id",
        "push": "push",
        "pop": "pop",
        "remove": "remove_message",
        "removeAll": "remove_all",
    }

    def __init__(self, **initial: Any) -> None:
        self.contexts: List[str] = ["default"]
        self.messages: List[StatusMessage] = []
        self._next_message_id = 1
        super().__init__(**initial)
        self._store("spacing", 2)

    def get_context_id(self, description: str) -> int:
        for index in range(len(self.contexts) - 1, -1, -1):
            if self.contexts[index] == description:
                return index
        self.contexts.append(description)
        return len(self.contexts) - 1

    def push(self, text: str, context_id: Optional[int] = None) -> int:
        context_id = self._check_context_id(context_id)
        message = StatusMessage(message_id=self._next_message_id, context_id=context_id, text=str(text))
        self._next_message_id += 1
        self.messages.append(message)
        self._update_text()
        return message.message_id

    def pop(self, context_id: Optional[int] = None) -> None:
        context_id = self._check_context_id(context_id)
        for index in range(len(self.messages) - 1, -1, -1):
            if self.messages[index].context_id == context_id:
                del self.messages[index]
                self._update_text()
                return

    def remove_message(self, context_id: Optional[int], message_id: int) -> None:
        context_id = self._check_context_id(context_id)
        for index in range(len(self.messages) - 1, -1, -1):
            message = self.messages[index]
            if message.message_id == message_id and message.context_id == context_id:
                del self.messages[index]
                self._update_text()
                return

    def remove_all(self, context_id: Optional[int] = None) -> None:
        context_id = self._check_context_id(context_id)
        self.messages = [m for m in self.messages if m.context_id != context_id]
        self._update_text()

    def _check_context_id(self, context_id: Optional[int]) -> int:
        if context_id is None:
            context_id = 0
        # bool is an int subclass but never a context id
        if isinstance(context_id, bool) or not isinstance(context_id, int) or not 0 <= context_id < len(self.contexts):
            raise ValueError("Given context id is unknown.")
        return context_id

    def _update_text(self) -> None:
        self._store("text", self.messages[-1].text if self.messages else "")


__all__ = ["StatusBar", "StatusMessage"]
