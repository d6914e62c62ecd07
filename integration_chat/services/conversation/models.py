"""
Conversation messages and the per-conversation message log.
"""
import threading
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    """Author of a message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single role-tagged chat message. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: Role
    text: str

    @classmethod
    def system(cls, text: str) -> "Message":
        return cls(role=Role.SYSTEM, text=text)

    @classmethod
    def user(cls, text: str) -> "Message":
        return cls(role=Role.USER, text=text)

    @classmethod
    def assistant(cls, text: str) -> "Message":
        return cls(role=Role.ASSISTANT, text=text)

    def to_openai(self) -> Dict[str, str]:
        """Chat-completions wire shape: ``{"role": ..., "content": ...}``."""
        return {"role": self.role.value, "content": self.text}


class MessageLog:
    """
    Ordered, append-only sequence of messages for one conversation.

    Each log carries its own lock so that writers on different
    conversations never contend with each other.

    Args:
        conversation_id: Identifier of the owning conversation
        messages: Initial messages (e.g. a system preamble)
        max_messages: Optional cap; when exceeded the oldest user turns
            (with their replies) are dropped, the system preamble is kept
    """

    def __init__(
        self,
        conversation_id: str,
        messages: Iterable[Message] = (),
        max_messages: Optional[int] = None,
    ):
        self.conversation_id = conversation_id
        self.max_messages = max_messages
        self._messages = list(messages)
        self._lock = threading.Lock()

    def append(self, message: Message) -> None:
        self.extend((message,))

    def extend(self, messages: Iterable[Message]) -> None:
        """Append messages atomically, in the given order."""
        messages = list(messages)
        with self._lock:
            self._messages.extend(messages)
            self._enforce_cap()

    def snapshot(self) -> Tuple[Message, ...]:
        """Return an immutable copy of the current messages."""
        with self._lock:
            return tuple(self._messages)

    def _enforce_cap(self) -> None:
        if self.max_messages is None:
            return
        if len(self._messages) <= self.max_messages:
            return
        preamble = [m for m in self._messages if m.role is Role.SYSTEM]
        turns = [m for m in self._messages if m.role is not Role.SYSTEM]
        # Drop whole turns: a user message goes with the replies that follow it,
        # so history never opens on an assistant message.
        while turns and len(preamble) + len(turns) > self.max_messages:
            turns.pop(0)
            while turns and turns[0].role is not Role.USER:
                turns.pop(0)
        self._messages = preamble + turns

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"MessageLog(conversation_id={self.conversation_id!r}, messages={len(self)})"
