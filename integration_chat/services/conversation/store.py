"""
Conversation storage.

``ConversationStore`` is the interface the chat service depends on;
``InMemoryConversationStore`` keeps every conversation in process memory.
"""
import logging
import sys
import threading
import time
import uuid
from abc import ABC, abstractmethod
from typing import Callable, Iterable, MutableMapping, Optional, Tuple

from cachetools import LRUCache, TTLCache

from .models import Message, MessageLog

logger = logging.getLogger(__name__)


class ConversationStore(ABC):
    """Mapping from conversation id to its message log."""

    @abstractmethod
    def get_or_create(
        self,
        conversation_id: Optional[str] = None,
        seed: Iterable[Message] = (),
    ) -> Tuple[str, MessageLog]:
        """
        Resolve a conversation, creating it when needed.

        Args:
            conversation_id: Existing or caller-chosen id. A fresh id is
                generated when omitted.
            seed: Messages a newly created log starts with. Ignored when
                the conversation already exists.

        Returns:
            The resolved conversation id and its message log
        """

    @abstractmethod
    def save(self, log: MessageLog) -> None:
        """
        Store ``log`` back under its conversation id after it was written to.

        A log evicted while a request held it is put back. If another log
        has been created under the same id in the meantime, that one wins.
        """

    @abstractmethod
    def get(self, conversation_id: str) -> Optional[MessageLog]:
        """Return the log for ``conversation_id`` or None."""

    @abstractmethod
    def delete(self, conversation_id: str) -> bool:
        """Drop a conversation. Returns True if it existed."""

    def append(self, conversation_id: str, message: Message) -> None:
        self.extend(conversation_id, (message,))

    def extend(self, conversation_id: str, messages: Iterable[Message]) -> None:
        """Append messages to a conversation atomically, creating it if unknown."""
        _, log = self.get_or_create(conversation_id)
        log.extend(messages)
        self.save(log)

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())


class InMemoryConversationStore(ConversationStore):
    """
    Process-local conversation store.

    Bounded stores keep their logs in a ``cachetools`` cache: a ``TTLCache``
    when ``ttl_seconds`` is set, an ``LRUCache`` when only
    ``max_conversations`` is. The caches are not thread-safe, so the map
    lock guards every lookup and insert; appends go through the
    per-conversation lock on each ``MessageLog``.

    Args:
        max_messages: Cap on messages kept per conversation
        max_conversations: Least recently used conversations are evicted
            beyond this count
        ttl_seconds: Conversations idle for longer are evicted
        timer: Clock for the idle timeout
    """

    def __init__(
        self,
        max_messages: Optional[int] = None,
        max_conversations: Optional[int] = None,
        ttl_seconds: Optional[float] = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.max_messages = max_messages
        self.max_conversations = max_conversations
        self.ttl_seconds = ttl_seconds
        self._conversations: MutableMapping[str, MessageLog]
        if ttl_seconds is not None:
            self._conversations = TTLCache(
                maxsize=max_conversations or sys.maxsize,
                ttl=ttl_seconds,
                timer=timer,
            )
        elif max_conversations is not None:
            self._conversations = LRUCache(maxsize=max_conversations)
        else:
            self._conversations = {}
        self._lock = threading.Lock()

    def get_or_create(
        self,
        conversation_id: Optional[str] = None,
        seed: Iterable[Message] = (),
    ) -> Tuple[str, MessageLog]:
        resolved_id = conversation_id or self.new_id()
        with self._lock:
            log = self._conversations.get(resolved_id)
            if log is None:
                log = MessageLog(resolved_id, seed, max_messages=self.max_messages)
                logger.debug(f"Created conversation {resolved_id}")
            # Re-assigning restarts the idle timeout and marks it recently used
            self._conversations[resolved_id] = log
        return resolved_id, log

    def save(self, log: MessageLog) -> None:
        with self._lock:
            current = self._conversations.get(log.conversation_id)
            if current is None:
                logger.info(f"Restoring conversation {log.conversation_id} evicted during a request")
            elif current is not log:
                logger.warning(
                    f"Conversation {log.conversation_id} was recreated during a request; keeping the newer log"
                )
                return
            self._conversations[log.conversation_id] = log

    def get(self, conversation_id: str) -> Optional[MessageLog]:
        with self._lock:
            return self._conversations.get(conversation_id)

    def delete(self, conversation_id: str) -> bool:
        with self._lock:
            return self._conversations.pop(conversation_id, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._conversations.clear()

    def __len__(self) -> int:
        with self._lock:
            if isinstance(self._conversations, TTLCache):
                self._conversations.expire()
            return len(self._conversations)

    def __contains__(self, conversation_id: object) -> bool:
        with self._lock:
            return conversation_id in self._conversations
