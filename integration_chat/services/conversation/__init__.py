from .models import Message, MessageLog, Role
from .store import ConversationStore, InMemoryConversationStore

__all__ = [
    "Message",
    "MessageLog",
    "Role",
    "ConversationStore",
    "InMemoryConversationStore",
]
