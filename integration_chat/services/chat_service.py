"""
Chat service: conversation bookkeeping around a chat provider.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from integration_chat.api.models.chat import ChatRequest, ChatResponse, DiagnosticChatResponse
from integration_chat.services.conversation import ConversationStore, InMemoryConversationStore
from integration_chat.services.exceptions import InvalidMessage, InvalidRequest
from integration_chat.services.providers import ChatProvider

logger = logging.getLogger(__name__)


def _require_message(request: ChatRequest) -> str:
    if request.message is None or not request.message.strip():
        raise InvalidMessage("Message cannot be empty")
    return request.message


class ChatService:
    """
    Sends chat messages through one provider and keeps their history.

    Args:
        provider: Provider adapter bound to this service
        store: Conversation store; a fresh in-memory store when omitted
    """

    def __init__(self, provider: ChatProvider, store: Optional[ConversationStore] = None):
        self.provider = provider
        self.store = store if store is not None else InMemoryConversationStore()

    @property
    def model(self) -> str:
        return self.provider.model

    @property
    def provider_name(self) -> str:
        return self.provider.name

    async def send_message(self, request: ChatRequest) -> ChatResponse:
        """
        Send a message within a conversation.

        Args:
            request: ChatRequest with the message and optional conversation id

        Returns:
            ChatResponse carrying the resolved conversation id

        Raises:
            InvalidMessage: If the message is empty or whitespace
            UpstreamFailure: If the provider call fails
        """
        message = _require_message(request)

        conversation_id, log = self.store.get_or_create(
            request.conversation_id,
            seed=self.provider.seed_messages(),
        )

        try:
            completion = await self.provider.complete(log, message)
        except Exception:
            logger.exception(
                f"Error occurred while processing {self.provider.display_name} chat request "
                f"for conversation {conversation_id}"
            )
            raise
        self.store.save(log)

        return ChatResponse(
            message=completion.text,
            conversation_id=conversation_id,
            timestamp=datetime.now(timezone.utc),
            model=self.model,
            tokens_used=completion.tokens_used,
        )

    async def send_test_message(self, request: ChatRequest) -> DiagnosticChatResponse:
        """
        Diagnostic one-off completion. Conversation history is not touched.

        Raises:
            InvalidRequest: If the provider has no diagnostic path
        """
        message = _require_message(request)
        if not self.provider.supports_test_message:
            raise InvalidRequest(f"Test messages are not supported by {self.provider.display_name}")
        completion = await self.provider.test_message(message)
        return DiagnosticChatResponse(
            message=completion.text,
            conversation_id=request.conversation_id,
            timestamp=datetime.now(timezone.utc),
            model=self.model,
            tokens_used=completion.tokens_used,
        )

    async def is_healthy(self) -> bool:
        """True if a minimal completion returns non-empty text. Never raises."""
        try:
            reply = await self.provider.check_health()
        except Exception as e:
            logger.warning(f"{self.provider.display_name} health check failed: {e}")
            return False
        return bool(reply)
