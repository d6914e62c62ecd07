"""
Base class for chat-completion providers.

Both supported providers speak the OpenAI chat-completions protocol, so the
request/response handling lives here and the variants only differ in how
they build their client and which generation parameters they send.
"""
import logging
from abc import ABC
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from integration_chat.services.conversation import Message, MessageLog
from integration_chat.services.exceptions import UpstreamFailure
from integration_chat.services.prompts import HEALTH_CHECK_PROMPT

logger = logging.getLogger(__name__)

HEALTH_CHECK_MAX_TOKENS = 5
HEALTH_CHECK_TEMPERATURE = 0.1


@dataclass(frozen=True)
class Completion:
    """Reply text and total token usage of one completion."""

    text: str
    tokens_used: int = 0


class ChatProvider(ABC):
    """
    Adapter between conversation history and a remote completion endpoint.

    Args:
        client: Async OpenAI-compatible client (``client.chat.completions.create``)
        model: Model name sent with every request
        max_tokens: Output token cap for chat completions
        temperature: Sampling temperature for chat completions
    """

    name = "provider"
    display_name = "Chat provider"
    system_prompt: Optional[str] = None
    # Whether test_message is implemented; checked before dispatching to it
    supports_test_message = False

    def __init__(self, client: Any, model: str, max_tokens: int, temperature: float):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def seed_messages(self) -> Tuple[Message, ...]:
        """Messages a new conversation starts with."""
        if self.system_prompt:
            return (Message.system(self.system_prompt),)
        return ()

    def generation_params(self) -> Dict[str, Any]:
        return {"max_tokens": self.max_tokens, "temperature": self.temperature}

    def health_check_params(self) -> Dict[str, Any]:
        return {"max_tokens": HEALTH_CHECK_MAX_TOKENS, "temperature": HEALTH_CHECK_TEMPERATURE}

    async def complete(self, log: MessageLog, user_message: str) -> Completion:
        """
        Send the conversation plus a new user message to the provider.

        The user message and the assistant reply are appended to ``log``
        together once the call succeeds; a failed call leaves it untouched.

        Raises:
            UpstreamFailure: If the remote call fails
        """
        user = Message.user(user_message)
        history = [*log.snapshot(), user]

        completion = await self._create_completion(history, **self.generation_params())

        log.extend((user, Message.assistant(completion.text)))
        logger.info(
            f"{self.display_name} chat completion successful for conversation "
            f"{log.conversation_id} ({completion.tokens_used} tokens)"
        )
        return completion

    async def check_health(self) -> str:
        """Run a minimal completion and return its text."""
        messages = [*self.seed_messages(), Message.user(HEALTH_CHECK_PROMPT)]
        completion = await self._create_completion(messages, **self.health_check_params())
        return completion.text

    async def test_message(self, text: str) -> Completion:
        """One-off completion outside any conversation. Diagnostic only."""
        raise NotImplementedError(f"{self.display_name} does not support test messages")

    async def _create_completion(self, messages: Sequence[Message], **params: Any) -> Completion:
        payload: List[Dict[str, str]] = [message.to_openai() for message in messages]
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=payload,
                **params,
            )
        except Exception as e:
            raise UpstreamFailure(self.name, f"completion request failed: {type(e).__name__}") from e

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> Completion:
        choices = getattr(response, "choices", None)
        if not choices:
            raise UpstreamFailure(self.name, "completion returned no choices")

        text = choices[0].message.content or ""
        usage = getattr(response, "usage", None)
        tokens_used = (getattr(usage, "total_tokens", None) or 0) if usage is not None else 0
        return Completion(text=text, tokens_used=tokens_used)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r})"
