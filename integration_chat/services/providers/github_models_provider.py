"""
GitHub Models chat provider.

GitHub Models exposes an OpenAI-compatible inference endpoint, so the
OpenAI SDK is pointed at it with the GitHub token as the API key.
"""
import logging
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from integration_chat.config.settings import GitHubModelsSettings
from integration_chat.services.conversation import Message
from integration_chat.services.exceptions import ConfigurationError
from integration_chat.services.prompts import DEFAULT_SYSTEM_PROMPT

from .base import ChatProvider, Completion

logger = logging.getLogger(__name__)

# Sampling used by the diagnostic test-message call
TEST_MESSAGE_TEMPERATURE = 1.0
TEST_MESSAGE_TOP_P = 1.0


class GitHubModelsProvider(ChatProvider):
    """Chat completions against GitHub Models. Conversations start with a system preamble."""

    name = "github_models"
    display_name = "GitHub Models"
    system_prompt = DEFAULT_SYSTEM_PROMPT
    supports_test_message = True

    def __init__(self, settings: GitHubModelsSettings, client: Optional[Any] = None):
        if not settings.github_token:
            raise ConfigurationError("GitHub token is not configured")

        if client is None:
            client = AsyncOpenAI(
                api_key=settings.github_token,
                base_url=settings.endpoint,
                timeout=settings.request_timeout_seconds,
                max_retries=0,
            )

        super().__init__(
            client=client,
            model=settings.model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
        )
        self.top_p = settings.top_p
        self.settings = settings

    def generation_params(self) -> Dict[str, Any]:
        params = super().generation_params()
        params["top_p"] = self.top_p
        return params

    def health_check_params(self) -> Dict[str, Any]:
        params = super().health_check_params()
        params["top_p"] = 1.0
        return params

    async def test_message(self, text: str) -> Completion:
        """
        Send ``text`` in a throwaway conversation with fixed sampling.

        Nothing is stored; the history only lives for this call.
        """
        messages = [*self.seed_messages(), Message.user(text)]
        completion = await self._create_completion(
            messages,
            temperature=TEST_MESSAGE_TEMPERATURE,
            top_p=TEST_MESSAGE_TOP_P,
        )
        logger.info(f"GitHub Models test message completed ({completion.tokens_used} tokens)")
        return completion
