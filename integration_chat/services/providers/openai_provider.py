"""
OpenAI chat provider.
"""
import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from integration_chat.config.settings import OpenAISettings
from integration_chat.services.exceptions import ConfigurationError

from .base import ChatProvider

logger = logging.getLogger(__name__)


class OpenAIProvider(ChatProvider):
    """Chat completions against the OpenAI API. Conversations start empty."""

    name = "openai"
    display_name = "OpenAI"

    def __init__(self, settings: OpenAISettings, client: Optional[Any] = None):
        if not settings.api_key:
            raise ConfigurationError("OpenAI API key is not configured")

        if client is None:
            # No retries: a failed call fails the request
            client = AsyncOpenAI(
                api_key=settings.api_key,
                timeout=settings.request_timeout_seconds,
                max_retries=0,
            )

        super().__init__(
            client=client,
            model=settings.model,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
        )
        self.settings = settings
