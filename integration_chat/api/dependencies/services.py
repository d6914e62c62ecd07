"""
Chat service wiring and dependency injection for FastAPI.

One ChatService is built per provider at startup. A provider whose
configuration is invalid is left out and its error is kept so that the
endpoints and health checks can report it.
"""
import logging
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request

from integration_chat.config.settings import Settings
from integration_chat.controllers.chat_controller import ChatController
from integration_chat.services.chat_service import ChatService
from integration_chat.services.conversation import InMemoryConversationStore
from integration_chat.services.exceptions import ConfigurationError
from integration_chat.services.providers import ChatProvider, GitHubModelsProvider, OpenAIProvider

logger = logging.getLogger(__name__)

OPENAI = OpenAIProvider.name
GITHUB_MODELS = GitHubModelsProvider.name

PROVIDER_FACTORIES: Dict[str, Callable[[Settings], ChatProvider]] = {
    OPENAI: lambda settings: OpenAIProvider(settings.openai),
    GITHUB_MODELS: lambda settings: GitHubModelsProvider(settings.github_models),
}


def build_conversation_store(settings: Settings) -> InMemoryConversationStore:
    limits = settings.conversations
    return InMemoryConversationStore(
        max_messages=limits.max_messages,
        max_conversations=limits.max_conversations,
        ttl_seconds=limits.ttl_seconds,
    )


def build_chat_services(settings: Settings) -> Tuple[Dict[str, ChatService], Dict[str, str]]:
    """
    Build a ChatService for every provider.

    Returns:
        Services keyed by provider name, and configuration errors keyed by
        the names of the providers that could not be built
    """
    services: Dict[str, ChatService] = {}
    errors: Dict[str, str] = {}

    for name, factory in PROVIDER_FACTORIES.items():
        try:
            provider = factory(settings)
        except ConfigurationError as e:
            logger.error(f"Chat provider '{name}' disabled: {e}")
            errors[name] = str(e)
            continue
        services[name] = ChatService(provider, build_conversation_store(settings))
        logger.info(f"Chat provider '{name}' ready (model {provider.model})")

    return services, errors


def _controller_for(request: Request, name: str, service_label: Optional[str] = None) -> ChatController:
    services = getattr(request.app.state, "chat_services", {})
    errors = getattr(request.app.state, "provider_errors", {})
    return ChatController(
        service=services.get(name),
        unavailable_reason=errors.get(name),
        service_label=service_label,
    )


def get_openai_controller(request: Request) -> ChatController:
    """Dependency injection for the OpenAI ChatController."""
    return _controller_for(request, OPENAI)


def get_github_models_controller(request: Request) -> ChatController:
    """Dependency injection for the GitHub Models ChatController."""
    return _controller_for(request, GITHUB_MODELS, service_label="GitHub Models")
