from .base import ChatProvider, Completion
from .github_models_provider import GitHubModelsProvider
from .openai_provider import OpenAIProvider

__all__ = [
    "ChatProvider",
    "Completion",
    "GitHubModelsProvider",
    "OpenAIProvider",
]
