"""Pytest configuration and shared fixtures."""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from integration_chat.config.settings import GitHubModelsSettings, OpenAISettings, Settings
from integration_chat.main import create_app
from integration_chat.services.chat_service import ChatService
from integration_chat.services.conversation import InMemoryConversationStore
from integration_chat.services.providers import GitHubModelsProvider, OpenAIProvider


class FakeCompletions:
    """Stands in for ``client.chat.completions`` of the OpenAI SDK."""

    def __init__(self, reply: str = "Hi there", tokens: Optional[int] = 3, error: Exception = None):
        self.reply = reply
        self.tokens = tokens
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        usage = None if self.tokens is None else SimpleNamespace(total_tokens=self.tokens)
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(role="assistant", content=self.reply))],
            usage=usage,
        )


class FakeClient:
    def __init__(self, **kwargs):
        self.completions = FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client():
    """Factory for fake SDK clients: ``make_client(reply=..., tokens=..., error=...)``."""
    return FakeClient


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def openai_settings():
    return OpenAISettings(api_key="sk-test", model="gpt-4o", max_tokens=256, temperature=0.7)


@pytest.fixture
def github_settings():
    return GitHubModelsSettings(
        github_token="ghp-test",
        model="openai/gpt-4.1-nano",
        max_tokens=512,
        temperature=0.9,
        top_p=0.8,
    )


@pytest.fixture
def openai_provider(openai_settings, fake_client):
    return OpenAIProvider(openai_settings, client=fake_client)


@pytest.fixture
def github_provider(github_settings):
    return GitHubModelsProvider(github_settings, client=FakeClient(reply="Hello from GitHub", tokens=7))


@pytest.fixture
def store():
    return InMemoryConversationStore()


@pytest.fixture
def openai_service(openai_provider, store):
    return ChatService(openai_provider, store)


@pytest.fixture
def github_service(github_provider):
    return ChatService(github_provider, InMemoryConversationStore())


@pytest.fixture
def settings():
    return Settings(_env_file=None, environment="test")


@pytest.fixture
def client(settings, openai_service, github_service):
    """TestClient with both providers backed by fake SDK clients."""
    app = create_app(
        settings=settings,
        chat_services={"openai": openai_service, "github_models": github_service},
    )
    with TestClient(app) as test_client:
        yield test_client
