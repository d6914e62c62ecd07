"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseModel):
    """Settings for the OpenAI chat provider (``OPENAI__*``)."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    model: str = "gpt-4o"
    max_tokens: int = Field(default=1000, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    request_timeout_seconds: float = Field(default=60.0, gt=0)


class GitHubModelsSettings(BaseModel):
    """Settings for the GitHub Models chat provider (``GITHUB_MODELS__*``)."""

    model_config = ConfigDict(frozen=True)

    github_token: str = ""
    model: str = "openai/gpt-4.1-nano"
    max_tokens: int = Field(default=1000, gt=0)
    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    endpoint: str = "https://models.github.ai/inference"
    request_timeout_seconds: float = Field(default=60.0, gt=0)


class ConversationSettings(BaseModel):
    """
    Limits for the in-memory conversation store (``CONVERSATIONS__*``).

    Every limit is disabled when unset, which keeps conversation history
    for the lifetime of the process.
    """

    model_config = ConfigDict(frozen=True)

    max_messages: Optional[int] = Field(default=None, gt=0)
    max_conversations: Optional[int] = Field(default=None, gt=0)
    ttl_seconds: Optional[float] = Field(default=None, gt=0)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
        env_nested_delimiter="__",
        populate_by_name=True,
    )

    # Application settings
    app_name: str = "Integration Chat API"
    environment: str = Field(default="local", validation_alias="SYSTEM_ENVIRONMENT")
    debug: bool = False

    # CORS settings
    allowed_origins: Optional[List[str]] = None

    # Logging settings
    log_level: str = "INFO"
    enable_request_logging: bool = False

    # Diagnostic routes such as POST /api/githubmodels/testMessage
    enable_diagnostic_endpoints: bool = False

    # Provider settings
    openai: OpenAISettings = OpenAISettings()
    github_models: GitHubModelsSettings = GitHubModelsSettings()
    conversations: ConversationSettings = ConversationSettings()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_local(self) -> bool:
        """Check if running in local development environment."""
        return self.environment == "local"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
