"""
Exceptions raised by the chat services.

The HTTP layer maps these onto status codes:
``InvalidRequest`` -> 400, ``UpstreamFailure`` -> 500,
``ConfigurationError`` -> provider path unavailable.
"""


class ChatServiceError(Exception):
    """Base class for chat service errors."""


class InvalidRequest(ChatServiceError, ValueError):
    """The request was rejected before reaching the provider."""

    code = "INVALID_REQUEST"


class InvalidMessage(InvalidRequest):
    """The chat message is empty or whitespace only."""

    code = "INVALID_MESSAGE"


class ConfigurationError(ChatServiceError):
    """A provider is missing required configuration (e.g. its credential)."""


class UpstreamFailure(ChatServiceError):
    """The remote completion call failed. The cause is chained."""

    def __init__(self, provider: str, message: str = "upstream completion failed"):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
