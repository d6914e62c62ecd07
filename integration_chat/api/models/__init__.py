from .chat import ChatRequest, ChatResponse, DiagnosticChatResponse, ServiceHealthResponse
from .error import INTERNAL_ERROR, INVALID_MESSAGE, INVALID_REQUEST, ChatError

__all__ = [
    "ChatError",
    "ChatRequest",
    "ChatResponse",
    "ServiceHealthResponse",
    "DiagnosticChatResponse",
    "INTERNAL_ERROR",
    "INVALID_MESSAGE",
    "INVALID_REQUEST",
]
