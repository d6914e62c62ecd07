"""
Request and response models for chat endpoints.

JSON keys are camelCase on the wire; snake_case is accepted on input too.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequest(CamelModel):
    """Payload for a chat message.

    - message: Text sent to the model. Emptiness is checked by the controller
      so that it maps onto the INVALID_MESSAGE error code.
    - conversationId: Continue an existing conversation; a new one is
      created when omitted
    """
    message: Optional[str] = Field(None, description="Message to send", examples=["Hello"])
    conversation_id: Optional[str] = Field(
        None, description="Conversation to continue; generated when omitted"
    )


class ChatResponse(CamelModel):
    """Model reply plus bookkeeping for one chat message."""
    message: str = Field(..., description="Reply text from the model")
    conversation_id: str = Field(..., description="Conversation the reply belongs to")
    timestamp: datetime = Field(..., description="Time the reply was produced (UTC)")
    model: str = Field(..., description="Model that produced the reply")
    tokens_used: int = Field(0, ge=0, description="Total tokens reported by the provider")


class DiagnosticChatResponse(ChatResponse):
    """Reply to a diagnostic test message. The conversation id is echoed, never generated."""
    conversation_id: Optional[str] = Field(None, description="Conversation id supplied by the caller")


class ServiceHealthResponse(BaseModel):
    """Health status of one chat provider."""
    status: str
    timestamp: datetime
    service: Optional[str] = None
    error: Optional[str] = None
