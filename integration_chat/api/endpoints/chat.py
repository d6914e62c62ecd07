"""
OpenAI chat endpoints.

Sends messages to the configured OpenAI model and keeps per-conversation
history in memory.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from integration_chat.api.dependencies.services import get_openai_controller
from integration_chat.api.models import ChatError, ChatRequest, ChatResponse
from integration_chat.controllers.chat_controller import ChatController

# ============================================================================
# Router
# ============================================================================

router = APIRouter(prefix="/chat")


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/message",
    status_code=status.HTTP_200_OK,
    response_model=ChatResponse,
    responses={
        400: {"model": ChatError, "description": "Empty message or invalid request"},
        500: {"model": ChatError, "description": "Internal server error"},
    },
)
async def send_message(
    request: ChatRequest,
    controller: ChatController = Depends(get_openai_controller),
):
    """
    Send a message to the OpenAI chat model.

    Omit `conversationId` to start a new conversation; the generated id is
    returned and can be sent back to continue it.
    """
    return await controller.send_message(request)


@router.get(
    "/health",
    responses={
        200: {"description": "Provider is reachable"},
        503: {"description": "Provider is unreachable or not configured"},
    },
)
async def health_check(
    controller: ChatController = Depends(get_openai_controller),
) -> JSONResponse:
    """Health check for the OpenAI chat provider."""
    return await controller.health()
