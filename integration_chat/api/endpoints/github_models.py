"""
GitHub Models chat endpoints.
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from integration_chat.api.dependencies.services import get_github_models_controller
from integration_chat.api.models import (
    ChatError,
    ChatRequest,
    ChatResponse,
    DiagnosticChatResponse,
)
from integration_chat.controllers.chat_controller import ChatController

# ============================================================================
# Routers
# ============================================================================

router = APIRouter(prefix="/githubmodels")

# Only mounted when diagnostic endpoints are enabled
diagnostics_router = APIRouter(prefix="/githubmodels")


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
    controller: ChatController = Depends(get_github_models_controller),
):
    """Send a message to the GitHub Models chat model."""
    return await controller.send_message(request)


@router.get(
    "/health",
    responses={
        200: {"description": "Provider is reachable"},
        503: {"description": "Provider is unreachable or not configured"},
    },
)
async def health_check(
    controller: ChatController = Depends(get_github_models_controller),
) -> JSONResponse:
    """Health check for the GitHub Models chat provider."""
    return await controller.health()


@diagnostics_router.post(
    "/testMessage",
    status_code=status.HTTP_200_OK,
    response_model=DiagnosticChatResponse,
    responses={
        400: {"model": ChatError, "description": "Empty message or invalid request"},
        500: {"model": ChatError, "description": "Internal server error"},
    },
)
async def send_test_message(
    request: ChatRequest,
    controller: ChatController = Depends(get_github_models_controller),
):
    """
    Diagnostic: send a one-off message with fixed sampling (temperature 1.0, top-p 1.0).

    Conversation history is neither read nor written, and the supplied
    `conversationId` is echoed back as is.
    """
    return await controller.send_test_message(request)
