"""
Chat controller.

Validates chat requests, delegates to a ChatService and translates service
results and failures into HTTP responses.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, Union

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from integration_chat.api.models import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    ChatError,
    ChatRequest,
    ChatResponse,
    ServiceHealthResponse,
)
from integration_chat.services.chat_service import ChatService
from integration_chat.services.exceptions import (
    ConfigurationError,
    InvalidMessage,
    InvalidRequest,
)

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    """Build a ``{message, code}`` error response."""
    return JSONResponse(
        status_code=status_code,
        content=ChatError(message=message, code=code).model_dump(),
    )


class ChatController:
    """
    Controller for one chat provider path.

    Args:
        service: ChatService bound to the provider, or None when the provider
            failed to initialize
        unavailable_reason: Why ``service`` is missing (shown by health checks)
        service_label: Optional ``service`` field added to health responses
    """

    def __init__(
        self,
        service: Optional[ChatService],
        unavailable_reason: Optional[str] = None,
        service_label: Optional[str] = None,
    ):
        self.service = service
        self.unavailable_reason = unavailable_reason
        self.service_label = service_label

    def _validate_request(self, request: ChatRequest) -> None:
        """
        Validate chat request.

        Raises:
            InvalidMessage: If the message is missing, empty or whitespace
        """
        if request.message is None or not request.message.strip():
            raise InvalidMessage("Message cannot be empty")

    def _require_service(self) -> ChatService:
        if self.service is None:
            raise ConfigurationError(self.unavailable_reason or "Chat provider is not configured")
        return self.service

    async def send_message(self, request: ChatRequest) -> Union[ChatResponse, JSONResponse]:
        """Send a message within a conversation."""
        return await self._dispatch(request, test=False)

    async def send_test_message(self, request: ChatRequest) -> Union[ChatResponse, JSONResponse]:
        """Send a diagnostic one-off message."""
        return await self._dispatch(request, test=True)

    async def _dispatch(self, request: ChatRequest, test: bool) -> Union[ChatResponse, JSONResponse]:
        try:
            self._validate_request(request)
            service = self._require_service()
            if test:
                return await service.send_test_message(request)
            return await service.send_message(request)

        except InvalidRequest as e:
            logger.warning(f"Invalid chat request: {e}")
            return error_response(status.HTTP_400_BAD_REQUEST, str(e), e.code)

        except ValueError as e:
            logger.warning(f"Invalid request parameters: {e}")
            return error_response(status.HTTP_400_BAD_REQUEST, str(e), INVALID_REQUEST)

        except Exception as e:
            logger.error(f"Error processing chat message: {type(e).__name__}: {e}")
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error occurred",
                INTERNAL_ERROR,
            )

    async def health(self) -> JSONResponse:
        """Report provider health as 200 healthy or 503 unhealthy."""
        error = None
        try:
            healthy = await self._require_service().is_healthy()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            healthy = False
            error = str(e)

        body = ServiceHealthResponse(
            status="healthy" if healthy else "unhealthy",
            service=self.service_label,
            timestamp=datetime.now(timezone.utc),
            error=error,
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=jsonable_encoder(body, exclude_none=True),
        )
