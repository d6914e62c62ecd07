"""
Integration Chat API
FastAPI gateway to OpenAI and GitHub Models chat completions.
"""
import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from integration_chat import __version__
from integration_chat.api.dependencies.services import build_chat_services
from integration_chat.api.endpoints import health
from integration_chat.api.routers import api_router, diagnostics_router
from integration_chat.config.settings import Settings, get_settings
from integration_chat.middleware.error_handling import (
    ErrorHandlingMiddleware,
    request_validation_handler,
)
from integration_chat.middleware.request_logging import RequestLoggingMiddleware
from integration_chat.services.chat_service import ChatService
from integration_chat.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    chat_services: Optional[Dict[str, ChatService]] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        chat_services: Prebuilt services keyed by provider name; when given,
            providers are not built from settings at startup
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan context manager."""
        configure_logging(settings.log_level)
        logger.info(f"Starting {settings.app_name} ({settings.environment})")

        if chat_services is None:
            app.state.chat_services, app.state.provider_errors = build_chat_services(settings)
        else:
            app.state.chat_services, app.state.provider_errors = dict(chat_services), {}

        if not app.state.chat_services:
            logger.error("No chat provider is configured! Check OPENAI__API_KEY and GITHUB_MODELS__GITHUB_TOKEN")

        yield

        logger.info("Shutting down...")

    app = FastAPI(
        title="Integration Chat API",
        description="Chat integration with OpenAI GPT models and GitHub Models",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
        # Interactive docs outside production only
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
    )
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorHandlingMiddleware, is_production=settings.is_production)
    if settings.enable_request_logging:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health.router)
    app.include_router(api_router, prefix="/api")
    if settings.enable_diagnostic_endpoints:
        logger.warning("Diagnostic endpoints enabled")
        app.include_router(diagnostics_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "integration_chat.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
