from fastapi import APIRouter

from .endpoints import chat
from .endpoints import github_models

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(chat.router, tags=["chat"])
api_router.include_router(github_models.router, tags=["github_models"])

# Diagnostic routes, included by create_app only when enabled
diagnostics_router = APIRouter()
diagnostics_router.include_router(github_models.diagnostics_router, tags=["diagnostics"])
