"""API routes."""

from src.api.routes.documents import router as documents_router
from src.api.routes.templates import router as templates_router

__all__ = [
    "documents_router",
    "templates_router",
]
