"""API routers."""

from .chat import router as chat_router
from .documents import router as documents_router
from .health import router as health_router
from .public_links import router as public_links_router

__all__ = [
    "chat_router",
    "documents_router",
    "health_router",
    "public_links_router",
]
