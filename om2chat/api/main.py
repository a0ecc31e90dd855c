"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, om2chat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from om2chat import __version__
from om2chat.api.deps.dependencies import get_service_cache
from om2chat.api.error_handling import register_exception_handlers
from om2chat.boundary.db.connection import dispose_engine
from om2chat.configs import get_settings
from om2chat.observability.logger import configure_logging
from om2chat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import chat_router, documents_router, health_router, public_links_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and builds the provider clients. A missing
    OPENAI_API_KEY raises ConfigurationError and aborts startup.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    _ = cache.embedding_client
    _ = cache.completion_client
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    await dispose_engine()
    logger.info("Service cache cleared and database pool closed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="om2chat API",
        description="Document Q&A for broker-uploaded documents",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs first and the request log carries the correlation ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(public_links_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "om2chat.api.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
    )
