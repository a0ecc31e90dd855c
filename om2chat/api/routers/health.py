"""
Health check API endpoint.

Routes: GET /health

Dependencies: om2chat.boundary, om2chat.configs
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from om2chat.api.deps import get_document_store, get_settings_dependency
from om2chat.boundary.db import DocumentStore
from om2chat.configs import Settings

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    checks: dict[str, bool]


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings_dependency),
) -> JSONResponse:
    """Report whether the OpenAI key is configured and the database answers."""
    try:
        database_ok = await store.ping()
    except Exception as e:
        logger.warning(f"{__name__}:health_check - database ping failed: {type(e).__name__}: {e}")
        database_ok = False

    checks = {
        "openai": bool(settings.llm.api_key),
        "database": database_ok,
    }
    healthy = all(checks.values())
    payload = HealthResponse(status="healthy" if healthy else "unhealthy", checks=checks)
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=payload.model_dump(),
    )
