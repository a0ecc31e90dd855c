"""
Request body helpers for the chat routes.

The chat routes read their JSON body by hand so that malformed JSON and a
bad question both surface as 400 ``{"error": ...}`` from the domain
handlers. QUESTION_BODY_OPENAPI still documents the body in OpenAPI.

Dependencies: fastapi, om2chat.models.chat
System role: Chat request parsing utilities
"""

from typing import Any

from fastapi import Request

from om2chat.core.exceptions import InvalidInputError
from om2chat.models.chat import ChatRequest

QUESTION_BODY_OPENAPI: dict[str, Any] = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": ChatRequest.model_json_schema()}},
    }
}


async def read_question(request: Request) -> Any:
    """
    Pull ``question`` out of the JSON body.

    Returns:
        The raw value (validated later by the chat service), or None when
        the body is not an object

    Raises:
        InvalidInputError: Body is not valid JSON
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidInputError("Invalid JSON")
    return body.get("question") if isinstance(body, dict) else None
