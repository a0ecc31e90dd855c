"""
Request correlation IDs.

One ID per HTTP request, carried in a ContextVar so every log line written
while answering a question (embedding, search, completion, history write)
can be tied back to the request. Inbound IDs from the X-Correlation-ID
header are reused when they look sane.

Dependencies: contextvars
System role: Request tracing across the chat pipeline
"""

import re
import uuid
from contextvars import ContextVar

MAX_CORRELATION_ID_LENGTH = 128
_ALLOWED_ID = re.compile(r"^[A-Za-z0-9._:\-]+$")

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def is_valid_correlation_id(value: str | None) -> bool:
    """Accept short IDs made of URL-safe characters only."""
    return bool(value) and len(value) <= MAX_CORRELATION_ID_LENGTH and bool(_ALLOWED_ID.match(value))


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: Inbound ID; replaced by a fresh UUID4 when missing or
            not a valid ID (header values end up in log lines)

    Returns:
        str: The ID now in effect
    """
    if not is_valid_correlation_id(correlation_id):
        correlation_id = new_correlation_id()
    correlation_id_ctx.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Current correlation ID ("" outside a request)."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
