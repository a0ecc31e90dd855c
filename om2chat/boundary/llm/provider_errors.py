"""
Helpers for turning provider SDK exceptions into readable messages.

Dependencies: None
System role: Error message extraction for model provider calls
"""

from typing import Any


def provider_error_message(exc: BaseException) -> str:
    """
    Extract the human-readable message from a provider exception.

    OpenAI errors carry the API's ``error`` object in ``body``; prefer its
    ``message`` over the generic "Error code: ..." string.

    Args:
        exc: Exception raised by the provider client

    Returns:
        str: Provider message, falling back to str(exc) or the exception type
    """
    body: Any = getattr(exc, "body", None)
    if isinstance(body, dict):
        message = body.get("message")
        if not message and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        if message:
            return str(message)
    return str(exc) or type(exc).__name__
