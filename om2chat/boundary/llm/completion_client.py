"""
Completion client.

Generates a grounded answer from the provider's chat-completion endpoint
(OpenAI via langchain_openai) with a fixed token cap and temperature.

Dependencies: langchain_core, langchain_openai, om2chat.configs
System role: Answer generation for the chat pipeline
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_openai import ChatOpenAI

from om2chat.boundary.llm.provider_errors import provider_error_message
from om2chat.configs.llm import LLMSettings
from om2chat.core.exceptions import CompletionFailure, ConfigurationError
from om2chat.core.prompts.document_qa_prompt import DOCUMENT_QA_PROMPT

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Generated answer plus provider metadata (informational only)."""

    answer: str
    finish_reason: str | None = None
    usage: dict[str, Any] = field(default_factory=dict)


def _content_text(content: Any) -> str:
    """Flatten message content (plain string or list of content blocks)."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class CompletionClient:
    """Answers a question from assembled document context."""

    def __init__(self, model: BaseChatModel) -> None:
        """
        Args:
            model: LangChain chat model configured with token cap and temperature
        """
        self._model = model

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "CompletionClient":
        """
        Build an OpenAI-backed client.

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not set
        """
        if not settings.api_key:
            raise ConfigurationError("OPENAI_API_KEY")
        model = ChatOpenAI(
            model=settings.model,
            api_key=settings.api_key,
            base_url=settings.base_url,
            max_tokens=settings.max_tokens,
            temperature=settings.temperature,
            max_retries=0,
        )
        logger.info(
            f"{__name__}:from_settings - model={settings.model}, "
            f"max_tokens={settings.max_tokens}, temperature={settings.temperature}"
        )
        return cls(model)

    async def complete(self, title: str, context: str, question: str) -> CompletionResult:
        """
        Generate an answer grounded in the given context.

        Args:
            title: Document title named in the system instruction
            context: Assembled retrieval context
            question: User's question (sent as its own turn)

        Returns:
            CompletionResult: Answer text with finish reason and token usage

        Raises:
            CompletionFailure: Provider error or empty answer
        """
        messages = DOCUMENT_QA_PROMPT.invoke({
            "title": title,
            "context": context,
            "question": question,
        }).to_messages()

        try:
            response = await self._model.ainvoke(messages)
        except Exception as e:
            raise CompletionFailure(
                provider_error_message(e),
                details={"error_type": type(e).__name__},
            ) from e

        answer = _content_text(response.content)
        if not answer or not answer.strip():
            raise CompletionFailure("Completion error: empty answer")

        metadata = getattr(response, "response_metadata", None) or {}
        return CompletionResult(
            answer=answer,
            finish_reason=metadata.get("finish_reason"),
            usage=dict(getattr(response, "usage_metadata", None) or {}),
        )
