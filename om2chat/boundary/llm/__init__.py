"""
Model provider boundary: embeddings and chat completions.

Dependencies: langchain_openai
"""

from om2chat.boundary.llm.completion_client import CompletionClient, CompletionResult
from om2chat.boundary.llm.embedding_client import EmbeddingClient

__all__ = ["CompletionClient", "CompletionResult", "EmbeddingClient"]
