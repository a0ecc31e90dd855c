"""Application adapters."""

from om2chat.application.adapters.chat_history_adapter import ChatHistoryAdapter

__all__ = ["ChatHistoryAdapter"]
