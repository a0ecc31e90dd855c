"""om2chat: document Q&A backend for broker-uploaded documents."""

__version__ = "0.1.0"
