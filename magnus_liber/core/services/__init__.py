"""Core business services."""
from .chat_service import ChatService

__all__ = [
    "ChatService",
]
