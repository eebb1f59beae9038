"""Domain models."""
from .chat import ChatMessage, ChatHistory, Role, build_conversation
from .completion import CompletionRequest, CompletionResult, SamplingParameters
from .ui import UiMessages

__all__ = [
    "ChatMessage",
    "ChatHistory",
    "Role",
    "build_conversation",
    "CompletionRequest",
    "CompletionResult",
    "SamplingParameters",
    "UiMessages",
]
