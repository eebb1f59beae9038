"""Protocol interfaces for dependency injection."""
from .llm import LLMProtocol

__all__ = [
    "LLMProtocol",
]
