"""LLM protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.completion import CompletionRequest, CompletionResult


@runtime_checkable
class LLMProtocol(Protocol):
    """Protocol for chat completion clients."""

    def complete(self, request: CompletionRequest) -> CompletionResult:
        """Send one chat completion request and wait for the reply.

        Args:
            request: Conversation plus generation options.

        Returns:
            The first choice's message, or the error that prevented it.
        """
        ...

    def close(self) -> None:
        """Release network resources."""
        ...
