"""Chat service - builds requests and maintains the history window."""

import logging

from ..models.chat import ChatHistory, ChatMessage, build_conversation
from ..models.completion import CompletionRequest, CompletionResult, SamplingParameters
from ..protocols.llm import LLMProtocol

logger = logging.getLogger(__name__)


class ChatService:
    """Runs one request/response cycle per user query."""

    def __init__(
        self,
        llm: LLMProtocol,
        system_message: ChatMessage,
        max_tokens: int,
        sampling: SamplingParameters,
    ):
        """Initialize chat service.

        Args:
            llm: LLM client.
            system_message: Persona prepended to every request.
            max_tokens: Max response tokens.
            sampling: Fixed sampling parameters.
        """
        self._llm = llm
        self._system_message = system_message
        self._max_tokens = max_tokens
        self._sampling = sampling

    def build_request(self, user_message: ChatMessage, history: ChatHistory) -> CompletionRequest:
        """Assemble the request for user_message on top of history."""
        conversation = build_conversation(self._system_message, history, user_message)
        return CompletionRequest(
            messages=conversation,
            max_tokens=self._max_tokens,
            sampling=self._sampling,
        )

    def ask(self, user_text: str, history: ChatHistory) -> CompletionResult:
        """Send user_text with the current history and record the exchange.

        History is only updated when the request succeeds.

        Args:
            user_text: Stripped, non-empty user input.
            history: History window owned by the caller.

        Returns:
            Assistant reply, or the error that ended the turn.
        """
        user_message = ChatMessage.user(user_text)
        request = self.build_request(user_message, history)

        logger.info(
            f"Sending {len(request.messages)} messages "
            f"({len(history)} from history) for '{user_text[:50]}'"
        )
        result = self._llm.complete(request)

        if not result.ok:
            logger.error(f"Chat completion failed: {result.error}")
            return result

        history.add_pair(user_message, result.reply)
        logger.info(f"History now holds {len(history)}/{history.max_messages} messages")
        return result
