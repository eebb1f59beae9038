import logging
import sys
from enum import Enum
from typing import Callable

from ..core.errors import ChatError
from ..core.models.chat import ChatHistory
from ..core.models.ui import UiMessages
from ..core.services.chat_service import ChatService

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit")

FailurePolicy = Callable[[ChatError], None]


class InputKind(Enum):
    EMPTY = "empty"
    EXIT = "exit"
    QUERY = "query"


def classify_input(text: str) -> InputKind:
    """Classify an already stripped input line."""
    if not text:
        return InputKind.EMPTY
    if text in EXIT_COMMANDS:
        return InputKind.EXIT
    return InputKind.QUERY


def abort_session(error: ChatError) -> None:
    """Default failure policy: report and terminate the process."""
    logger.error(f"Fatal error, stopping session: {error!r}")
    print(f"Error: {error}", file=sys.stderr)
    raise SystemExit(1)


class ChatSession:
    """Interactive prompt loop.

    One blocking request per query; the next prompt is shown only after the
    reply has been printed.
    """

    def __init__(
        self,
        chat_service: ChatService,
        messages: UiMessages,
        history: ChatHistory,
        input_fn: Callable[[], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
        on_failure: FailurePolicy = abort_session,
    ):
        """Initialize session.

        Args:
            chat_service: Service running each request/response cycle.
            messages: UI strings.
            history: History window owned by this session.
            input_fn: Reads one line, raises EOFError at end of input.
            output_fn: Writes one line for the user.
            on_failure: Called with the error of a failed turn.
        """
        self._chat = chat_service
        self._messages = messages
        self._history = history
        self._input = input_fn or input
        self._output = output_fn or print
        self._on_failure = on_failure

    @property
    def history(self) -> ChatHistory:
        return self._history

    def run(self) -> None:
        """Run until an exit command or end of input."""
        self._output(self._messages.greeting)

        while True:
            self._output(self._messages.prompt)
            try:
                line = self._input()
            except EOFError:
                logger.info("End of input, stopping session")
                break

            query = line.strip()
            kind = classify_input(query)

            if kind is InputKind.EMPTY:
                self._output(self._messages.empty_input)
                continue
            if kind is InputKind.EXIT:
                break

            self._handle_query(query)

        self._output(self._messages.exit)

    def _handle_query(self, query: str) -> None:
        result = self._chat.ask(query, self._history)
        if not result.ok:
            self._on_failure(result.error)
            return

        self._output(result.reply.content)
        self._output("")
