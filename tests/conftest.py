"""
Shared pytest fixtures.
"""

import pytest

from magnus_liber.container import container
from magnus_liber.core.models.chat import ChatMessage
from magnus_liber.core.models.completion import CompletionResult, SamplingParameters
from magnus_liber.core.models.ui import UiMessages

CONFIG_ENV_VARS = [
    "OPENAI_URL",
    "OPENAI_KEY",
    "OPENAI_DEPLOYMENT",
    "HISTORY_LENGTH",
    "MAX_TOKENS",
    "MESSAGES_PATH",
    "SYSTEM_MESSAGE_PATH",
    "LOG_LEVEL",
    "MAGNUS_LIBER_CONFIG_DIR",
]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test without ambient configuration or a stray .env file."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    container.reset()
    yield
    container.reset()


class FakeLLM:
    """LLM double returning canned results and recording requests."""

    def __init__(self, *results: CompletionResult):
        self.requests = []
        self.closed = False
        self._results = list(results)

    def complete(self, request):
        self.requests.append(request)
        return self._results.pop(0)

    def close(self):
        self.closed = True


def reply(content: str) -> CompletionResult:
    return CompletionResult.success(ChatMessage.assistant(content))


@pytest.fixture
def system_message():
    return ChatMessage.system("You are a Roman historian.")


@pytest.fixture
def sampling():
    return SamplingParameters(
        n=1, temperature=0.7, top_p=0.95, frequency_penalty=0.0, presence_penalty=0.0
    )


@pytest.fixture
def ui_messages():
    return UiMessages(
        greeting="Salve",
        prompt="Quaeris quid?",
        emptyInput="Non audivi te",
        exit="Vale",
    )
