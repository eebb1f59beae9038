"""Chat domain models."""
from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    """Author of a chat message."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """Chat message."""
    content: str
    role: Role

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(content=content, role=Role.SYSTEM)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(content=content, role=Role.USER)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(content=content, role=Role.ASSISTANT)

    def to_dict(self) -> dict:
        return {"content": self.content, "role": self.role.value}


@dataclass
class ChatHistory:
    """Rolling window of the most recent user/assistant messages."""
    max_messages: int = 10
    messages: list[ChatMessage] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.messages)

    def add_pair(self, user_message: ChatMessage, assistant_message: ChatMessage) -> None:
        """Append a user/assistant exchange, then trim to the limit."""
        self.messages.append(user_message)
        self.messages.append(assistant_message)
        self.trim()

    def trim(self) -> None:
        """Keep only the last max_messages entries, oldest dropped first."""
        if len(self.messages) <= self.max_messages:
            return
        if self.max_messages <= 0:
            self.messages = []
        else:
            self.messages = self.messages[-self.max_messages:]

    def snapshot(self) -> list[ChatMessage]:
        """Copy of the current messages, oldest first."""
        return list(self.messages)


def build_conversation(
    system_message: ChatMessage,
    history: ChatHistory,
    user_message: ChatMessage,
) -> list[ChatMessage]:
    """System message first, then history, then the new user message."""
    return [system_message, *history.snapshot(), user_message]
