"""Chat completion request/response models."""
from dataclasses import dataclass, field
from typing import Optional

from ..errors import ChatError
from .chat import ChatMessage


@dataclass(frozen=True)
class SamplingParameters:
    """Fixed sampling options sent with every request."""
    n: int
    temperature: float
    top_p: float
    frequency_penalty: float
    presence_penalty: float


@dataclass(frozen=True)
class CompletionRequest:
    """One chat completion request."""
    messages: list[ChatMessage]
    max_tokens: int
    sampling: SamplingParameters

    def to_payload(self) -> dict:
        """JSON body for the chat completions endpoint."""
        return {
            "messages": [m.to_dict() for m in self.messages],
            "max_tokens": self.max_tokens,
            "n": self.sampling.n,
            "temperature": self.sampling.temperature,
            "top_p": self.sampling.top_p,
            "frequency_penalty": self.sampling.frequency_penalty,
            "presence_penalty": self.sampling.presence_penalty,
        }


@dataclass(frozen=True)
class CompletionResult:
    """Outcome of a fallible step: a reply or an error, never both."""
    reply: Optional[ChatMessage] = None
    error: Optional[ChatError] = field(default=None)

    def __post_init__(self):
        if (self.reply is None) == (self.error is None):
            raise ValueError("CompletionResult needs exactly one of reply or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, reply: ChatMessage) -> "CompletionResult":
        return cls(reply=reply)

    @classmethod
    def failure(cls, error: ChatError) -> "CompletionResult":
        return cls(error=error)
