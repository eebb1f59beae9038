"""Error taxonomy. Every failure in this application is fatal by default."""


class ChatError(Exception):
    """Base class for application errors."""


class ConfigurationError(ChatError):
    """Configuration, UI strings or system message could not be loaded."""


class TransportError(ChatError):
    """The request never produced an HTTP response."""


class HttpStatusError(ChatError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Chat completion request failed with HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(ChatError):
    """The response body is not a usable chat completion."""
