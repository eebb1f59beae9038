from pathlib import Path

from ...core.errors import ConfigurationError
from ...core.models.chat import ChatMessage


class SystemMessageLoader:

    def load(self, file_path: Path) -> ChatMessage:
        try:
            text = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not load system message {file_path}: {e}") from e

        text = text.strip()
        if not text:
            raise ConfigurationError(f"System message {file_path} is empty")
        return ChatMessage.system(text)
