from pathlib import Path

from pydantic import ValidationError

from ...core.errors import ConfigurationError
from ...core.models.ui import UiMessages


class UiMessagesLoader:

    def load(self, file_path: Path) -> UiMessages:
        try:
            raw = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Could not load messages file {file_path}: {e}") from e

        try:
            return UiMessages.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Could not parse messages file {file_path}: {e}") from e
