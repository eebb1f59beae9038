import json
import logging
import os
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from ..core.errors import ConfigurationError
from ..core.models.completion import SamplingParameters

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"

CONFIG_DIR_ENV = "MAGNUS_LIBER_CONFIG_DIR"
# Searched in order, first match wins.
CONFIG_FILE_NAMES = ("MagnusLiber.dev.json", "MagnusLiber.json")

# JSON file key -> environment variable name of the same setting.
CONFIG_FILE_KEYS = {
    "openAiUri": "OPENAI_URL",
    "openAiKey": "OPENAI_KEY",
    "deployment": "OPENAI_DEPLOYMENT",
    "openAiDeployment": "OPENAI_DEPLOYMENT",
    "historyLength": "HISTORY_LENGTH",
    "maxTokens": "MAX_TOKENS",
    "messagesPath": "MESSAGES_PATH",
    "systemMessagePath": "SYSTEM_MESSAGE_PATH",
    "logLevel": "LOG_LEVEL",
}

API_VERSION = "2023-05-15"

# Fixed request parameters, not user configurable.
RESPONSE_COUNT = 1
TEMPERATURE = 0.7
TOP_P = 0.95
FREQUENCY_PENALTY = 0.0
PRESENCE_PENALTY = 0.0


class Settings(BaseSettings):

    openai_uri: str = Field(validation_alias="OPENAI_URL")
    openai_key: str = Field(validation_alias="OPENAI_KEY")
    deployment: str = Field(validation_alias="OPENAI_DEPLOYMENT")

    history_length: int = Field(default=10, ge=0, validation_alias="HISTORY_LENGTH")
    max_tokens: int = Field(default=1500, gt=0, validation_alias="MAX_TOKENS")

    # Static text
    messages_path: str = Field(
        default=str(RESOURCES_DIR / "Messages.json"),
        validation_alias="MESSAGES_PATH",
    )
    system_message_path: str = Field(
        default=str(RESOURCES_DIR / "SystemMessage.txt"),
        validation_alias="SYSTEM_MESSAGE_PATH",
    )

    log_level: str = Field(default="WARNING", validation_alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        extra = "ignore"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment beats values read from the JSON configuration file,
        # which are passed in as init kwargs by load_settings().
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def sampling(self) -> SamplingParameters:
        return SamplingParameters(
            n=RESPONSE_COUNT,
            temperature=TEMPERATURE,
            top_p=TOP_P,
            frequency_penalty=FREQUENCY_PENALTY,
            presence_penalty=PRESENCE_PENALTY,
        )


def find_configuration_file(directory: Path) -> Path | None:
    """Return the first configuration file found in directory, if any.

    The dev file takes precedence over the default one.
    """
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def _read_configuration_file(path: Path) -> dict:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Could not load configuration file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a JSON object")

    values = {}
    for key, value in data.items():
        if key not in CONFIG_FILE_KEYS:
            logger.warning(f"Ignoring unknown key '{key}' in {path}")
            continue
        values[CONFIG_FILE_KEYS[key]] = value
    return values


def load_settings(config_dir: str | Path | None = None) -> Settings:
    """Load settings from the environment and the optional JSON config file.

    Args:
        config_dir: Directory searched for the configuration file. Defaults to
            $MAGNUS_LIBER_CONFIG_DIR, then the current directory.

    Returns:
        Loaded settings.

    Raises:
        ConfigurationError: Required values are missing or invalid, or the
            configuration file cannot be read.
    """
    directory = Path(config_dir or os.getenv(CONFIG_DIR_ENV) or ".")

    values: dict = {}
    config_file = find_configuration_file(directory)
    if config_file is not None:
        logger.info(f"Loading configuration from {config_file}")
        values = _read_configuration_file(config_file)
    else:
        logger.info(f"No configuration file in {directory}, using environment only")

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration. Set OPENAI_URL, OPENAI_KEY and OPENAI_DEPLOYMENT "
            f"or provide {CONFIG_FILE_NAMES[-1]}.\n{e}"
        ) from e
