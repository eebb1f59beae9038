"""UI text models."""
from pydantic import BaseModel, ConfigDict, Field


class UiMessages(BaseModel):
    """Strings shown by the console session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    greeting: str
    prompt: str
    empty_input: str = Field(alias="emptyInput")
    exit: str
