"""Request and result models for the instruction-planning endpoint."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from editplan.models.common import REQUEST_FIELD_ERRORS
from editplan.utility.logger import AppLogger
from editplan.utility.utils import Helper

logger = AppLogger.get_logger(__name__)


def _normalize_strings(items: List[Any]) -> List[str]:
    """Drop null entries and render anything that is not a string as JSON text."""
    return [
        item if isinstance(item, str) else Helper.to_json_text(item)
        for item in items
        if item is not None
    ]


class InstructionRequest(BaseModel):
    """Incoming free-text editing request plus optional UI context."""

    user_input: str = Field(alias="userInput")
    options: Optional[Dict[str, Any]] = None

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("user_input")
    def user_input_must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(REQUEST_FIELD_ERRORS["userInput"])
        return value

    @field_validator("options")
    def options_default_to_empty(cls, value: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return value if value is not None else {}


# Sent to Gemini as response_schema and used to validate the reply, so the
# docstring below is model-facing text.
class InstructionResult(BaseModel):
    """Ordered, atomic natural-language steps that carry out the user's image edit request."""

    instructions: List[str] = Field(min_length=1)
    warnings: Optional[List[str]] = None

    @field_validator("instructions", mode="before")
    def coerce_instructions(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return _normalize_strings(value)

    @field_validator("warnings", mode="before")
    def coerce_warnings(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, list):
            logger.warning(f"Discarding non-list warnings from model output: {value!r}")
            return None
        return _normalize_strings(value)
