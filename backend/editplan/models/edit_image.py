"""Request model for the single-instruction image edit endpoint."""

from pydantic import BaseModel, field_validator

from editplan.models.common import REQUEST_FIELD_ERRORS


class EditRequest(BaseModel):
    """One natural-language instruction and one base64-encoded PNG."""

    prompt: str
    image: str

    model_config = {
        "extra": "ignore",
    }

    @field_validator("prompt")
    def prompt_must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError(REQUEST_FIELD_ERRORS["prompt"])
        return value

    @field_validator("image")
    def image_must_not_be_empty(cls, value: str) -> str:
        if not value:
            raise ValueError(REQUEST_FIELD_ERRORS["image"])
        return value
