"""Editing service that applies one natural-language instruction to one image."""

import base64
import binascii
from typing import Any, List, Optional

from google.genai import types

from editplan.config.settings import API_KEY_ENV, IMAGE_MODEL_ENV, Settings
from editplan.handlers.error_handler import (
    ConfigurationError,
    InvalidInputError,
    MapExceptions,
)
from editplan.services.gemini_client import ContentGenerator, GeminiClient
from editplan.utility.logger import AppLogger

logger = AppLogger.get_logger(__name__)

IMAGE_MIME_TYPE = "image/png"
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")
IMAGE_ERROR_MESSAGE = "invalid request, image must be a base64-encoded string"


class ImageEditor:
    """Sends a prompt and an inline PNG to the Gemini image model.

    The image arrives and leaves as base64 text; any encoding or decoding of
    actual image files happens outside this service. The provider response
    is returned as-is.
    """

    def __init__(self, settings: Settings, client: Optional[ContentGenerator] = None):
        if not settings.api_key:
            raise ConfigurationError(f"{API_KEY_ENV} environment variable is not set")
        if not settings.image_model:
            raise ConfigurationError(f"{IMAGE_MODEL_ENV} environment variable is not set")
        self.model = settings.image_model
        self.client = client or GeminiClient.make_gemini_client(settings.api_key)
        self.exception = MapExceptions()

    @staticmethod
    def decode_image(image: str) -> bytes:
        """
        Base64 text to raw bytes; the bytes themselves are not inspected.
        Line-wrapped, url-safe and unpadded encodings are accepted.
        """
        text = "".join(image.split()).translate(_URLSAFE_TO_STANDARD)
        text += "=" * (-len(text) % 4)
        if not text:
            raise InvalidInputError(IMAGE_ERROR_MESSAGE)
        try:
            return base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidInputError(IMAGE_ERROR_MESSAGE) from e

    def build_contents(self, prompt: str, image: str) -> List[types.Part]:
        """Text part with the instruction followed by the inline image part."""
        return [
            types.Part.from_text(text=prompt),
            types.Part.from_bytes(data=self.decode_image(image), mime_type=IMAGE_MIME_TYPE),
        ]

    def edit_image(self, prompt: str, image: str) -> Any:
        """Send an edit request to Gemini and return the raw response."""
        if not isinstance(prompt, str) or not prompt.strip():
            raise InvalidInputError("invalid request, prompt must be a non-empty string")
        if not isinstance(image, str) or not image:
            raise InvalidInputError(IMAGE_ERROR_MESSAGE)

        contents = self.build_contents(prompt, image)
        logger.info(f"Sending edit request to {self.model}")
        try:
            resp = self.client.generate_content(model=self.model, contents=contents)
        except Exception as e:
            raise self.exception.map_gemini_exception(e) from e

        logger.info("Edit response received.")
        return resp
