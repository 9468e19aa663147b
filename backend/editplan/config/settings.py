"""Environment-backed settings passed explicitly into the Gemini services."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from editplan.utility.path_finder import Finder

API_KEY_ENV = "GEMINI_API_KEY"
TEXT_MODEL_ENV = "GEMINI_MODEL"
IMAGE_MODEL_ENV = "GEMINI_MODEL_IMAGE"


@dataclass(frozen=True)
class Settings:
    """Credential and model identifiers for the Gemini provider.

    Values are optional here; each service checks the ones it needs when it
    is constructed and raises ConfigurationError naming the missing variable.
    """

    api_key: Optional[str] = None
    text_model: Optional[str] = None
    image_model: Optional[str] = None

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Read settings from the process environment, after loading backend/.env."""
        if load_env_file:
            load_dotenv(Finder().get_directory("env"))
        return cls(
            api_key=os.getenv(API_KEY_ENV) or None,
            text_model=os.getenv(TEXT_MODEL_ENV) or None,
            image_model=os.getenv(IMAGE_MODEL_ENV) or None,
        )
