"""Plans an image edit as an ordered list of natural-language instructions.

The planner asks Gemini for JSON matching ``InstructionResult``. It does not
translate the request into numeric parameters or a fixed action schema; each
instruction stays free text for a later editing step.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from google.genai import types
from pydantic import ValidationError

from editplan.config.settings import API_KEY_ENV, TEXT_MODEL_ENV, Settings
from editplan.handlers.error_handler import (
    ConfigurationError,
    EmptyModelResponseError,
    InvalidInputError,
    InvalidModelOutputError,
    MapExceptions,
    ModelOutputParseError,
)
from editplan.models.instructions import InstructionResult
from editplan.services.gemini_client import ContentGenerator, GeminiClient
from editplan.utility.logger import AppLogger
from editplan.utility.utils import Helper

logger = AppLogger.get_logger(__name__)

SNIPPET_LIMIT = 400


class InstructionPlanner:
    """Turns one free-text request into validated instruction steps via Gemini.

    The client is injectable; by default a google-genai client is built from
    the settings' API key.
    """

    def __init__(self, settings: Settings, client: Optional[ContentGenerator] = None):
        if not settings.api_key:
            raise ConfigurationError(f"{API_KEY_ENV} environment variable is not set")
        if not settings.text_model:
            raise ConfigurationError(f"{TEXT_MODEL_ENV} environment variable is not set")
        self.settings = settings
        self.model = settings.text_model
        self.client = client or GeminiClient.make_gemini_client(settings.api_key)
        self.exception = MapExceptions()
        self.utility = Helper()

    def build_config(self) -> types.GenerateContentConfig:
        """System directive plus JSON output constrained to InstructionResult."""
        return types.GenerateContentConfig(
            system_instruction=self.utility.load_template("planner_system"),
            response_mime_type="application/json",
            response_schema=InstructionResult,
        )

    def build_contents(self, user_input: str, options: Dict[str, Any]) -> List[types.Content]:
        """Single user turn carrying the request and the serialized UI options."""
        options_json = self.utility.to_json_text(options)
        parts = [
            types.Part.from_text(
                text=line.format(user_input=user_input, options_json=options_json)
            )
            for line in self.utility.load_template("planner_user")
        ]
        return [types.Content(role="user", parts=parts)]

    def parse_output(self, text: str) -> InstructionResult:
        """Strip code fences, parse JSON and validate it against InstructionResult."""
        cleaned = self.utility.strip_code_fences(text)
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as e:
            snippet = cleaned[:SNIPPET_LIMIT]
            raise ModelOutputParseError(
                f"Failed to parse JSON from Gemini. First {SNIPPET_LIMIT} chars:\n{snippet}",
                details={"position": e.pos},
            ) from e

        if not isinstance(parsed, dict) or not isinstance(parsed.get("instructions"), list):
            raise InvalidModelOutputError(
                "Invalid response: 'instructions' must be an array of strings"
            )

        try:
            return InstructionResult.model_validate(parsed)
        except ValidationError as e:
            raise InvalidModelOutputError(
                f"Invalid response: {e.error_count()} schema violation(s) in model output",
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e

    def generate_instructions(
        self, user_input: str, options: Optional[Dict[str, Any]] = None
    ) -> InstructionResult:
        """Ask Gemini for the ordered instruction list for ``user_input``."""
        if not isinstance(user_input, str) or not user_input.strip():
            raise InvalidInputError("Invalid input: userInput must be a non-empty string")
        if options is None:
            options = {}

        contents = self.build_contents(user_input, options)
        config = self.build_config()
        try:
            resp = self.client.generate_content(
                model=self.model, contents=contents, config=config
            )
        except Exception as e:
            raise self.exception.map_gemini_exception(e) from e

        text = GeminiClient.extract_text(resp)
        if not text:
            raise EmptyModelResponseError()

        result = self.parse_output(text)
        logger.info(f"Planned {len(result.instructions)} instruction(s)")
        return result
