"""Gemini client helpers and the minimal capability the services depend on."""

from __future__ import annotations

import base64
from typing import Any, Optional, Protocol

from fastapi.encoders import jsonable_encoder
from google import genai

from editplan.config.settings import API_KEY_ENV
from editplan.handlers.error_handler import ConfigurationError


class ContentGenerator(Protocol):
    """Anything that can answer ``generate_content`` like ``genai.Client().models``."""

    def generate_content(
        self, *, model: str, contents: Any, config: Optional[Any] = None
    ) -> Any: ...


class GeminiClient:
    """Helper for building the google-genai client and reading its responses.

    Wraps client creation from an explicit key and the two ways the
    services consume a response: as text, or as a JSON-ready payload.
    """

    @staticmethod
    def make_gemini_client(api_key: Optional[str]) -> ContentGenerator:
        """Create a google-genai client and return its ``models`` surface."""
        if not api_key:
            raise ConfigurationError(f"{API_KEY_ENV} environment variable is not set")
        return genai.Client(api_key=api_key).models

    @staticmethod
    def extract_text(resp: Any) -> str:
        """
        Return the response text, or "" when there is none.
        Falls back to stitching the text parts of the first candidate.
        """
        if resp is None:
            return ""

        text = getattr(resp, "text", None)
        if text:
            return text

        candidates = getattr(resp, "candidates", None) or []
        if not candidates:
            return ""
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        chunks = [p.text for p in parts if getattr(p, "text", None)]
        return "".join(chunks)

    @staticmethod
    def to_payload(resp: Any) -> Any:
        """
        Serialize an SDK response for a JSON body without reshaping it.
        Uses the provider's camelCase names; bytes come out base64-encoded.
        """
        if hasattr(resp, "model_dump"):
            resp = resp.model_dump(by_alias=True, exclude_none=True)
        # bytes as standard (not url-safe) base64
        return jsonable_encoder(
            resp, custom_encoder={bytes: lambda b: base64.b64encode(b).decode("ascii")}
        )
