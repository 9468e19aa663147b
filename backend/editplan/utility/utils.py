"""Shared helpers for prompt templates and model text cleanup."""

import json
import re
from typing import Any, Dict

import yaml

from editplan.utility.path_finder import Finder

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


class Helper:
    """Provide reusable utilities for prompt loading and JSON text handling.

    Loads the YAML prompt templates, strips Markdown fences that models
    sometimes wrap around JSON, and renders values as compact JSON text.
    """

    TEMPLATE_MAP = {
        "planner_system": "PLANNER_SYSTEM_PROMPT",
        "planner_user": "PLANNER_USER_PARTS",
    }

    def __init__(self):
        self.path = Finder()

    def load_template(self, template: str = "planner_system") -> Any:
        """Load a prompt template from templates.yml by its short name."""
        template_key = self.TEMPLATE_MAP.get(template)
        if not template_key:
            raise ValueError(f"Unknown template type: {template}")

        full_path = self.path.get_directory("templates")
        with open(full_path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = yaml.safe_load(f)

        if template_key not in data:
            raise KeyError(f"Template '{template_key}' missing in {full_path.name}")
        return data[template_key]

    @staticmethod
    def strip_code_fences(text: str) -> str:
        """Remove a leading ```/```json fence and a trailing ``` fence."""
        cleaned = text.strip()
        cleaned = _LEADING_FENCE.sub("", cleaned)
        cleaned = _TRAILING_FENCE.sub("", cleaned)
        return cleaned

    @staticmethod
    def to_json_text(value: Any) -> str:
        """Compact JSON text for a value, e.g. {"a":1} or 3."""
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
