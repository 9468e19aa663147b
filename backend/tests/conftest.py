"""Shared fixtures: explicit settings and a fake Gemini ``models`` surface."""

from types import SimpleNamespace

import pytest

from editplan.config.settings import Settings


class FakeModels:
    """Stands in for ``genai.Client().models`` and records every call."""

    def __init__(self, text=None, response=None, error=None):
        self.text = text
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return SimpleNamespace(text=self.text, candidates=None)


@pytest.fixture
def settings():
    return Settings(
        api_key="test-key",
        text_model="gemini-text-test",
        image_model="gemini-image-test",
    )


@pytest.fixture
def fake_models():
    return FakeModels
