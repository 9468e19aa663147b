"""Tests for reading provider settings from the environment."""

from editplan.config.settings import Settings


def test_from_env_reads_all_values(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "secret")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("GEMINI_MODEL_IMAGE", "gemini-2.5-flash-image")

    settings = Settings.from_env(load_env_file=False)

    assert settings == Settings(
        api_key="secret",
        text_model="gemini-2.5-flash",
        image_model="gemini-2.5-flash-image",
    )


def test_from_env_treats_empty_values_as_missing(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "")
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    monkeypatch.delenv("GEMINI_MODEL_IMAGE", raising=False)

    settings = Settings.from_env(load_env_file=False)

    assert settings.api_key is None
    assert settings.text_model is None
    assert settings.image_model is None
