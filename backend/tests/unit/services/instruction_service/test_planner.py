"""Unit tests for InstructionPlanner request building and output validation."""

import json

import httpx
import pytest

from editplan.config.settings import Settings
from editplan.handlers.error_handler import (
    ConfigurationError,
    EmptyModelResponseError,
    InvalidInputError,
    InvalidModelOutputError,
    ModelCallError,
    ModelOutputParseError,
)
from editplan.models.instructions import InstructionResult
from editplan.services.instruction_service.planner import InstructionPlanner

PAYLOAD = {"instructions": ["Change the sky color to pink", "Add a sun to the sky"]}


def make_planner(settings, fake_models, **kwargs):
    client = fake_models(**kwargs)
    return InstructionPlanner(settings, client=client), client


def test_returns_string_instructions(settings, fake_models):
    planner, _ = make_planner(settings, fake_models, text=json.dumps(PAYLOAD))

    result = planner.generate_instructions("make the sky pink and add a sun")

    assert isinstance(result, InstructionResult)
    assert len(result.instructions) >= 1
    assert all(isinstance(i, str) for i in result.instructions)
    assert result.warnings is None


@pytest.mark.parametrize(
    "wrapped",
    [
        "```json\n{payload}\n```",
        "```\n{payload}\n```",
        "  ```json{payload}```  ",
    ],
)
def test_code_fences_are_stripped(settings, fake_models, wrapped):
    payload = json.dumps(PAYLOAD)
    plain, _ = make_planner(settings, fake_models, text=payload)
    fenced, _ = make_planner(
        settings, fake_models, text=wrapped.replace("{payload}", payload)
    )

    assert fenced.generate_instructions("x") == plain.generate_instructions("x")


def test_non_string_items_become_json_text(settings, fake_models):
    text = json.dumps(
        {"instructions": ["Crop the left edge", 3, {"op": "blur", "radius": 2}, None, True]}
    )
    planner, _ = make_planner(settings, fake_models, text=text)

    result = planner.generate_instructions("tidy it up")

    assert result.instructions == [
        "Crop the left edge",
        "3",
        '{"op":"blur","radius":2}',
        "true",
    ]


def test_warnings_are_kept_and_normalized(settings, fake_models):
    text = json.dumps({"instructions": ["Add a hat"], "warnings": ["hat size unclear", 7]})
    planner, _ = make_planner(settings, fake_models, text=text)

    result = planner.generate_instructions("give him a hat")

    assert result.warnings == ["hat size unclear", "7"]


def test_non_list_warnings_are_dropped(settings, fake_models):
    text = json.dumps({"instructions": ["Add a hat"], "warnings": "ambiguous"})
    planner, _ = make_planner(settings, fake_models, text=text)

    assert planner.generate_instructions("hat").warnings is None


def test_request_carries_schema_and_context(settings, fake_models):
    planner, client = make_planner(settings, fake_models, text=json.dumps(PAYLOAD))

    planner.generate_instructions("make it warmer", {"canvas": "main", "zoom": 2})

    assert len(client.calls) == 1
    call = client.calls[0]
    assert call["model"] == "gemini-text-test"

    config = call["config"]
    assert config.response_mime_type == "application/json"
    assert config.response_schema is InstructionResult
    assert "image editing planner" in config.system_instruction

    content = call["contents"][0]
    assert content.role == "user"
    texts = [part.text for part in content.parts]
    assert "make it warmer" in texts
    assert '{"canvas":"main","zoom":2}' in texts
    assert texts[0].startswith("Create a list of step-by-step")


def test_options_default_to_empty_object(settings, fake_models):
    planner, client = make_planner(settings, fake_models, text=json.dumps(PAYLOAD))

    planner.generate_instructions("brighten")

    texts = [part.text for part in client.calls[0]["contents"][0].parts]
    assert "{}" in texts


def test_user_input_with_braces_is_sent_verbatim(settings, fake_models):
    planner, client = make_planner(settings, fake_models, text=json.dumps(PAYLOAD))

    planner.generate_instructions("write {name} on the sign")

    texts = [part.text for part in client.calls[0]["contents"][0].parts]
    assert "write {name} on the sign" in texts


@pytest.mark.parametrize("bad_input", ["", "   ", None, 42])
def test_invalid_input_makes_no_call(settings, fake_models, bad_input):
    planner, client = make_planner(settings, fake_models, text=json.dumps(PAYLOAD))

    with pytest.raises(InvalidInputError):
        planner.generate_instructions(bad_input)
    assert client.calls == []


def test_empty_response(settings, fake_models):
    planner, _ = make_planner(settings, fake_models, text="")

    with pytest.raises(EmptyModelResponseError):
        planner.generate_instructions("anything")


def test_parse_error_snippet_is_bounded(settings, fake_models):
    garbage = "not json " + "x" * 1000
    planner, _ = make_planner(settings, fake_models, text=garbage)

    with pytest.raises(ModelOutputParseError) as excinfo:
        planner.generate_instructions("anything")

    message = excinfo.value.message
    assert garbage[:400] in message
    assert garbage[:401] not in message


@pytest.mark.parametrize(
    "payload",
    [
        {"steps": ["a"]},
        {"instructions": "Add a sun"},
        ["Add a sun"],
        {"instructions": []},
        {"instructions": [None]},
    ],
)
def test_invalid_model_output(settings, fake_models, payload):
    planner, _ = make_planner(settings, fake_models, text=json.dumps(payload))

    with pytest.raises(InvalidModelOutputError):
        planner.generate_instructions("anything")


def test_provider_failure_becomes_model_call_error(settings, fake_models):
    planner, _ = make_planner(
        settings, fake_models, error=httpx.ConnectError("connection refused")
    )

    with pytest.raises(ModelCallError) as excinfo:
        planner.generate_instructions("anything")
    assert excinfo.value.error_type == "connection_error"


class TestPlannerConfiguration:
    def test_missing_api_key(self, fake_models):
        with pytest.raises(ConfigurationError) as excinfo:
            InstructionPlanner(Settings(text_model="m"), client=fake_models())
        assert "GEMINI_API_KEY" in excinfo.value.message

    def test_missing_text_model(self, fake_models):
        with pytest.raises(ConfigurationError) as excinfo:
            InstructionPlanner(Settings(api_key="k"), client=fake_models())
        assert "GEMINI_MODEL" in excinfo.value.message


def test_schema_description_speaks_to_the_model():
    description = InstructionResult.model_json_schema()["description"]

    assert "natural-language steps" in description
    assert "response_schema" not in description
    assert "validator" not in description
