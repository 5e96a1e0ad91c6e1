from __future__ import annotations

import asyncio
import base64
import logging
from types import SimpleNamespace

import pytest

from brand_studio.config import Settings
from brand_studio.providers.base import JSON_ERROR_MESSAGE, TEXT_ERROR_MESSAGE, GenerationError, InlineImage, ProviderConfigError
from brand_studio.providers.gemini_provider import GeminiProvider
from brand_studio.providers.openai_provider import OpenAITextProvider
from brand_studio.providers.registry import get_text_provider
from brand_studio.schemas import copywriting_variations_schema


class _RecordingModels:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.reply, Exception):
            raise self.reply
        return SimpleNamespace(text=self.reply)


class _RecordingResponses:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.reply, Exception):
            raise self.reply
        return SimpleNamespace(output_text=self.reply)


def _gemini(reply) -> tuple[GeminiProvider, _RecordingModels]:
    provider = GeminiProvider.__new__(GeminiProvider)
    models = _RecordingModels(reply)
    provider.client = SimpleNamespace(aio=SimpleNamespace(models=models))
    provider.model = "gemini-2.5-flash"
    return provider, models


def _openai(reply) -> tuple[OpenAITextProvider, _RecordingResponses]:
    provider = OpenAITextProvider.__new__(OpenAITextProvider)
    responses = _RecordingResponses(reply)
    provider.client = SimpleNamespace(responses=responses)
    provider.model = "gpt-4.1-mini"
    return provider, responses


def test_gemini_text_passes_prompt_through():
    provider, models = _gemini("hola")
    assert asyncio.run(provider.generate_text("prompt")) == "hola"
    assert models.calls[0]["model"] == "gemini-2.5-flash"
    assert models.calls[0]["contents"] == "prompt"


def test_gemini_json_requests_schema_and_parses():
    provider, models = _gemini('```json\n{"variations": ["a", "b"]}\n```')
    schema = copywriting_variations_schema(2)
    assert asyncio.run(provider.generate_json("prompt", schema)) == {"variations": ["a", "b"]}
    config = models.calls[0]["config"]
    assert config.response_mime_type == "application/json"


def test_gemini_malformed_json_is_a_generation_error():
    provider, _ = _gemini("not json at all")
    with pytest.raises(GenerationError) as err:
        asyncio.run(provider.generate_json("prompt", copywriting_variations_schema(1)))
    assert str(err.value) == JSON_ERROR_MESSAGE


def test_gemini_transport_failure_is_wrapped():
    provider, _ = _gemini(RuntimeError("quota exceeded"))
    with pytest.raises(GenerationError) as err:
        asyncio.run(provider.generate_text("prompt"))
    assert str(err.value) == TEXT_ERROR_MESSAGE


def test_gemini_multipart_inlines_image_bytes():
    provider, models = _gemini("{}")
    image = InlineImage(mime_type="image/png", data_b64=base64.b64encode(b"\x89PNG").decode("ascii"))
    asyncio.run(provider.generate_json(["intro", image, "task"], {"type": "OBJECT", "properties": {}}))

    contents = models.calls[0]["contents"]
    parts = contents[0].parts
    assert parts[0].text == "intro"
    assert parts[1].inline_data.mime_type == "image/png"
    assert parts[1].inline_data.data == b"\x89PNG"
    assert parts[2].text == "task"


def test_openai_json_uses_strict_schema_format():
    provider, responses = _openai('Aquí tienes: {"variations": ["x"]}')
    result = asyncio.run(provider.generate_json("prompt", copywriting_variations_schema(1)))
    assert result == {"variations": ["x"]}
    fmt = responses.calls[0]["text"]["format"]
    assert fmt["type"] == "json_schema"
    assert fmt["strict"] is True
    assert fmt["schema"]["properties"]["variations"]["type"] == "array"


def test_openai_multipart_uses_data_url():
    provider, responses = _openai("texto")
    image = InlineImage(mime_type="image/jpeg", data_b64="QUJD")
    asyncio.run(provider.generate_text(["hola", image]))
    content = responses.calls[0]["input"][0]["content"]
    assert content[0] == {"type": "input_text", "text": "hola"}
    assert content[1] == {"type": "input_image", "image_url": "data:image/jpeg;base64,QUJD"}


def test_openai_failure_is_wrapped():
    provider, _ = _openai(RuntimeError("boom"))
    with pytest.raises(GenerationError):
        asyncio.run(provider.generate_text("prompt"))


def test_registry_requires_key_for_selected_backend():
    with pytest.raises(ProviderConfigError):
        get_text_provider(Settings(_env_file=None, text_provider="gemini", gemini_api_key=None))
    with pytest.raises(ProviderConfigError):
        get_text_provider(Settings(_env_file=None, text_provider="openai", openai_api_key=None))
    with pytest.raises(ProviderConfigError):
        get_text_provider(Settings(_env_file=None, text_provider="other"))


@pytest.mark.parametrize("reply", ['["a", "b"]', '"texto"', "42"])
def test_gemini_json_that_is_not_an_object_is_a_generation_error(reply):
    provider, _ = _gemini(reply)
    with pytest.raises(GenerationError) as err:
        asyncio.run(provider.generate_json("prompt", copywriting_variations_schema(1)))
    assert str(err.value) == JSON_ERROR_MESSAGE


def test_openai_json_that_is_not_an_object_is_a_generation_error():
    provider, _ = _openai('["a", "b"]')
    with pytest.raises(GenerationError):
        asyncio.run(provider.generate_json("prompt", copywriting_variations_schema(1)))


def test_successful_calls_log_their_outcome(caplog):
    gemini_logger = logging.getLogger("brand_studio.providers.gemini_provider")
    openai_logger = logging.getLogger("brand_studio.providers.openai_provider")
    # The package logger may not propagate, so listen on the module loggers directly.
    for lg in (gemini_logger, openai_logger):
        lg.addHandler(caplog.handler)
        lg.setLevel(logging.INFO)
    try:
        asyncio.run(_gemini("hola")[0].generate_text("prompt"))
        asyncio.run(_gemini('{"variations": []}')[0].generate_json("prompt", copywriting_variations_schema(1)))
        asyncio.run(_openai("hola")[0].generate_text("prompt"))
    finally:
        for lg in (gemini_logger, openai_logger):
            lg.removeHandler(caplog.handler)

    messages = [r.getMessage() for r in caplog.records]
    assert "gemini text generation ok chars=4" in messages
    assert "gemini json generation ok keys=1" in messages
    assert "openai text generation ok chars=4" in messages
