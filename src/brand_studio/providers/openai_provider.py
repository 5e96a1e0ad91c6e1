from __future__ import annotations

import json
import logging
import re
from typing import Any

from brand_studio.config import settings
from brand_studio.providers.base import (
    JSON_ERROR_MESSAGE,
    TEXT_ERROR_MESSAGE,
    GenerationError,
    InlineImage,
    PromptContents,
    require_object,
)
from brand_studio.schemas import to_json_schema

logger = logging.getLogger(__name__)


class OpenAITextProvider:
    name = "openai"

    def __init__(self, api_key: str, model: str | None = None) -> None:
        from openai import AsyncOpenAI  # type: ignore

        self.client = AsyncOpenAI(api_key=api_key)
        self.model = model or settings.openai_text_model

    async def generate_text(self, contents: PromptContents) -> str:
        logger.info("openai text generation model=%s", self.model)
        try:
            resp = await self.client.responses.create(
                model=self.model,
                input=self._to_input(contents),
            )
            text = resp.output_text
        except Exception as exc:
            logger.error("openai text generation failed: %s", exc)
            raise GenerationError(TEXT_ERROR_MESSAGE) from exc
        logger.info("openai text generation ok chars=%d", len(text or ""))
        return text

    async def generate_json(self, contents: PromptContents, schema: dict[str, Any]) -> Any:
        logger.info("openai json generation model=%s", self.model)
        try:
            resp = await self.client.responses.create(
                model=self.model,
                input=self._to_input(contents),
                text={
                    "format": {
                        "type": "json_schema",
                        "name": "response",
                        "schema": to_json_schema(schema),
                        "strict": True,
                    }
                },
            )
            result = require_object(json.loads(_extract_json(resp.output_text)))
        except Exception as exc:
            logger.error("openai json generation failed: %r", exc)
            raise GenerationError(JSON_ERROR_MESSAGE) from exc
        logger.info("openai json generation ok keys=%d", len(result))
        return result

    def _to_input(self, contents: PromptContents) -> Any:
        if isinstance(contents, str):
            return contents
        content: list[dict[str, str]] = []
        for part in contents:
            if isinstance(part, InlineImage):
                content.append(
                    {"type": "input_image", "image_url": f"data:{part.mime_type};base64,{part.data_b64}"}
                )
            else:
                content.append({"type": "input_text", "text": part})
        return [{"role": "user", "content": content}]


def _extract_json(text: str) -> str:
    # Best-effort extraction (handles accidental fences or pre/post text).
    raw = (text or "").strip()
    m = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", raw, re.DOTALL | re.IGNORECASE)
    if m:
        return m.group(1).strip()
    start = raw.find("{")
    end = raw.rfind("}")
    if start != -1 and end > start:
        return raw[start : end + 1]
    return raw
