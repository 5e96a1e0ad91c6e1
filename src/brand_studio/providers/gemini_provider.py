from __future__ import annotations

import base64
import json
import logging
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

logger = logging.getLogger(__name__)


class GeminiProvider:
    name = "gemini"

    def __init__(self, api_key: str, model: str | None = None) -> None:
        # Imported lazily so the app can start without the dependency installed.
        from google import genai  # type: ignore

        self._genai = genai
        self.client = genai.Client(api_key=api_key)
        self.model = model or settings.gemini_text_model

    async def generate_text(self, contents: PromptContents) -> str:
        logger.info("gemini text generation model=%s", self.model)
        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model,
                contents=self._to_contents(contents),
            )
            text = getattr(resp, "text", None)
            if text is None:
                raise ValueError("empty response")
        except Exception as exc:
            logger.error("gemini text generation failed: %s", exc)
            raise GenerationError(TEXT_ERROR_MESSAGE) from exc
        logger.info("gemini text generation ok chars=%d", len(text))
        return text

    async def generate_json(self, contents: PromptContents, schema: dict[str, Any]) -> Any:
        """
        Structured call: the schema is sent as `response_schema` and the reply is
        parsed as JSON. A parse failure, or a reply that is not a JSON object, is
        treated like a transport failure.
        """
        from google.genai import types  # type: ignore

        logger.info("gemini json generation model=%s", self.model)
        try:
            resp = await self.client.aio.models.generate_content(
                model=self.model,
                contents=self._to_contents(contents),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=schema,
                ),
            )
            raw_text = (getattr(resp, "text", None) or "").strip()
            result = require_object(json.loads(_strip_code_fences(raw_text)))
        except Exception as exc:
            logger.error("gemini json generation failed: %r", exc)
            raise GenerationError(JSON_ERROR_MESSAGE) from exc
        logger.info("gemini json generation ok keys=%d", len(result))
        return result

    def _to_contents(self, contents: PromptContents) -> Any:
        if isinstance(contents, str):
            return contents

        from google.genai import types  # type: ignore

        parts: list[Any] = []
        for part in contents:
            if isinstance(part, InlineImage):
                parts.append(
                    types.Part.from_bytes(data=base64.b64decode(part.data_b64), mime_type=part.mime_type)
                )
            else:
                parts.append(types.Part.from_text(text=part))
        return [types.Content(role="user", parts=parts)]


def _strip_code_fences(text: str) -> str:
    s = text.strip()
    if s.startswith("```"):
        # Remove leading fence line
        first_nl = s.find("\n")
        if first_nl != -1:
            s = s[first_nl + 1 :]
        # Remove trailing fence
        if s.rstrip().endswith("```"):
            s = s.rstrip()[:-3]
    return s.strip()
