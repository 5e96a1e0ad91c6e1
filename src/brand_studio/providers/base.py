from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union

TEXT_ERROR_MESSAGE = "No se pudo generar el contenido. Por favor, inténtalo de nuevo."
JSON_ERROR_MESSAGE = "No se pudo generar el contenido JSON. Por favor, inténtalo de nuevo."


class GenerationError(Exception):
    """A generation call failed (transport, quota or unparseable output).

    `str(err)` is the user-facing message.
    """


class ProviderConfigError(Exception):
    pass


@dataclass(frozen=True)
class InlineImage:
    mime_type: str
    data_b64: str


# A prompt is either plain text or an ordered list of text/image parts.
PromptContents = Union[str, list[Union[str, InlineImage]]]


class TextProvider(Protocol):
    name: str
    model: str

    async def generate_text(self, contents: PromptContents) -> str: ...

    async def generate_json(self, contents: PromptContents, schema: dict[str, Any]) -> Any: ...


def require_object(result: Any) -> dict[str, Any]:
    """Structured replies must decode to a JSON object; anything else counts as a failed call."""
    if not isinstance(result, dict):
        raise GenerationError(JSON_ERROR_MESSAGE)
    return result
