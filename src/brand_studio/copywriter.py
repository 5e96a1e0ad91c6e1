from __future__ import annotations

import logging
from datetime import datetime, timezone

from brand_studio import prompts
from brand_studio.models import BrandProject, CopywriterHistoryItem
from brand_studio.providers.base import TextProvider, require_object
from brand_studio.schemas import copywriting_variations_schema
from brand_studio.storage import HistoryStore

logger = logging.getLogger(__name__)

TONES = ("Profesional", "Amistoso", "Persuasivo", "Divertido", "Informativo", "Empático", "Urgente", "Lujoso")
MIN_VARIATIONS = 1
MAX_VARIATIONS = 5
EMPTY_TEXT_MESSAGE = "Por favor, introduce el texto que quieres mejorar."


def default_tone(project: BrandProject | None) -> str:
    if project is not None:
        tone = str(project.data.get("toneOfVoice") or "").split(",")[0].strip()
        if tone in TONES:
            return tone
    return TONES[0]


def project_context(project: BrandProject | None) -> str:
    if project is None:
        return ""
    data = project.data
    lines = [
        f"Público Objetivo: {data['targetAudience']}" if data.get("targetAudience") else "",
        f"Valores: {data['values']}" if data.get("values") else "",
        f"Promesa de Marca: {data['brandPromise']}" if data.get("brandPromise") else "",
    ]
    return "\n".join(line for line in lines if line)


class Copywriter:
    def __init__(self, history: HistoryStore, provider: TextProvider) -> None:
        self.history = history
        self.provider = provider

    async def generate(
        self,
        original_text: str,
        tone: str,
        num_variations: int = 3,
        context: str | None = None,
    ) -> CopywriterHistoryItem:
        """
        Request rewritten variations and log them to history. Nothing is logged
        when the call fails.
        """
        if not (original_text or "").strip():
            raise ValueError(EMPTY_TEXT_MESSAGE)
        n = max(MIN_VARIATIONS, min(MAX_VARIATIONS, int(num_variations)))
        context = (context or "").strip() or None

        result = await self.provider.generate_json(
            prompts.copywriting_prompt(original_text, tone, n, context),
            copywriting_variations_schema(n),
        )
        raw = require_object(result).get("variations", [])
        variations = [str(v) for v in raw or [] if str(v).strip()]

        item = CopywriterHistoryItem(
            id=self.history.new_id(),
            timestamp=datetime.now(timezone.utc).isoformat(),
            original_text=original_text,
            tone=tone,
            context=context,
            variations=variations,
        )
        self.history.append(item)
        logger.info("copywriter generated %d variations tone=%s", len(variations), tone)
        return item
