from __future__ import annotations

import base64
import logging
from io import BytesIO
from typing import Any

from PIL import Image, UnidentifiedImageError

from brand_studio import prompts
from brand_studio.models import BrandProject, VisualIdentity
from brand_studio.providers.base import InlineImage, TextProvider, require_object
from brand_studio.schemas import FULL_BRAND_STRATEGY_SCHEMA, VISUAL_IDENTITY_SCHEMA
from brand_studio.storage import ProjectStore

logger = logging.getLogger(__name__)

EMPTY_DESCRIPTION_MESSAGE = "Por favor, introduce una descripción para tu marca."


class BrandWorkspace:
    def __init__(self, store: ProjectStore, provider: TextProvider) -> None:
        self.store = store
        self.provider = provider

    async def generate_field(self, project: BrandProject, field_id: str) -> BrandProject:
        """
        Generate one field and merge it into the project. On failure the
        GenerationError propagates and nothing is written.
        """
        if field_id == "visualIdentity":
            raw = await self.provider.generate_json(
                prompts.visual_identity_prompt(project.data), VISUAL_IDENTITY_SCHEMA
            )
            value: Any = VisualIdentity.from_dict(require_object(raw)).to_dict()
        else:
            value = await self.provider.generate_text(prompts.brand_ideas_prompt(field_id, project.data))
        logger.info("generated field %s for project id=%s", field_id, project.id)
        return self.store.merge_data(project.id, {field_id: value})

    async def generate_full_brand(
        self,
        description: str,
        logo: InlineImage | None = None,
        pdf_name: str | None = None,
        website_url: str | None = None,
    ) -> dict[str, Any]:
        if not (description or "").strip():
            raise ValueError(EMPTY_DESCRIPTION_MESSAGE)
        contents = prompts.full_brand_strategy_parts(
            description,
            logo=logo,
            pdf_name=(pdf_name or "").strip() or None,
            website_url=(website_url or "").strip() or None,
        )
        result = await self.provider.generate_json(contents, FULL_BRAND_STRATEGY_SCHEMA)
        return require_object(result)


def logo_from_upload(filename: str, content: bytes) -> InlineImage:
    try:
        with Image.open(BytesIO(content)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValueError(f"'{filename}' no es una imagen válida") from exc
    mime = Image.MIME.get(fmt or "", "application/octet-stream")
    return InlineImage(mime_type=mime, data_b64=base64.b64encode(content).decode("ascii"))
