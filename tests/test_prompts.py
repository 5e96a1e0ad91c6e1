from __future__ import annotations

import pytest

from brand_studio import prompts, sections
from brand_studio.models import BrandProject, ContentIdea
from brand_studio.schemas import FULL_BRAND_STRATEGY_SCHEMA, to_json_schema


def test_every_generated_text_field_has_an_instruction():
    generated = set(sections.generated_field_ids()) - {"visualIdentity"}
    assert generated == set(prompts.BRAND_IDEA_INSTRUCTIONS)


def test_brand_ideas_preamble_marks_missing_fields():
    prompt = prompts.brand_ideas_prompt("ctas", {"vision": "Líder regional"})
    assert "Visión: Líder regional" in prompt
    assert "Valores: No definido" in prompt
    assert prompt.endswith(prompts.BRAND_IDEA_INSTRUCTIONS["ctas"])


def test_unknown_section_raises():
    with pytest.raises(ValueError):
        prompts.brand_ideas_prompt("mission", {})


def test_full_content_prompt_falls_back_for_unknown_type():
    project = BrandProject(id="brand-1", name="Marca", created_at="", data={})
    idea = ContentIdea(id="i", day=1, content_type="Webinar", title="T", description="D")
    prompt = prompts.full_content_prompt(project, idea)
    assert 'Escribe un contenido de tipo "Webinar"' in prompt
    assert "Profesional y accesible" in prompt


def test_full_brand_parts_without_optional_inputs():
    parts = prompts.full_brand_strategy_parts("Descripción")
    assert len(parts) == 2


def test_full_strategy_schema_covers_document_fields():
    props = FULL_BRAND_STRATEGY_SCHEMA["properties"]
    assert set(props) == set(sections.field_ids())
    assert FULL_BRAND_STRATEGY_SCHEMA["required"] == list(props)


def test_json_schema_conversion_is_strict():
    converted = to_json_schema(FULL_BRAND_STRATEGY_SCHEMA)
    assert converted["type"] == "object"
    assert converted["additionalProperties"] is False
    palette = converted["properties"]["visualIdentity"]["properties"]["colorPalette"]
    assert palette["type"] == "array"
    assert palette["items"]["additionalProperties"] is False
