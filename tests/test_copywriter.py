from __future__ import annotations

import asyncio

import pytest

from brand_studio.copywriter import Copywriter, default_tone, project_context
from brand_studio.models import BrandProject
from brand_studio.providers.base import GenerationError
from conftest import FakeProvider


def _project(**data) -> BrandProject:
    return BrandProject(id="brand-1", name="Marca", created_at="2025-01-01T00:00:00+00:00", data=data)


def test_generate_appends_history_entry(history):
    provider = FakeProvider(json_replies=[{"variations": ["uno", "dos", "tres"]}])
    item = asyncio.run(Copywriter(history, provider).generate("Compra ya", "Urgente", 3, "Lanzamiento"))

    assert item.variations == ["uno", "dos", "tres"]
    assert item.id.startswith("copy-")
    stored = history.list_items()
    assert [i.id for i in stored] == [item.id]
    assert stored[0].context == "Lanzamiento"

    prompt, schema = provider.json_calls[0]
    assert "**Urgente**" in prompt
    assert 'Ten en cuenta el siguiente contexto adicional: "Lanzamiento"' in prompt
    assert schema["properties"]["variations"]["description"] == "Una lista de 3 variaciones del texto."


def test_history_stays_capped_after_repeated_generations(tmp_path):
    from brand_studio.storage import HistoryStore

    hist = HistoryStore(root_dir=tmp_path, limit=50)
    provider = FakeProvider(json_replies=[{"variations": [f"v{i}"]} for i in range(55)])
    writer = Copywriter(hist, provider)
    for i in range(55):
        asyncio.run(writer.generate(f"texto {i}", "Profesional", 1))
    assert len(hist.list_items()) == 50
    assert hist.list_items()[0].original_text == "texto 54"


def test_empty_text_is_rejected_without_calling_provider(history):
    provider = FakeProvider()
    with pytest.raises(ValueError):
        asyncio.run(Copywriter(history, provider).generate("   ", "Profesional"))
    assert provider.json_calls == []


def test_failure_records_nothing(history):
    provider = FakeProvider(json_replies=[GenerationError("fallo")])
    with pytest.raises(GenerationError):
        asyncio.run(Copywriter(history, provider).generate("Hola", "Amistoso"))
    assert history.list_items() == []


def test_variation_count_is_clamped(history):
    provider = FakeProvider(json_replies=[{"variations": ["a"]}])
    asyncio.run(Copywriter(history, provider).generate("Hola", "Amistoso", 12))
    prompt, _ = provider.json_calls[0]
    assert "Genera **5** variaciones" in prompt
    assert "El objetivo es de propósito general." in prompt


def test_default_tone_and_context_from_project():
    assert default_tone(None) == "Profesional"
    assert default_tone(_project(toneOfVoice="Divertido, cercano")) == "Divertido"
    assert default_tone(_project(toneOfVoice="Sarcástico")) == "Profesional"

    ctx = project_context(_project(targetAudience="Devs", brandPromise="Menos estrés"))
    assert ctx == "Público Objetivo: Devs\nPromesa de Marca: Menos estrés"
    assert project_context(None) == ""


def test_non_object_reply_records_nothing(history):
    provider = FakeProvider(json_replies=[["uno", "dos"]])
    with pytest.raises(GenerationError):
        asyncio.run(Copywriter(history, provider).generate("Hola", "Amistoso"))
    assert history.list_items() == []


def test_history_ids_stay_unique_within_one_millisecond(history, monkeypatch):
    import brand_studio.storage as storage_module

    monkeypatch.setattr(storage_module, "_now_millis", lambda: 1_700_000_000_000)
    provider = FakeProvider(json_replies=[{"variations": ["a"]}, {"variations": ["b"]}])
    writer = Copywriter(history, provider)
    first = asyncio.run(writer.generate("Uno", "Profesional", 1))
    second = asyncio.run(writer.generate("Dos", "Profesional", 1))

    assert first.id != second.id
    history.delete(first.id)
    assert [i.id for i in history.list_items()] == [second.id]
