import os
import tempfile
from typing import Any

import pytest

# Keep the module-level stores in app.py away from the working tree.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="brand_studio_test_"))
os.environ.setdefault("GEMINI_API_KEY", "test_key")

from brand_studio.providers.base import GenerationError, JSON_ERROR_MESSAGE, TEXT_ERROR_MESSAGE  # noqa: E402
from brand_studio.storage import HistoryStore, ProjectStore  # noqa: E402


class FakeProvider:
    """In-memory TextProvider. Queue replies; an Exception instance is raised instead of returned."""

    name = "fake"
    model = "fake-model"

    def __init__(self, text_replies: list[Any] | None = None, json_replies: list[Any] | None = None) -> None:
        self.text_replies = list(text_replies or [])
        self.json_replies = list(json_replies or [])
        self.text_calls: list[Any] = []
        self.json_calls: list[tuple[Any, dict[str, Any]]] = []

    async def generate_text(self, contents):
        self.text_calls.append(contents)
        reply = self.text_replies.pop(0) if self.text_replies else GenerationError(TEXT_ERROR_MESSAGE)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def generate_json(self, contents, schema):
        self.json_calls.append((contents, schema))
        reply = self.json_replies.pop(0) if self.json_replies else GenerationError(JSON_ERROR_MESSAGE)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture()
def store(tmp_path):
    return ProjectStore(root_dir=tmp_path)


@pytest.fixture()
def history(tmp_path):
    return HistoryStore(root_dir=tmp_path, limit=50)


@pytest.fixture()
def fake_provider():
    return FakeProvider()
