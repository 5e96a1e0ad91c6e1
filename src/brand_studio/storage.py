from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from brand_studio.config import settings
from brand_studio.models import BrandProject, CopywriterHistoryItem

logger = logging.getLogger(__name__)

MANUAL_PROJECT_PREFIX = "Nuevo Proyecto Manual"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _now_millis() -> int:
    return int(time.time() * 1000)


class ProjectNotFound(KeyError):
    pass


class _JsonListFile:
    """A JSON list rewritten in full on every change. Unreadable files read as empty."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def read(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text("utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("could not read %s, starting empty: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            return []
        return [d for d in data if isinstance(d, dict)]

    def write(self, items: list[dict[str, Any]]) -> None:
        self.path.write_text(json.dumps(items, indent=2, ensure_ascii=False), encoding="utf-8")


class ProjectStore:
    def __init__(self, root_dir: Path | None = None) -> None:
        self.root_dir = Path(root_dir or settings.data_dir).resolve()
        self._file = _JsonListFile(self.root_dir / "projects.json")
        self._last_id_millis = 0
        for proj in self._load():
            self._last_id_millis = max(self._last_id_millis, _id_millis(proj.id))

    def _new_id(self) -> str:
        # Strictly increasing, even when two projects land in the same millisecond.
        millis = max(_now_millis(), self._last_id_millis + 1)
        self._last_id_millis = millis
        return f"brand-{millis}"

    def create_project(self) -> BrandProject:
        projects = self._load()
        count = sum(1 for p in projects if p.name.startswith(MANUAL_PROJECT_PREFIX))
        proj = BrandProject(
            id=self._new_id(),
            name=f"{MANUAL_PROJECT_PREFIX} {count + 1}",
            created_at=_now_iso(),
            data={},
        )
        projects.append(proj)
        self._save(projects)
        logger.info("created project id=%s", proj.id)
        return proj

    def create_generated_project(self, data: dict[str, Any]) -> BrandProject:
        purpose = data.get("purpose") if isinstance(data.get("purpose"), str) else ""
        label = (purpose or "")[:25] or "Concepto"
        proj = BrandProject(
            id=self._new_id(),
            name=f"Proyecto IA - {label}...",
            created_at=_now_iso(),
            data=dict(data),
        )
        projects = self._load()
        projects.append(proj)
        self._save(projects)
        logger.info("created generated project id=%s", proj.id)
        return proj

    def list_projects(self) -> list[BrandProject]:
        """Newest first."""
        return sorted(self._load(), key=lambda p: _id_millis(p.id), reverse=True)

    def read_project(self, project_id: str) -> BrandProject:
        for proj in self._load():
            if proj.id == project_id:
                return proj
        raise ProjectNotFound(project_id)

    def update_project(self, updated: BrandProject) -> BrandProject:
        projects = self._load()
        found = False
        for i, proj in enumerate(projects):
            if proj.id == updated.id:
                projects[i] = updated
                found = True
        if not found:
            raise ProjectNotFound(updated.id)
        self._save(projects)
        return updated

    def rename_project(self, project_id: str, name: str) -> BrandProject:
        proj = self.read_project(project_id)
        cleaned = (name or "").strip()
        if not cleaned or cleaned == proj.name:
            return proj
        proj.name = cleaned
        return self.update_project(proj)

    def set_field(self, project_id: str, field: str, value: Any) -> BrandProject:
        proj = self.read_project(project_id)
        proj.data = {**proj.data, field: value}
        return self.update_project(proj)

    def merge_data(self, project_id: str, partial: dict[str, Any]) -> BrandProject:
        proj = self.read_project(project_id)
        proj.data = {**proj.data, **partial}
        return self.update_project(proj)

    def delete_project(self, project_id: str) -> None:
        projects = self._load()
        remaining = [p for p in projects if p.id != project_id]
        if len(remaining) != len(projects):
            self._save(remaining)
            logger.info("deleted project id=%s", project_id)

    def _load(self) -> list[BrandProject]:
        out: list[BrandProject] = []
        for d in self._file.read():
            try:
                out.append(
                    BrandProject(
                        id=str(d["id"]),
                        name=str(d.get("name", "")),
                        created_at=str(d.get("created_at", "")),
                        data=dict(d.get("data") or {}),
                    )
                )
            except (KeyError, TypeError, ValueError):
                continue
        return out

    def _save(self, projects: list[BrandProject]) -> None:
        self._file.write([asdict(p) for p in projects])


class HistoryStore:
    def __init__(self, root_dir: Path | None = None, limit: int | None = None) -> None:
        self.root_dir = Path(root_dir or settings.data_dir).resolve()
        self.limit = limit if limit is not None else settings.copywriter_history_limit
        self._file = _JsonListFile(self.root_dir / "copywriter_history.json")
        self._last_id_millis = max((_id_millis(i.id) for i in self.list_items()), default=0)

    def new_id(self) -> str:
        millis = max(_now_millis(), self._last_id_millis + 1)
        self._last_id_millis = millis
        return f"copy-{millis}"

    def list_items(self) -> list[CopywriterHistoryItem]:
        out: list[CopywriterHistoryItem] = []
        for d in self._file.read():
            try:
                out.append(
                    CopywriterHistoryItem(
                        id=str(d["id"]),
                        timestamp=str(d.get("timestamp", "")),
                        original_text=str(d.get("original_text", "")),
                        tone=str(d.get("tone", "")),
                        context=d.get("context"),
                        variations=[str(v) for v in d.get("variations", []) or []],
                    )
                )
            except (KeyError, TypeError):
                continue
        return out

    def get(self, item_id: str) -> CopywriterHistoryItem | None:
        return next((i for i in self.list_items() if i.id == item_id), None)

    def append(self, item: CopywriterHistoryItem) -> None:
        items = [item, *self.list_items()][: self.limit]
        self._file.write([asdict(i) for i in items])

    def delete(self, item_id: str) -> None:
        items = [i for i in self.list_items() if i.id != item_id]
        self._file.write([asdict(i) for i in items])


def _id_millis(project_id: str) -> int:
    try:
        return int(project_id.rsplit("-", 1)[-1])
    except ValueError:
        return 0
