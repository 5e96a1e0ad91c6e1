from __future__ import annotations

from typing import Any

from brand_studio.models import BrandProject
from brand_studio.storage import ProjectNotFound, ProjectStore

VIEWS = ("welcome", "projectList", "tools")


class AppState:
    """
    Navigation state for the single local user: which project is open and which
    screen is shown when none is. Project records themselves live in the store.
    """

    def __init__(self, store: ProjectStore) -> None:
        self.store = store
        self.selected_project_id: str | None = None
        self.view = "welcome"

    def create_manual_project(self) -> BrandProject:
        proj = self.store.create_project()
        self.selected_project_id = proj.id
        return proj

    def brand_generated(self, data: dict[str, Any]) -> BrandProject:
        proj = self.store.create_generated_project(data)
        self.selected_project_id = proj.id
        return proj

    def select_project(self, project_id: str) -> BrandProject:
        proj = self.store.read_project(project_id)
        self.selected_project_id = proj.id
        # Project view takes precedence over whatever view was active.
        self.view = "welcome"
        return proj

    def update_project(self, project: BrandProject) -> BrandProject:
        return self.store.update_project(project)

    def delete_project(self, project_id: str) -> None:
        self.store.delete_project(project_id)
        if self.selected_project_id == project_id:
            self.selected_project_id = None

    def show(self, view: str) -> None:
        """Leave any open project and switch to one of the top-level screens."""
        if view not in VIEWS:
            raise ValueError(f"unknown view '{view}'")
        self.selected_project_id = None
        self.view = view

    def go_home(self) -> None:
        self.show("projectList")

    def go_to_tools(self) -> None:
        self.show("tools")

    def go_welcome(self) -> None:
        self.show("welcome")

    def selected_project(self) -> BrandProject | None:
        if self.selected_project_id is None:
            return None
        try:
            return self.store.read_project(self.selected_project_id)
        except ProjectNotFound:
            self.selected_project_id = None
            return None

    def screen(self) -> str:
        if self.selected_project() is not None:
            return "project"
        return self.view
