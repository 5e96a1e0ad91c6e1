from __future__ import annotations

import pytest

from brand_studio.state import AppState


def test_deleting_selected_project_clears_selection(store):
    state = AppState(store)
    proj = state.create_manual_project()
    assert state.selected_project_id == proj.id
    assert state.screen() == "project"

    state.delete_project(proj.id)
    assert state.selected_project_id is None
    assert state.selected_project() is None
    assert state.screen() == "welcome"


def test_deleting_other_project_keeps_selection(store):
    state = AppState(store)
    other = state.create_manual_project()
    current = state.create_manual_project()
    state.delete_project(other.id)
    assert state.selected_project_id == current.id


def test_navigation_clears_selection(store):
    state = AppState(store)
    state.create_manual_project()
    state.go_to_tools()
    assert state.selected_project_id is None
    assert state.screen() == "tools"

    proj = state.brand_generated({"purpose": "Algo"})
    assert state.screen() == "project"
    state.go_home()
    assert state.screen() == "projectList"

    state.select_project(proj.id)
    assert state.view == "welcome"
    assert state.screen() == "project"


def test_unknown_view_is_rejected(store):
    state = AppState(store)
    proj = state.create_manual_project()
    with pytest.raises(ValueError):
        state.show("settings")
    assert state.selected_project_id == proj.id
    assert state.view == "welcome"
