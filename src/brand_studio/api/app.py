from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlencode

from fastapi import FastAPI, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from brand_studio import sections
from brand_studio.assembly.render import palette_png_bytes
from brand_studio.config import settings
from brand_studio.content_calendar import (
    OBJECTIVES,
    WEEKDAYS,
    CalendarSession,
    content_type_style,
    expand_ideas,
    month_label,
    parse_month,
)
from brand_studio.copywriter import TONES, Copywriter, default_tone, project_context
from brand_studio.logging_utils import configure_logging
from brand_studio.models import BrandProject
from brand_studio.providers.base import GenerationError, ProviderConfigError, TextProvider
from brand_studio.providers.registry import get_text_provider
from brand_studio.state import AppState
from brand_studio.storage import HistoryStore, ProjectNotFound, ProjectStore
from brand_studio.workspace import BrandWorkspace, logo_from_upload

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="brand_studio")

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

static_dir = BASE_DIR / "static"
static_dir.mkdir(parents=True, exist_ok=True)
app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

store = ProjectStore()
history = HistoryStore()
state = AppState(store)
# Calendar sessions are per-process and per-project; they are never persisted.
calendars: dict[str, CalendarSession] = {}

TABS = (
    ("strategy", "Estrategia de Marca"),
    ("content", "Creación de Contenido"),
    ("copywriter", "Asistente de Copywriting"),
)


def _get_provider() -> TextProvider:
    try:
        return get_text_provider(settings)
    except ProviderConfigError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _read_project(project_id: str) -> BrandProject:
    try:
        return state.store.read_project(project_id)
    except ProjectNotFound:
        raise HTTPException(status_code=404, detail="project not found")


def _calendar_for(project: BrandProject) -> CalendarSession:
    session = calendars.get(project.id)
    if session is None:
        session = CalendarSession.for_project(project)
        calendars[project.id] = session
    return session


def _safe_return_path(value: str | None) -> str | None:
    if not value:
        return None
    cleaned = value.strip()
    # Browsers read "/\host" like "//host", so backslashes are refused outright.
    if cleaned.startswith("/") and not cleaned.startswith("//") and "\\" not in cleaned and ".." not in cleaned:
        return cleaned
    return None


def _project_url(project_id: str, tab: str = "strategy", **params: str) -> str:
    query = {"tab": tab, **{k: v for k, v in params.items() if v}}
    return f"/projects/{project_id}?{urlencode(query)}"


def _with_params(path: str, **params: str) -> str:
    query = urlencode({k: v for k, v in params.items() if v})
    if not query:
        return path
    sep = "&" if "?" in path else "?"
    return f"{path}{sep}{query}"


def _copywriter_context(
    project: BrandProject | None,
    history_id: str = "",
    form: dict[str, Any] | None = None,
) -> dict[str, Any]:
    items = history.list_items()
    loaded = history.get(history_id) if history_id else None
    copy_form: dict[str, Any] = {
        "original_text": "",
        "tone": default_tone(project),
        "num_variations": 3,
        "context": project_context(project),
    }
    results: list[str] = []
    if loaded is not None:
        copy_form.update(
            original_text=loaded.original_text,
            tone=loaded.tone,
            context=loaded.context or "",
        )
        results = loaded.variations
    if form:
        copy_form.update(form)
    return {
        "tones": TONES,
        "history": items,
        "copy_form": copy_form,
        "copy_results": results,
        "active_history_id": loaded.id if loaded else "",
    }


def _render_project(
    request: Request,
    project: BrandProject,
    tab: str,
    error: str = "",
    history_id: str = "",
    copy_form: dict[str, Any] | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    session = _calendar_for(project)
    context: dict[str, Any] = {
        "project": project,
        "tab": tab if tab in {t[0] for t in TABS} else "strategy",
        "tabs": TABS,
        "error": error,
        "sections": sections.SECTIONS,
        "visual_identity": project.visual_identity(),
        "calendar": session,
        "calendar_grid": session.grid(),
        "calendar_label": month_label(session.strategy.month),
        "weekdays": WEEKDAYS,
        "objectives": OBJECTIVES,
        "content_type_style": content_type_style,
    }
    context.update(_copywriter_context(project, history_id=history_id, form=copy_form))
    return templates.TemplateResponse(
        request=request,
        name="project.html",
        context=context,
        status_code=status_code,
    )


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    screen = state.screen()
    if screen == "project" and state.selected_project_id:
        return RedirectResponse(url=f"/projects/{state.selected_project_id}", status_code=303)
    if screen == "projectList":
        return RedirectResponse(url="/projects", status_code=303)
    if screen == "tools":
        return RedirectResponse(url="/tools", status_code=303)
    return templates.TemplateResponse(request=request, name="welcome.html", context={"error": "", "form": {}})


@app.get("/welcome", response_class=HTMLResponse)
def welcome(request: Request):
    state.go_welcome()
    return templates.TemplateResponse(request=request, name="welcome.html", context={"error": "", "form": {}})


@app.post("/generate")
async def generate_brand(
    request: Request,
    description: str = Form(""),
    website_url: str = Form(""),
    logo: UploadFile | None = File(None),
    pdf: UploadFile | None = File(None),
):
    form = {"description": description, "website_url": website_url}
    try:
        logo_part = None
        if logo is not None and logo.filename:
            logo_part = logo_from_upload(logo.filename, await logo.read())
        # Only the PDF's name is forwarded; its content is never read.
        pdf_name = pdf.filename if pdf is not None and pdf.filename else None
        workspace = BrandWorkspace(state.store, _get_provider())
        data = await workspace.generate_full_brand(
            description, logo=logo_part, pdf_name=pdf_name, website_url=website_url
        )
    except (ValueError, GenerationError) as exc:
        return templates.TemplateResponse(
            request=request,
            name="welcome.html",
            context={"error": str(exc), "form": form},
            status_code=400 if isinstance(exc, ValueError) else 502,
        )
    proj = state.brand_generated(data)
    return RedirectResponse(url=f"/projects/{proj.id}", status_code=303)


@app.get("/projects", response_class=HTMLResponse)
def project_list(request: Request):
    state.go_home()
    return templates.TemplateResponse(
        request=request,
        name="projects.html",
        context={"projects": state.store.list_projects()},
    )


@app.post("/projects")
def create_project():
    proj = state.create_manual_project()
    return RedirectResponse(url=f"/projects/{proj.id}", status_code=303)


@app.get("/projects/{project_id}", response_class=HTMLResponse)
def project_page(
    request: Request,
    project_id: str,
    tab: str = "strategy",
    error: str = "",
    history_id: str = Query("", alias="history"),
):
    try:
        proj = state.select_project(project_id)
    except ProjectNotFound:
        raise HTTPException(status_code=404, detail="project not found")
    return _render_project(request, proj, tab=tab, error=error, history_id=history_id)


@app.post("/projects/{project_id}/rename")
def rename_project(project_id: str, name: str = Form("")):
    _read_project(project_id)
    state.store.rename_project(project_id, name)
    return RedirectResponse(url=f"/projects/{project_id}", status_code=303)


@app.post("/projects/{project_id}/delete")
def delete_project(project_id: str):
    state.delete_project(project_id)
    calendars.pop(project_id, None)
    return RedirectResponse(url="/projects", status_code=303)


@app.post("/projects/{project_id}/fields/{field_id}")
def save_field(project_id: str, field_id: str, value: str = Form("")):
    _read_project(project_id)
    if field_id not in sections.text_field_ids():
        raise HTTPException(status_code=400, detail=f"field '{field_id}' is not editable")
    state.store.set_field(project_id, field_id, value)
    return RedirectResponse(url=_project_url(project_id) + f"#{field_id}", status_code=303)


@app.post("/projects/{project_id}/fields/{field_id}/generate")
async def generate_field(project_id: str, field_id: str):
    proj = _read_project(project_id)
    workspace = BrandWorkspace(state.store, _get_provider())
    try:
        await workspace.generate_field(proj, field_id)
    except (ValueError, GenerationError) as exc:
        return RedirectResponse(url=_project_url(project_id, error=str(exc)) + f"#{field_id}", status_code=303)
    return RedirectResponse(url=_project_url(project_id) + f"#{field_id}", status_code=303)


@app.get("/projects/{project_id}/visual-identity/palette.png")
def palette_png(project_id: str):
    proj = _read_project(project_id)
    vi = proj.visual_identity()
    if vi is None or not vi.color_palette:
        raise HTTPException(status_code=404, detail="no color palette yet")
    return Response(content=palette_png_bytes(vi), media_type="image/png")


@app.post("/projects/{project_id}/calendar/generate")
async def generate_calendar(
    project_id: str,
    month: str = Form(...),
    niche: str = Form(""),
    objective: str = Form(OBJECTIVES[0]),
    keywords: str = Form(""),
):
    proj = _read_project(project_id)
    session = _calendar_for(proj)
    try:
        parse_month(month)
    except ValueError as exc:
        return RedirectResponse(url=_project_url(project_id, "content", error=str(exc)), status_code=303)
    session.strategy.month = month
    session.strategy.niche = niche
    session.strategy.objective = objective
    session.strategy.keywords = keywords
    try:
        await session.generate(_get_provider(), proj)
    except GenerationError as exc:
        return RedirectResponse(url=_project_url(project_id, "content", error=str(exc)), status_code=303)
    return RedirectResponse(url=_project_url(project_id, "content"), status_code=303)


@app.post("/projects/{project_id}/calendar/reset")
def reset_calendar(project_id: str):
    proj = _read_project(project_id)
    _calendar_for(proj).reset(proj)
    return RedirectResponse(url=_project_url(project_id, "content"), status_code=303)


@app.post("/projects/{project_id}/calendar/select")
def toggle_idea(project_id: str, idea_id: str = Form(...)):
    proj = _read_project(project_id)
    _calendar_for(proj).toggle(idea_id)
    return RedirectResponse(url=_project_url(project_id, "content") + f"#{idea_id}", status_code=303)


@app.post("/projects/{project_id}/calendar/create", response_class=HTMLResponse)
async def create_content(
    request: Request,
    project_id: str,
    scope: str = Form("selected"),
    idea_id: str = Form(""),
):
    proj = _read_project(project_id)
    session = _calendar_for(proj)
    if scope == "all":
        ideas = list(session.ideas)
    elif scope == "one":
        idea = session.get_idea(idea_id)
        ideas = [idea] if idea else []
    else:
        ideas = session.selected_ideas()
    if not ideas:
        return RedirectResponse(url=_project_url(project_id, "content"), status_code=303)

    run = await expand_ideas(_get_provider(), proj, ideas)
    return templates.TemplateResponse(
        request=request,
        name="generation.html",
        context={"project": proj, "run": run, "content_type_style": content_type_style},
    )


@app.get("/tools", response_class=HTMLResponse)
def tools_page(request: Request, error: str = "", history_id: str = Query("", alias="history")):
    state.go_to_tools()
    context = {"error": error, "project": None}
    context.update(_copywriter_context(None, history_id=history_id))
    return templates.TemplateResponse(request=request, name="tools.html", context=context)


@app.post("/copywriter/generate")
async def generate_copy(
    request: Request,
    original_text: str = Form(""),
    tone: str = Form(TONES[0]),
    num_variations: int = Form(3),
    context: str = Form(""),
    project_id: str = Form(""),
):
    proj = _read_project(project_id) if project_id else None
    form = {"original_text": original_text, "tone": tone, "num_variations": num_variations, "context": context}
    try:
        copywriter = Copywriter(history, _get_provider())
        item = await copywriter.generate(original_text, tone, num_variations, context)
    except (ValueError, GenerationError) as exc:
        status = 400 if isinstance(exc, ValueError) else 502
        if proj is not None:
            return _render_project(
                request, proj, tab="copywriter", error=str(exc), copy_form=form, status_code=status
            )
        ctx: dict[str, Any] = {"error": str(exc), "project": None}
        ctx.update(_copywriter_context(None, form=form))
        return templates.TemplateResponse(request=request, name="tools.html", context=ctx, status_code=status)

    if proj is not None:
        return RedirectResponse(url=_project_url(proj.id, "copywriter", history=item.id), status_code=303)
    return RedirectResponse(url=_with_params("/tools", history=item.id), status_code=303)


@app.post("/copywriter/history/{item_id}/delete")
def delete_history_item(item_id: str, return_to: str = Form("")):
    history.delete(item_id)
    redirect_path = _safe_return_path(return_to) or "/tools"
    return RedirectResponse(url=redirect_path, status_code=303)
