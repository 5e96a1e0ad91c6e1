from __future__ import annotations

import calendar
import logging
import time
from dataclasses import dataclass, field
from datetime import date

from brand_studio import prompts
from brand_studio.models import BrandProject, ContentIdea
from brand_studio.providers.base import GenerationError, TextProvider, require_object
from brand_studio.schemas import CONTENT_CALENDAR_SCHEMA

logger = logging.getLogger(__name__)

OBJECTIVES = ("Lead Generation", "Brand Awareness", "Engagement", "Sales Conversion")
WEEKDAYS = ("Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb")
MONTH_NAMES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

CONTENT_TYPE_STYLES: dict[str, dict[str, str]] = {
    "Blog": {"icon": "✍️", "color": "#60a5fa"},
    "Social Media": {"icon": "🔗", "color": "#4ade80"},
    "Email": {"icon": "✉️", "color": "#facc15"},
    "Video": {"icon": "🎬", "color": "#f87171"},
    "Podcast": {"icon": "🎙️", "color": "#c084fc"},
    "Default": {"icon": "💡", "color": "#94a3b8"},
}


def content_type_style(content_type: str) -> dict[str, str]:
    return CONTENT_TYPE_STYLES.get(content_type) or CONTENT_TYPE_STYLES["Default"]


def parse_month(month: str) -> tuple[int, int]:
    try:
        year_s, month_s = month.strip().split("-", 1)
        year, mon = int(year_s), int(month_s)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"invalid month '{month}', expected YYYY-MM") from exc
    # datetime.date only covers years 1..9999.
    if not (1 <= year <= 9999 and 1 <= mon <= 12):
        raise ValueError(f"invalid month '{month}', expected YYYY-MM")
    return year, mon


def current_month(today: date | None = None) -> str:
    today = today or date.today()
    return f"{today.year}-{today.month:02d}"


def month_grid(month: str) -> list[int | None]:
    """
    Sunday-first month grid: leading None cells for the weekday offset of the
    1st, then day numbers 1..N.
    """
    year, mon = parse_month(month)
    # date.weekday(): Monday=0 .. Sunday=6; shift so Sunday=0.
    padding = (date(year, mon, 1).weekday() + 1) % 7
    days_in_month = calendar.monthrange(year, mon)[1]
    cells: list[int | None] = [None] * padding
    cells.extend(range(1, days_in_month + 1))
    return cells


def month_label(month: str) -> str:
    year, mon = parse_month(month)
    return f"{MONTH_NAMES[mon - 1]} de {year}"


@dataclass
class CalendarStrategy:
    month: str
    niche: str
    objective: str
    keywords: str

    @classmethod
    def for_project(cls, project: BrandProject) -> CalendarStrategy:
        return cls(
            month=current_month(),
            niche=str(project.data.get("purpose") or ""),
            objective=OBJECTIVES[0],
            keywords=str(project.data.get("contentPillars") or ""),
        )


@dataclass
class CalendarSession:
    """Transient calendar state for one project. Never persisted."""

    strategy: CalendarStrategy
    ideas: list[ContentIdea] = field(default_factory=list)
    selected: set[str] = field(default_factory=set)
    error: str | None = None

    @classmethod
    def for_project(cls, project: BrandProject) -> CalendarSession:
        return cls(strategy=CalendarStrategy.for_project(project))

    def grid(self) -> list[int | None]:
        return month_grid(self.strategy.month)

    def ideas_for_day(self, day: int | None) -> list[ContentIdea]:
        if day is None:
            return []
        return [i for i in self.ideas if i.day == day]

    def toggle(self, idea_id: str) -> None:
        if idea_id in self.selected:
            self.selected.discard(idea_id)
        elif any(i.id == idea_id for i in self.ideas):
            self.selected.add(idea_id)

    def selected_ideas(self) -> list[ContentIdea]:
        return [i for i in self.ideas if i.id in self.selected]

    def can_create_selected(self) -> bool:
        return len(self.selected_ideas()) > 0

    def get_idea(self, idea_id: str) -> ContentIdea | None:
        return next((i for i in self.ideas if i.id == idea_id), None)

    def reset(self, project: BrandProject) -> None:
        self.strategy = CalendarStrategy.for_project(project)
        self.ideas = []
        self.selected = set()
        self.error = None

    async def generate(self, provider: TextProvider, project: BrandProject) -> list[ContentIdea]:
        self.error = None
        self.selected = set()
        prompt = prompts.content_calendar_prompt(
            project,
            month_label=month_label(self.strategy.month),
            niche=self.strategy.niche,
            objective=self.strategy.objective,
            keywords=self.strategy.keywords,
        )
        try:
            result = require_object(await provider.generate_json(prompt, CONTENT_CALENDAR_SCHEMA))
        except GenerationError as exc:
            self.error = str(exc)
            raise
        raw_ideas = result.get("contentIdeas", [])
        stamp = int(time.time() * 1000)
        ideas: list[ContentIdea] = []
        for index, raw in enumerate(raw_ideas or []):
            if not isinstance(raw, dict):
                continue
            try:
                day = int(raw.get("day", 0))
            except (TypeError, ValueError):
                day = 0
            ideas.append(
                ContentIdea(
                    id=f"idea-{stamp}-{index}",
                    day=day,
                    content_type=str(raw.get("contentType", "")),
                    title=str(raw.get("title", "")),
                    description=str(raw.get("description", "")),
                )
            )
        self.ideas = ideas
        logger.info("calendar generated for project id=%s ideas=%d", project.id, len(ideas))
        return ideas


@dataclass
class ExpansionItem:
    idea: ContentIdea
    loading: bool = True
    content: str | None = None
    failed: bool = False


@dataclass
class ContentGenerationRun:
    items: list[ExpansionItem]
    error: str | None = None

    def all_done(self) -> bool:
        return all(not i.loading for i in self.items)


async def expand_ideas(
    provider: TextProvider,
    project: BrandProject,
    ideas: list[ContentIdea],
) -> ContentGenerationRun:
    """
    Expand ideas into full content one at a time, in list order. A failed item
    records its error text in place of content and the run continues.
    """
    run = ContentGenerationRun(items=[ExpansionItem(idea=i) for i in ideas])
    for item in run.items:
        try:
            item.content = await provider.generate_text(prompts.full_content_prompt(project, item.idea))
            item.idea.generated_content = item.content
        except GenerationError as exc:
            logger.warning("content expansion failed for idea id=%s: %s", item.idea.id, exc)
            run.error = f'Error al generar contenido para "{item.idea.title}": {exc}'
            item.content = f"No se pudo generar el contenido. {exc}"
            item.failed = True
        finally:
            item.loading = False
    return run
