from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class ColorInfo:
    hex: str
    name: str
    description: str


@dataclass(frozen=True)
class TypographyInfo:
    font_family: str
    description: str

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TypographyInfo:
        data = data or {}
        return cls(
            font_family=str(data.get("fontFamily", "")),
            description=str(data.get("description", "")),
        )

    def to_dict(self) -> dict[str, str]:
        return {"fontFamily": self.font_family, "description": self.description}


@dataclass(frozen=True)
class VisualIdentity:
    logo_concept: str
    color_palette: list[ColorInfo]
    primary_typography: TypographyInfo
    secondary_typography: TypographyInfo
    photography_style: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VisualIdentity:
        """Build from the provider's camelCase payload (as stored in brand data)."""
        palette = [
            ColorInfo(
                hex=str(c.get("hex", "")),
                name=str(c.get("name", "")),
                description=str(c.get("description", "")),
            )
            for c in data.get("colorPalette", []) or []
            if isinstance(c, dict)
        ]
        return cls(
            logo_concept=str(data.get("logoConcept", "")),
            color_palette=palette,
            primary_typography=TypographyInfo.from_dict(data.get("primaryTypography")),
            secondary_typography=TypographyInfo.from_dict(data.get("secondaryTypography")),
            photography_style=str(data.get("photographyStyle", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "logoConcept": self.logo_concept,
            "colorPalette": [asdict(c) for c in self.color_palette],
            "primaryTypography": self.primary_typography.to_dict(),
            "secondaryTypography": self.secondary_typography.to_dict(),
            "photographyStyle": self.photography_style,
        }


@dataclass
class BrandProject:
    id: str
    name: str
    created_at: str
    # Partial brand-data document keyed by field id; visualIdentity is kept in its dict form.
    data: dict[str, Any] = field(default_factory=dict)

    def visual_identity(self) -> VisualIdentity | None:
        raw = self.data.get("visualIdentity")
        if not isinstance(raw, dict):
            return None
        return VisualIdentity.from_dict(raw)


@dataclass
class ContentIdea:
    id: str
    day: int
    content_type: str  # Blog|Social Media|Video|Email|Podcast|...
    title: str
    description: str
    generated_content: str | None = None


@dataclass(frozen=True)
class CopywriterHistoryItem:
    id: str
    timestamp: str
    original_text: str
    tone: str
    context: str | None
    variations: list[str]
