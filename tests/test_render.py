from __future__ import annotations

from io import BytesIO

from PIL import Image

from brand_studio.assembly.render import palette_png_bytes, render_palette
from brand_studio.models import ColorInfo, TypographyInfo, VisualIdentity


def _identity(colors: list[ColorInfo]) -> VisualIdentity:
    typo = TypographyInfo(font_family="Inter", description="")
    return VisualIdentity(
        logo_concept="",
        color_palette=colors,
        primary_typography=typo,
        secondary_typography=typo,
        photography_style="",
    )


def test_palette_columns_use_swatch_colours():
    colors = [
        ColorInfo(hex="#FF0000", name="Rojo", description=""),
        ColorInfo(hex="00FF00", name="Verde", description=""),
        ColorInfo(hex="#00f", name="Azul", description=""),
        ColorInfo(hex="#FFFFFF", name="Blanco", description=""),
        ColorInfo(hex="nope", name="Roto", description=""),
    ]
    img = render_palette(_identity(colors), size=(500, 100))
    assert img.size == (500, 100)
    # Sample near the top of each column, away from the labels.
    assert img.getpixel((50, 5)) == (255, 0, 0)
    assert img.getpixel((150, 5)) == (0, 255, 0)
    assert img.getpixel((250, 5)) == (0, 0, 255)
    assert img.getpixel((350, 5)) == (255, 255, 255)
    assert img.getpixel((450, 5)) == (148, 163, 184)


def test_palette_png_bytes_is_a_png():
    data = palette_png_bytes(_identity([ColorInfo(hex="#123456", name="X", description="")]))
    assert Image.open(BytesIO(data)).format == "PNG"


def test_empty_palette_renders_blank_canvas():
    img = render_palette(_identity([]), size=(20, 10))
    assert img.getpixel((0, 0)) == (15, 23, 42)
