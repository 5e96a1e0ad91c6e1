from __future__ import annotations

from io import BytesIO
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from brand_studio.models import ColorInfo, VisualIdentity

_FALLBACK_RGB = (148, 163, 184)  # slate


def render_palette(
    visual_identity: VisualIdentity,
    size: tuple[int, int] = (1000, 240),
) -> Image.Image:
    """
    Deterministic swatch strip: one equal-width column per palette colour, each
    labelled with its name and hex code in a contrasting ink.
    """
    w, h = size
    colors = visual_identity.color_palette or []
    canvas = Image.new("RGB", (w, h), (15, 23, 42))
    if not colors:
        return canvas

    draw = ImageDraw.Draw(canvas)
    col_w = w / len(colors)
    pad = max(6, int(h * 0.06))
    name_font = _load_font(max(12, int(h * 0.09)))
    hex_font = _load_font(max(10, int(h * 0.07)))

    for i, color in enumerate(colors):
        x0 = int(round(i * col_w))
        x1 = int(round((i + 1) * col_w))
        rgb = _hex_to_rgb(color.hex)
        draw.rectangle([x0, 0, x1, h], fill=rgb)

        ink = _ink_for(rgb)
        label = _truncate_to_width(draw, color.name or "", name_font, (x1 - x0) - 2 * pad)
        hex_y = h - pad - _text_height(draw, "#", hex_font)
        name_y = hex_y - pad // 2 - _text_height(draw, label or "A", name_font)
        draw.text((x0 + pad, name_y), label, font=name_font, fill=ink)
        draw.text((x0 + pad, hex_y), _normalize_hex(color), font=hex_font, fill=ink)

    return canvas


def palette_png_bytes(visual_identity: VisualIdentity, size: tuple[int, int] = (1000, 240)) -> bytes:
    buf = BytesIO()
    render_palette(visual_identity, size=size).save(buf, format="PNG")
    return buf.getvalue()


def _normalize_hex(color: ColorInfo) -> str:
    s = (color.hex or "").strip()
    if s and not s.startswith("#"):
        s = f"#{s}"
    return s.upper()


def _ink_for(rgb: tuple[int, int, int]) -> tuple[int, int, int]:
    # Relative luminance (sRGB weights, no gamma): light swatches get dark ink.
    r, g, b = rgb
    lum = 0.2126 * r + 0.7152 * g + 0.0722 * b
    return (15, 23, 42) if lum > 150 else (255, 255, 255)


def _text_height(draw: ImageDraw.ImageDraw, text: str, font) -> int:
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    return y1 - y0


def _truncate_to_width(draw: ImageDraw.ImageDraw, text: str, font, max_w: int) -> str:
    if max_w <= 0:
        return ""
    if draw.textlength(text, font=font) <= max_w:
        return text
    out = text
    while out and draw.textlength(out + "…", font=font) > max_w:
        out = out[:-1]
    return (out + "…") if out else ""


def _load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Prefer a TTF font from common system locations; fall back to Pillow's
    default font.
    """
    candidates: list[str] = [
        "assets/fonts/DejaVuSans.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
        "/Library/Fonts/Arial.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "C:\\Windows\\Fonts\\arial.ttf",
    ]
    for c in candidates:
        p = Path(c)
        if p.exists():
            try:
                return ImageFont.truetype(str(p), size=size)
            except OSError:
                continue
    return ImageFont.load_default()


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    s = (hex_color or "").strip().lstrip("#")
    if len(s) == 3:
        s = "".join([c * 2 for c in s])
    if len(s) != 6:
        return _FALLBACK_RGB
    try:
        return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))
    except ValueError:
        return _FALLBACK_RGB
