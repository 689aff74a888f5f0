"""Map customization labels to concrete layout values.

Every resolver is total: unknown or malformed input resolves to a default
instead of raising, so user-entered style values are never rejected.
"""

import re
from dataclasses import dataclass
from typing import Optional

from src.domain.customization import Customization

RGB = tuple[float, float, float]

BLACK: RGB = (0.0, 0.0, 0.0)
WHITE: RGB = (1.0, 1.0, 1.0)

TITLE_SIZES = {
    "Small": 24,
    "Medium": 32,
    "Large": 40,
    "Extra Large": 48,
}
DEFAULT_TITLE_SIZE = 32

# Horizontal inset for left/right title anchors
TITLE_MARGIN = 50

SANS = "sans"
SERIF = "serif"
SERIF_LABELS = {"Playfair Display"}

# Built-in PDF base fonts; nothing is embedded
BASE_FONTS = {
    SANS: "Helvetica",
    SERIF: "Times-Roman",
}

_HEX_COLOR = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def resolve_title_size(size_label: Optional[str]) -> int:
    """Point size for a size label (Small, Medium, Large, Extra Large), 32 otherwise."""
    if not isinstance(size_label, str):
        return DEFAULT_TITLE_SIZE
    return TITLE_SIZES.get(size_label, DEFAULT_TITLE_SIZE)


def resolve_title_x(alignment: Optional[str], page_width: float) -> float:
    """Anchor x for the title and subtitle.

    Text is always drawn starting at this x, so "right" and "center" are
    approximate: the anchor moves, the text is not measured.
    """
    if alignment == "left":
        return TITLE_MARGIN
    if alignment == "right":
        return page_width - TITLE_MARGIN
    return page_width / 2


def resolve_color(hex_color: Optional[str]) -> RGB:
    """Parse #RRGGBB (leading # optional) into 0-1 floats, black on failure."""
    if not isinstance(hex_color, str):
        return BLACK
    match = _HEX_COLOR.match(hex_color.strip())
    if not match:
        return BLACK
    r, g, b = (int(group, 16) / 255 for group in match.groups())
    return (r, g, b)


def resolve_font(font_family_label: Optional[str]) -> str:
    """Font family key for a label: serif for Playfair Display, sans otherwise."""
    return SERIF if font_family_label in SERIF_LABELS else SANS


def lighten(color: RGB, amount: float) -> RGB:
    """Blend a color toward white; amount 0 keeps it, 1 gives white."""
    amount = max(0.0, min(1.0, amount))
    return tuple(c + (1.0 - c) * amount for c in color)  # type: ignore[return-value]


def blend(start: RGB, end: RGB, t: float) -> RGB:
    """Linear interpolation between two colors."""
    t = max(0.0, min(1.0, t))
    return tuple(s + (e - s) * t for s, e in zip(start, end))  # type: ignore[return-value]


@dataclass(frozen=True)
class ResolvedStyle:
    """Concrete values a template strategy draws with."""

    title_size: int
    title_x: float
    accent: RGB
    font_family: str
    font_name: str
    background_style: str
    background_alpha: float


def resolve_style(customization: Customization, page_width: float) -> ResolvedStyle:
    font_family = resolve_font(customization.font_family)
    return ResolvedStyle(
        title_size=resolve_title_size(customization.title_size),
        title_x=resolve_title_x(customization.title_alignment, page_width),
        accent=resolve_color(customization.color_scheme),
        font_family=font_family,
        font_name=BASE_FONTS[font_family],
        background_style=customization.background_style,
        background_alpha=max(0, min(100, customization.background_opacity)) / 100,
    )
