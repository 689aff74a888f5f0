"""Per-template cover page strategies.

The template catalog is fixed reference data, so dispatch is a closed mapping
from template name to strategy. Every strategy shares the text block (title,
subtitle, presenter, date) and differs only in the background treatment and
text colors. Unknown names render with the default header-bar strategy.
"""

import logging

from reportlab.lib.pagesizes import LETTER

from src.core.defaults import DEFAULT_COLOR_SCHEME, DEFAULT_SUBTITLE_TEXT, DEFAULT_TITLE_TEXT
from src.domain.customization import Customization
from src.services.cover.layout import CoverLayout, paint_layout
from src.services.cover.style import (
    BLACK,
    RGB,
    WHITE,
    ResolvedStyle,
    blend,
    lighten,
    resolve_color,
    resolve_style,
)

logger = logging.getLogger(__name__)

PageSize = tuple[float, float]

HEADER_HEIGHT = 100
TITLE_OFFSET = 200  # from the top edge
SUBTITLE_OFFSET = 230
SUBTITLE_SIZE = 18
FOOTER_X = 50
PRESENTER_Y = 100
DATE_Y = 70
FOOTER_SIZE = 14

MUTED_GRAY: RGB = (0.3, 0.3, 0.3)
LIGHT_GRAY: RGB = (0.8, 0.8, 0.8)


class CoverTemplate:
    """Default strategy: white page, solid header bar in the accent color."""

    name = "Default"
    title_color: RGB = BLACK
    subtitle_color: RGB = MUTED_GRAY
    footer_color: RGB = MUTED_GRAY

    def build(self, customization: Customization, page_size: PageSize) -> CoverLayout:
        width, height = page_size
        style = resolve_style(customization, width)
        layout = CoverLayout(width=width, height=height, template_name=self.name)

        layout.fill_rect(0, 0, width, height, WHITE)
        self.draw_background(layout, style, customization)
        self.draw_text(layout, style, customization)
        return layout

    def draw_background(self, layout: CoverLayout, style: ResolvedStyle,
                        customization: Customization) -> None:
        layout.fill_rect(0, layout.height - HEADER_HEIGHT, layout.width, HEADER_HEIGHT, style.accent)

    def title_fill(self, style: ResolvedStyle) -> RGB:
        return self.title_color

    def draw_text(self, layout: CoverLayout, style: ResolvedStyle,
                  customization: Customization) -> None:
        layout.text(
            style.title_x,
            layout.height - TITLE_OFFSET,
            customization.title or DEFAULT_TITLE_TEXT,
            style.font_name,
            style.title_size,
            self.title_fill(style),
        )
        layout.text(
            style.title_x,
            layout.height - SUBTITLE_OFFSET,
            customization.subtitle or DEFAULT_SUBTITLE_TEXT,
            style.font_name,
            SUBTITLE_SIZE,
            self.subtitle_color,
        )
        if customization.presenter:
            layout.text(
                FOOTER_X,
                PRESENTER_Y,
                f"Presented by: {customization.presenter}",
                style.font_name,
                FOOTER_SIZE,
                self.footer_color,
            )
        if customization.date:
            layout.text(FOOTER_X, DATE_Y, customization.date, style.font_name,
                        FOOTER_SIZE, self.footer_color)


class CorporateBlueTemplate(CoverTemplate):
    """Header bar with a lighter accent rule under it and a footer band."""

    name = "Corporate Blue"

    def draw_background(self, layout, style, customization):
        super().draw_background(layout, style, customization)
        rule_y = layout.height - HEADER_HEIGHT - 6
        layout.line(0, rule_y, layout.width, rule_y, lighten(style.accent, 0.5), width=4)
        layout.fill_rect(0, 0, layout.width, 30, style.accent)


class ModernGradientTemplate(CoverTemplate):
    """Top band simulating a vertical gradient with stacked shaded strips."""

    name = "Modern Gradient"
    title_color = WHITE
    subtitle_color = (0.95, 0.95, 0.95)

    GRADIENT_HEIGHT = 300
    BANDS = 12
    # backgroundStyle -> gradient end color
    GRADIENT_ENDS: dict[str, RGB] = {
        "gradient1": resolve_color("#A855F7"),  # blue to purple
        "gradient2": resolve_color("#3B82F6"),  # green to blue
        "gradient3": resolve_color("#F97316"),  # yellow to orange
    }

    def draw_background(self, layout, style, customization):
        end = self.GRADIENT_ENDS.get(style.background_style, self.GRADIENT_ENDS["gradient1"])
        band_height = self.GRADIENT_HEIGHT / self.BANDS
        for index in range(self.BANDS):
            y = layout.height - (index + 1) * band_height
            color = blend(style.accent, end, index / (self.BANDS - 1))
            layout.fill_rect(0, y, layout.width, band_height, color, alpha=style.background_alpha)


class MinimalWhiteTemplate(CoverTemplate):
    """No bar; the accent color goes to the title and a thin rule below it."""

    name = "Minimal White"

    def draw_background(self, layout, style, customization):
        rule_y = layout.height - SUBTITLE_OFFSET - 15
        layout.line(FOOTER_X, rule_y, layout.width - FOOTER_X, rule_y, style.accent, width=2)

    def title_fill(self, style):
        return style.accent


class BoldRedTemplate(CoverTemplate):
    """Full-height side bar and a heavy bottom rule, red unless recolored.

    The default accent #0077B5 is drawn as signature red even when it was
    picked explicitly, since a stored customization does not record whether
    the color was chosen or defaulted.
    """

    name = "Bold Red"
    SIGNATURE_RED: RGB = resolve_color("#C62828")
    SIDE_BAR_WIDTH = 40

    def draw_background(self, layout, style, customization):
        chosen = customization.color_scheme.strip().lstrip("#").upper()
        color = self.SIGNATURE_RED if chosen == DEFAULT_COLOR_SCHEME.lstrip("#") else style.accent
        layout.fill_rect(0, 0, self.SIDE_BAR_WIDTH, layout.height, color)
        layout.fill_rect(self.SIDE_BAR_WIDTH, 40, layout.width - self.SIDE_BAR_WIDTH, 6, color)


class ElegantBlackTemplate(CoverTemplate):
    """Near-black page with thin accent rules near the top and bottom edges."""

    name = "Elegant Black"
    title_color = WHITE
    subtitle_color = LIGHT_GRAY
    footer_color = LIGHT_GRAY
    BACKGROUND: RGB = (0.08, 0.08, 0.08)

    def draw_background(self, layout, style, customization):
        layout.fill_rect(0, 0, layout.width, layout.height, self.BACKGROUND)
        for y in (layout.height - 60, 60):
            layout.line(FOOTER_X, y, layout.width - FOOTER_X, y, style.accent, width=1.5)


class TechBlueTemplate(CoverTemplate):
    """Header bar overlaid with a vertical grid and a small corner accent."""

    name = "Tech Blue"
    GRID_STEP = 36

    def draw_background(self, layout, style, customization):
        super().draw_background(layout, style, customization)
        grid_color = lighten(style.accent, 0.25)
        top = layout.height
        bottom = layout.height - HEADER_HEIGHT
        x = self.GRID_STEP
        while x < layout.width:
            layout.line(x, bottom, x, top, grid_color, width=0.5)
            x += self.GRID_STEP
        layout.fill_rect(layout.width - 80, 40, 30, 30, style.accent)


DEFAULT_TEMPLATE = CoverTemplate()

TEMPLATES: dict[str, CoverTemplate] = {
    template.name: template
    for template in (
        CorporateBlueTemplate(),
        ModernGradientTemplate(),
        MinimalWhiteTemplate(),
        BoldRedTemplate(),
        ElegantBlackTemplate(),
        TechBlueTemplate(),
    )
}


def get_template_strategy(template_name: str) -> CoverTemplate:
    strategy = TEMPLATES.get(template_name)
    if strategy is None:
        logger.info(
            "No rendering strategy for template, using default",
            extra={"template_name": template_name},
        )
        return DEFAULT_TEMPLATE
    return strategy


def build_cover_layout(
    template_name: str,
    customization: Customization,
    page_size: PageSize = LETTER,
) -> CoverLayout:
    """Resolve styles and lay out the cover page for a template."""
    return get_template_strategy(template_name).build(customization, page_size)


def render_cover(
    template_name: str,
    customization: Customization,
    page_size: PageSize = LETTER,
) -> bytes:
    """Render the cover page as a standalone single-page PDF.

    Args:
        template_name: Template catalog name (dispatch key)
        customization: Text and style choices
        page_size: (width, height) in points, US Letter by default

    Returns:
        PDF bytes containing exactly one page
    """
    layout = build_cover_layout(template_name, customization, page_size)
    return paint_layout(layout, title=customization.title or None)
