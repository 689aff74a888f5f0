"""Tests for per-template cover layouts and the reportlab painter."""

import io

import pytest
from pypdf import PdfReader

from src.core.defaults import DEFAULT_SUBTITLE_TEXT, DEFAULT_TEMPLATES, DEFAULT_TITLE_TEXT
from src.domain.customization import Customization
from src.services.cover.layout import FillRect, StrokeLine, paint_layout
from src.services.cover.style import WHITE, resolve_color
from src.services.cover.templates import (
    DEFAULT_TEMPLATE,
    TEMPLATES,
    BoldRedTemplate,
    build_cover_layout,
    get_template_strategy,
    render_cover,
)

LETTER = (612, 792)


@pytest.fixture
def customization() -> Customization:
    return Customization(
        title="Q3 Results",
        subtitle="Finance Team",
        presenter="Jane Doe",
        date="2024-01-01",
        color_scheme="#0077B5",
        title_size="Large",
        title_alignment="center",
    )


class TestTemplateDispatch:
    """Every seeded template has its own strategy; unknown names fall back."""

    def test_every_seeded_template_has_a_strategy(self):
        for template in DEFAULT_TEMPLATES:
            assert template["name"] in TEMPLATES

    def test_unknown_name_uses_default(self):
        assert get_template_strategy("Neon Pink") is DEFAULT_TEMPLATE

    def test_fallback_draws_header_bar(self, customization):
        layout = build_cover_layout("Neon Pink", customization, LETTER)
        header = [
            op for op in layout.shapes
            if isinstance(op, FillRect) and op.y == 692 and op.height == 100
        ]
        assert header
        assert header[0].color == resolve_color("#0077B5")
        assert layout.template_name == "Default"


class TestTextBlock:
    """Text placement shared by all templates."""

    @pytest.mark.parametrize("template_name", list(TEMPLATES) + ["Unknown"])
    def test_title_position_and_size(self, template_name, customization):
        layout = build_cover_layout(template_name, customization, LETTER)
        title = layout.find_text("Q3 Results")

        assert title is not None
        assert title.x == 306
        assert title.y == 792 - 200
        assert title.size == 40
        assert title.font_name == "Helvetica"

    def test_subtitle_below_title(self, customization):
        layout = build_cover_layout("Corporate Blue", customization, LETTER)
        subtitle = layout.find_text("Finance Team")
        assert subtitle.y == 792 - 230
        assert subtitle.size == 18

    def test_presenter_and_date_in_footer(self, customization):
        layout = build_cover_layout("Corporate Blue", customization, LETTER)
        presenter = layout.find_text("Presented by:")
        date = layout.find_text("2024-01-01")

        assert presenter.text == "Presented by: Jane Doe"
        assert (presenter.x, presenter.y) == (50, 100)
        assert (date.x, date.y) == (50, 70)

    def test_empty_presenter_is_omitted(self, customization):
        layout = build_cover_layout(
            "Minimal White", customization.merge_text(presenter=""), LETTER
        )
        assert layout.find_text("Presented by:") is None

    def test_empty_date_is_omitted(self):
        layout = build_cover_layout("Minimal White", Customization(title="T"), LETTER)
        assert [run.text for run in layout.texts] == ["T", DEFAULT_SUBTITLE_TEXT]

    def test_empty_title_uses_placeholder(self):
        layout = build_cover_layout("Tech Blue", Customization(), LETTER)
        assert layout.find_text(DEFAULT_TITLE_TEXT) is not None

    def test_serif_font(self, customization):
        serif = Customization.from_dict({**customization.to_dict(), "fontFamily": "Playfair Display"})
        layout = build_cover_layout("Corporate Blue", serif, LETTER)
        assert {run.font_name for run in layout.texts} == {"Times-Roman"}


class TestTemplateLooks:
    def test_modern_gradient_bands(self, customization):
        translucent = Customization.from_dict({**customization.to_dict(), "backgroundOpacity": 40})
        layout = build_cover_layout("Modern Gradient", translucent, LETTER)
        bands = [op for op in layout.shapes if isinstance(op, FillRect) and op.alpha < 1.0]

        assert len(bands) == 12
        assert all(band.alpha == pytest.approx(0.4) for band in bands)
        assert layout.find_text("Q3 Results").color == WHITE

    def test_minimal_white_title_uses_accent(self):
        layout = build_cover_layout(
            "Minimal White", Customization(title="T", color_scheme="#FF0000"), LETTER
        )
        assert layout.find_text("T").color == (1.0, 0.0, 0.0)
        assert any(isinstance(op, StrokeLine) for op in layout.shapes)

    def test_bold_red_uses_signature_red_for_default_color(self):
        layout = build_cover_layout("Bold Red", Customization(title="T"), LETTER)
        colors = {op.color for op in layout.shapes if isinstance(op, FillRect)}
        assert BoldRedTemplate.SIGNATURE_RED in colors

    def test_bold_red_honors_custom_color(self):
        layout = build_cover_layout(
            "Bold Red", Customization(title="T", color_scheme="#00FF00"), LETTER
        )
        colors = {op.color for op in layout.shapes if isinstance(op, FillRect)}
        assert (0.0, 1.0, 0.0) in colors
        assert BoldRedTemplate.SIGNATURE_RED not in colors

    def test_bold_red_treats_explicit_default_accent_as_red(self):
        layout = build_cover_layout(
            "Bold Red", Customization(title="T", color_scheme=" #0077b5"), LETTER
        )
        colors = {op.color for op in layout.shapes if isinstance(op, FillRect)}
        assert BoldRedTemplate.SIGNATURE_RED in colors

    def test_elegant_black_background(self, customization):
        layout = build_cover_layout("Elegant Black", customization, LETTER)
        full_page = [
            op for op in layout.shapes
            if isinstance(op, FillRect) and (op.width, op.height) == LETTER
        ]
        assert full_page[-1].color == (0.08, 0.08, 0.08)
        assert layout.find_text("Q3 Results").color == WHITE


class TestRenderCover:
    def test_single_page_with_requested_size(self, customization):
        pdf = PdfReader(io.BytesIO(render_cover("Corporate Blue", customization, LETTER)))

        assert len(pdf.pages) == 1
        assert float(pdf.pages[0].mediabox.width) == 612
        assert float(pdf.pages[0].mediabox.height) == 792

    def test_content_stream_has_title_run(self, customization):
        pdf = PdfReader(io.BytesIO(render_cover("Corporate Blue", customization, LETTER)))
        content = pdf.pages[0].get_contents().get_data().decode("latin-1")

        assert "(Q3 Results) Tj" in content
        assert "1 0 0 1 306 592 Tm" in content

    def test_deterministic(self, customization):
        assert render_cover("Tech Blue", customization) == render_cover("Tech Blue", customization)

    def test_paint_layout_sets_title_metadata(self, customization):
        layout = build_cover_layout("Corporate Blue", customization, LETTER)
        pdf = PdfReader(io.BytesIO(paint_layout(layout, title="Q3 Results")))
        assert pdf.metadata.title == "Q3 Results"
