"""Drawing primitives for a cover page and the reportlab painter for them.

Template strategies describe a page as an ordered list of operations; the
painter turns that list into a single-page PDF. Keeping the layout as plain
data makes the geometry inspectable without parsing PDF content streams.
"""

import io
from dataclasses import dataclass, field
from typing import Optional, Union

from reportlab.pdfgen import canvas

from src.services.cover.style import RGB

PDF_CREATOR = "PDF Cover Studio"


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: RGB
    alpha: float = 1.0


@dataclass(frozen=True)
class StrokeLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGB
    width: float = 1.0


@dataclass(frozen=True)
class TextRun:
    """Text drawn left-anchored at (x, y), baseline at y."""

    x: float
    y: float
    text: str
    font_name: str
    size: float
    color: RGB


Operation = Union[FillRect, StrokeLine, TextRun]


@dataclass
class CoverLayout:
    """Ordered drawing operations for one page (PDF points, origin bottom-left)."""

    width: float
    height: float
    template_name: str
    operations: list[Operation] = field(default_factory=list)

    def fill_rect(self, x: float, y: float, width: float, height: float,
                  color: RGB, alpha: float = 1.0) -> None:
        """Queue a filled rectangle with its lower-left corner at (x, y)."""
        self.operations.append(FillRect(x, y, width, height, color, alpha))

    def line(self, x1: float, y1: float, x2: float, y2: float,
             color: RGB, width: float = 1.0) -> None:
        """Queue a straight stroke from (x1, y1) to (x2, y2)."""
        self.operations.append(StrokeLine(x1, y1, x2, y2, color, width))

    def text(self, x: float, y: float, text: str, font_name: str,
             size: float, color: RGB) -> None:
        """Queue a text run with its baseline starting at (x, y)."""
        self.operations.append(TextRun(x, y, text, font_name, size, color))

    @property
    def texts(self) -> list[TextRun]:
        return [op for op in self.operations if isinstance(op, TextRun)]

    @property
    def shapes(self) -> list[Union[FillRect, StrokeLine]]:
        return [op for op in self.operations if not isinstance(op, TextRun)]

    def find_text(self, prefix: str) -> Optional[TextRun]:
        """First text run starting with prefix, or None."""
        return next((run for run in self.texts if run.text.startswith(prefix)), None)


def paint_layout(layout: CoverLayout, title: Optional[str] = None) -> bytes:
    """Render a layout to single-page PDF bytes.

    The canvas runs in invariant mode, so identical layouts produce identical
    bytes (no creation timestamps or random document ids).
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(
        buffer,
        pagesize=(layout.width, layout.height),
        invariant=1,
        pageCompression=0,
    )
    pdf.setCreator(PDF_CREATOR)
    if title:
        pdf.setTitle(title)

    for op in layout.operations:
        pdf.saveState()
        if isinstance(op, FillRect):
            pdf.setFillColorRGB(*op.color)
            if op.alpha < 1.0:
                pdf.setFillAlpha(op.alpha)
            pdf.rect(op.x, op.y, op.width, op.height, stroke=0, fill=1)
        elif isinstance(op, StrokeLine):
            pdf.setStrokeColorRGB(*op.color)
            pdf.setLineWidth(op.width)
            pdf.line(op.x1, op.y1, op.x2, op.y2)
        else:
            pdf.setFont(op.font_name, op.size)
            pdf.setFillColorRGB(*op.color)
            pdf.drawString(op.x, op.y, op.text)
        pdf.restoreState()

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
