"""
PDF Rendering Surface
Draws a page instruction stream onto a reportlab canvas.
"""
from io import BytesIO
from typing import Optional, Tuple

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as pdf_canvas

from statement_generator.application.statements.page_instructions import (
    FillRect,
    PlaceImage,
    PlaceText,
    StrokeLine,
    StrokeRect,
)
from statement_generator.core.unified_config import A4_HEIGHT, A4_WIDTH
from statement_generator.shared.utils.logging_config import get_logger

from .base_surface import RenderingSurface

logger = get_logger(__name__)


class ReportLabSurface(RenderingSurface):
    """
    Renders to an in-memory PDF.

    Instructions use a top-left origin; reportlab's origin is bottom-left,
    so every y coordinate is flipped against the page height.
    """

    def __init__(self, page_size: Tuple[float, float] = (A4_WIDTH, A4_HEIGHT), title: str = None):
        super().__init__()
        self.page_width, self.page_height = page_size
        self.title = title
        self._buffer: Optional[BytesIO] = None
        self._canvas: Optional[pdf_canvas.Canvas] = None
        self._pdf: Optional[bytes] = None

    def open(self) -> None:
        self._buffer = BytesIO()
        self._canvas = pdf_canvas.Canvas(self._buffer, pagesize=(self.page_width, self.page_height))
        if self.title:
            self._canvas.setTitle(self.title)
        self._pdf = None

    def finish(self) -> None:
        self._canvas.showPage()
        self._canvas.save()
        self._pdf = self._buffer.getvalue()
        logger.info(f"PDF rendered: {len(self._pdf)} bytes, {self.instructions_executed} instructions")
        self._release()

    def discard(self) -> None:
        logger.warning("PDF rendering aborted, discarding partial document")
        self._pdf = None
        self._release()

    def _release(self) -> None:
        if self._buffer is not None:
            self._buffer.close()
        self._buffer = None
        self._canvas = None

    def getvalue(self) -> bytes:
        """PDF bytes of a successfully finished document."""
        if self._pdf is None:
            raise RuntimeError("No PDF available: the surface was not finished successfully")
        return self._pdf

    # ========== Primitives ==========

    def _flip(self, y: float) -> float:
        return self.page_height - y

    def draw_text(self, instruction: PlaceText) -> None:
        c = self._canvas
        c.setFont(instruction.font, instruction.size)
        c.setFillColor(colors.HexColor(instruction.color))
        baseline = self._flip(instruction.y + pdfmetrics.getAscent(instruction.font, instruction.size))
        if instruction.align == "right":
            c.drawRightString(instruction.x, baseline, instruction.text)
        elif instruction.align == "center":
            c.drawCentredString(instruction.x, baseline, instruction.text)
        else:
            c.drawString(instruction.x, baseline, instruction.text)

    def stroke_rect(self, instruction: StrokeRect) -> None:
        c = self._canvas
        c.setStrokeColor(colors.HexColor(instruction.color))
        c.setLineWidth(instruction.line_width)
        c.rect(instruction.x, self._flip(instruction.y + instruction.height),
               instruction.width, instruction.height, stroke=1, fill=0)

    def fill_rect(self, instruction: FillRect) -> None:
        c = self._canvas
        c.setFillColor(colors.HexColor(instruction.color))
        c.rect(instruction.x, self._flip(instruction.y + instruction.height),
               instruction.width, instruction.height, stroke=0, fill=1)

    def stroke_line(self, instruction: StrokeLine) -> None:
        c = self._canvas
        c.setStrokeColor(colors.HexColor(instruction.color))
        c.setLineWidth(instruction.line_width)
        c.line(instruction.x1, self._flip(instruction.y1), instruction.x2, self._flip(instruction.y2))

    def draw_image(self, instruction: PlaceImage) -> None:
        try:
            self._canvas.drawImage(
                instruction.path,
                instruction.x,
                self._flip(instruction.y + instruction.height),
                width=instruction.width,
                height=instruction.height,
                preserveAspectRatio=True,
                mask="auto",
            )
        except Exception as e:
            logger.warning(f"Could not draw image {instruction.path}: {e}; using text branding")
            for fallback in instruction.fallback:
                self.execute(fallback)

    def advance_page(self) -> None:
        self._canvas.showPage()
