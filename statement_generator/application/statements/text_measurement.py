"""Text measurement used to size table rows before anything is drawn."""

from typing import List, Protocol

from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics

from statement_generator.core.exceptions import MeasurementFailureError
from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)


class TextMeasurer(Protocol):
    """Given text, font and a width, report how the text wraps and how tall it is."""

    def line_height(self, font: str, size: float) -> float:
        ...

    def wrap(self, text: str, font: str, size: float, width: float) -> List[str]:
        ...

    def measure(self, text: str, font: str, size: float, width: float) -> float:
        ...


class ReportLabTextMeasurer:
    """
    Measures with reportlab's font metrics, so layout decisions match what the
    PDF surface will actually draw.

    Empty text still occupies one line. Explicit newlines always break.
    """

    def __init__(self, line_spacing: float = 1.2):
        self.line_spacing = line_spacing

    def line_height(self, font: str, size: float) -> float:
        return size * self.line_spacing

    def wrap(self, text: str, font: str, size: float, width: float) -> List[str]:
        self._check(font, size, width)
        text = "" if text is None else str(text)
        try:
            lines = simpleSplit(text, font, size, width)
        except Exception as e:
            raise MeasurementFailureError(
                f"Could not wrap text in font {font!r} at {size}pt",
                details=str(e)
            ) from e
        return lines or [""]

    def measure(self, text: str, font: str, size: float, width: float) -> float:
        return len(self.wrap(text, font, size, width)) * self.line_height(font, size)

    @staticmethod
    def _check(font: str, size: float, width: float) -> None:
        if size <= 0 or width <= 0:
            raise MeasurementFailureError(
                f"Cannot measure text with size {size} in width {width}",
                details="Font size and column width must be positive"
            )
        try:
            pdfmetrics.getFont(font)
        except Exception as e:
            logger.error(f"Font {font!r} is not registered with reportlab")
            raise MeasurementFailureError(f"Unknown font: {font!r}", details=str(e)) from e
