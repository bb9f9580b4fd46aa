"""Drawing instructions produced by the layout engine.

All coordinates are absolute points with the origin at the top-left corner
of the page; ``y`` grows downwards. Surfaces convert to their own space.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .text_measurement import TextMeasurer

BLACK = "#000000"
WHITE = "#ffffff"


@dataclass(frozen=True)
class TextStyle:
    font: str = "Helvetica"
    size: float = 8.0
    color: str = BLACK

    def bold(self) -> "TextStyle":
        base = self.font.split("-")[0]
        return TextStyle(font=f"{base}-Bold", size=self.size, color=self.color)

    def colored(self, color: str) -> "TextStyle":
        return TextStyle(font=self.font, size=self.size, color=color)


@dataclass(frozen=True)
class PlaceText:
    """
    One line of text.

    ``y`` is the top of the line box. ``x`` is the left edge for ``left``,
    the right edge for ``right`` and the centre for ``center`` alignment.
    """

    x: float
    y: float
    text: str
    font: str = "Helvetica"
    size: float = 8.0
    color: str = BLACK
    align: str = "left"

    kind = "text"


@dataclass(frozen=True)
class StrokeRect:
    x: float
    y: float
    width: float
    height: float
    color: str = BLACK
    line_width: float = 0.5

    kind = "stroke_rect"


@dataclass(frozen=True)
class FillRect:
    x: float
    y: float
    width: float
    height: float
    color: str = BLACK

    kind = "fill_rect"


@dataclass(frozen=True)
class StrokeLine:
    x1: float
    y1: float
    x2: float
    y2: float
    color: str = BLACK
    line_width: float = 0.5

    kind = "line"


@dataclass(frozen=True)
class PlaceImage:
    """An image, plus the instructions to draw instead if it cannot be decoded."""

    path: str
    x: float
    y: float
    width: float
    height: float
    fallback: Tuple["Instruction", ...] = field(default_factory=tuple)

    kind = "image"


@dataclass(frozen=True)
class AdvancePage:
    kind = "advance_page"


Instruction = Union[PlaceText, StrokeRect, FillRect, StrokeLine, PlaceImage, AdvancePage]


def describe(instruction: Instruction) -> Dict:
    """Plain dict form of an instruction (used for previews and debugging)."""
    data = asdict(instruction)
    data.pop("fallback", None)
    data["kind"] = instruction.kind
    return data


class PageInstructionStream:
    """Ordered drawing instructions for one document, page breaks included."""

    def __init__(self, instructions: Sequence[Instruction] = ()):
        self._instructions: Tuple[Instruction, ...] = tuple(instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __len__(self) -> int:
        return len(self._instructions)

    def __bool__(self) -> bool:
        return bool(self._instructions)

    @property
    def page_count(self) -> int:
        if not self._instructions:
            return 0
        return 1 + sum(1 for item in self._instructions if isinstance(item, AdvancePage))

    def count_by_kind(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for item in self._instructions:
            counts[item.kind] = counts.get(item.kind, 0) + 1
        return counts

    def texts(self) -> List[str]:
        return [item.text for item in self._instructions if isinstance(item, PlaceText)]


class LayoutCanvas:
    """
    Collects instructions page by page.

    Instructions can be added to any already-open page, which lets page
    furniture (page numbers, colored bars) be applied once the final page
    count is known.
    """

    def __init__(self, measurer: TextMeasurer, page_width: float, page_height: float):
        self.measurer = measurer
        self.page_width = page_width
        self.page_height = page_height
        self._pages: List[List[Instruction]] = [[]]
        self._current = 0

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def page_number(self) -> int:
        """1-based number of the page instructions are currently added to."""
        return self._current + 1

    def new_page(self) -> None:
        self._pages.append([])
        self._current = len(self._pages) - 1

    def select_page(self, page_number: int) -> None:
        if not 1 <= page_number <= len(self._pages):
            raise IndexError(f"Page {page_number} does not exist")
        self._current = page_number - 1

    def add(self, instruction: Instruction) -> Instruction:
        self._pages[self._current].append(instruction)
        return instruction

    # --- primitives -------------------------------------------------------

    def text(self, x: float, y: float, text: str, style: TextStyle, align: str = "left") -> PlaceText:
        return self.add(PlaceText(x=x, y=y, text=text, font=style.font, size=style.size,
                                  color=style.color, align=align))

    def rect(self, x: float, y: float, width: float, height: float,
             color: str = BLACK, line_width: float = 0.5) -> StrokeRect:
        return self.add(StrokeRect(x, y, width, height, color, line_width))

    def fill(self, x: float, y: float, width: float, height: float, color: str) -> FillRect:
        return self.add(FillRect(x, y, width, height, color))

    def line(self, x1: float, y1: float, x2: float, y2: float,
             color: str = BLACK, line_width: float = 0.5) -> StrokeLine:
        return self.add(StrokeLine(x1, y1, x2, y2, color, line_width))

    def image(self, path: str, x: float, y: float, width: float, height: float,
              fallback: Sequence[Instruction] = ()) -> PlaceImage:
        return self.add(PlaceImage(path, x, y, width, height, tuple(fallback)))

    # --- text helpers -----------------------------------------------------

    def line_height(self, style: TextStyle) -> float:
        return self.measurer.line_height(style.font, style.size)

    def measure(self, text: str, style: TextStyle, width: float) -> float:
        return self.measurer.measure(text, style.font, style.size, width)

    def text_block(self, x: float, y: float, width: float, text: str,
                   style: TextStyle, align: str = "left") -> float:
        """Wrap ``text`` into ``width`` and place one line per row; returns the block height."""
        lines = self.measurer.wrap(text, style.font, style.size, width)
        leading = self.line_height(style)
        if align == "right":
            anchor = x + width
        elif align == "center":
            anchor = x + width / 2
        else:
            anchor = x
        for index, line in enumerate(lines):
            if line:
                self.text(anchor, y + index * leading, line, style, align)
        return len(lines) * leading

    def label_value(self, x: float, y: float, label: str, value: str, style: TextStyle,
                    value_x: float, value_width: Optional[float] = None,
                    value_style: Optional[TextStyle] = None) -> float:
        """A label with its value at ``value_x``; returns the height used."""
        self.text(x, y, label, style)
        value_style = value_style or style
        if value_width:
            return max(self.text_block(value_x, y, value_width, value, value_style), self.line_height(style))
        self.text(value_x, y, value, value_style)
        return self.line_height(style)

    def stream(self) -> PageInstructionStream:
        instructions: List[Instruction] = []
        for index, page in enumerate(self._pages):
            if index:
                instructions.append(AdvancePage())
            instructions.extend(page)
        return PageInstructionStream(instructions)
