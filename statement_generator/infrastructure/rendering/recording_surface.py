"""In-memory surface that records instructions instead of drawing them."""

from typing import Dict, List

from statement_generator.application.statements.page_instructions import (
    Instruction,
    PlaceText,
    describe,
)

from .base_surface import RenderingSurface


class RecordingSurface(RenderingSurface):
    """Keeps every executed instruction; used for layout previews and tests."""

    def __init__(self):
        super().__init__()
        self.recorded: List[Instruction] = []
        self.pages = 0
        self.finished = False
        self.discarded = False

    def open(self) -> None:
        self.recorded = []
        self.pages = 1

    def finish(self) -> None:
        self.finished = True

    def discard(self) -> None:
        self.recorded = []
        self.pages = 0
        self.discarded = True

    def _record(self, instruction: Instruction) -> None:
        self.recorded.append(instruction)

    draw_text = _record
    stroke_rect = _record
    fill_rect = _record
    stroke_line = _record
    draw_image = _record

    def advance_page(self) -> None:
        self.pages += 1

    def texts(self) -> List[str]:
        return [item.text for item in self.recorded if isinstance(item, PlaceText)]

    def as_dicts(self) -> List[Dict]:
        return [describe(item) for item in self.recorded]
