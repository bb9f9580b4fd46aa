"""Rendering surface interface: executes a page instruction stream."""

from abc import ABC, abstractmethod
from typing import Iterable

from statement_generator.application.statements.page_instructions import (
    AdvancePage,
    FillRect,
    Instruction,
    PlaceImage,
    PlaceText,
    StrokeLine,
    StrokeRect,
)


class RenderingSurface(ABC):
    """
    Abstract drawing target for one document.

    Used as a context manager: acquired with ``with``, released on every exit
    path. A surface that exits with an error discards what it has drawn.
    """

    def __init__(self):
        self.is_open = False
        self.instructions_executed = 0

    def __enter__(self) -> "RenderingSurface":
        self.open()
        self.is_open = True
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            if exc_type is None:
                self.finish()
            else:
                self.discard()
        finally:
            self.is_open = False
        return False

    def render(self, instructions: Iterable[Instruction]) -> None:
        """Execute every instruction in order."""
        for instruction in instructions:
            self.execute(instruction)

    def execute(self, instruction: Instruction) -> None:
        if isinstance(instruction, PlaceText):
            self.draw_text(instruction)
        elif isinstance(instruction, StrokeRect):
            self.stroke_rect(instruction)
        elif isinstance(instruction, FillRect):
            self.fill_rect(instruction)
        elif isinstance(instruction, StrokeLine):
            self.stroke_line(instruction)
        elif isinstance(instruction, PlaceImage):
            self.draw_image(instruction)
        elif isinstance(instruction, AdvancePage):
            self.advance_page()
        else:
            raise TypeError(f"Unsupported drawing instruction: {instruction!r}")
        self.instructions_executed += 1

    # ========== Lifecycle ==========

    def open(self) -> None:
        """Acquire the underlying medium."""
        pass

    @abstractmethod
    def finish(self) -> None:
        """Flush and release after a successful render."""
        pass

    @abstractmethod
    def discard(self) -> None:
        """Release without producing output."""
        pass

    # ========== Primitives ==========

    @abstractmethod
    def draw_text(self, instruction: PlaceText) -> None:
        pass

    @abstractmethod
    def stroke_rect(self, instruction: StrokeRect) -> None:
        pass

    @abstractmethod
    def fill_rect(self, instruction: FillRect) -> None:
        pass

    @abstractmethod
    def stroke_line(self, instruction: StrokeLine) -> None:
        pass

    @abstractmethod
    def draw_image(self, instruction: PlaceImage) -> None:
        pass

    @abstractmethod
    def advance_page(self) -> None:
        pass
