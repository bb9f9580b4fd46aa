"""Shared test helpers: a deterministic text measurer and row builders."""

import math
from typing import List

from statement_generator.application.statements.page_instructions import AdvancePage


class FixedWidthMeasurer:
    """
    Character-count wrapping: ``int(width / (size * 0.5))`` characters per line.

    Keeps row heights independent of font metrics.
    """

    def __init__(self, line_spacing: float = 1.2):
        self.line_spacing = line_spacing

    def line_height(self, font: str, size: float) -> float:
        return size * self.line_spacing

    def wrap(self, text: str, font: str, size: float, width: float) -> List[str]:
        per_line = max(1, int(width / (size * 0.5)))
        lines = []
        for paragraph in str(text or "").split("\n"):
            if not paragraph:
                lines.append("")
                continue
            count = math.ceil(len(paragraph) / per_line)
            lines.extend(paragraph[i * per_line:(i + 1) * per_line] for i in range(count))
        return lines or [""]

    def measure(self, text: str, font: str, size: float, width: float) -> float:
        return len(self.wrap(text, font, size, width)) * self.line_height(font, size)


def split_pages(stream) -> List[list]:
    """Instruction stream as one list per page."""
    pages = [[]]
    for instruction in stream:
        if isinstance(instruction, AdvancePage):
            pages.append([])
        else:
            pages[-1].append(instruction)
    return pages


def make_rows(count: int, description: str = "UPI/PAYMENT/GROCERY") -> List[dict]:
    """Alternating withdrawals and deposits in PNB column names."""
    rows = []
    for index in range(count):
        row = {"date": f"{(index % 28) + 1:02d}/04/2024", "narration": f"{description} {index + 1}"}
        if index % 2:
            row["deposit"] = "1,000.00"
        else:
            row["withdrawal"] = "250.50"
        rows.append(row)
    return rows
