"""Base class for all institution statement templates."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from statement_generator.domain.statements.models import (
    AccountProfile,
    BankSchema,
    LedgerEntry,
    LedgerTotals,
)
from statement_generator.domain.statements.services.amount_parser import format_amount
from statement_generator.shared.utils.logging_config import get_logger

from ..page_instructions import BLACK, WHITE, LayoutCanvas, TextStyle

logger = get_logger(__name__)

# institution asset name -> image path, or None when the asset is unavailable
AssetLocator = Callable[[str], Optional[str]]


def no_assets(name: str) -> Optional[str]:
    return None


@dataclass(frozen=True)
class ColumnSpec:
    """One table column: the cell key it shows, its heading, fixed width and alignment."""

    key: str
    heading: str
    width: float
    align: str = "left"


@dataclass(frozen=True)
class TableGeometry:
    left: float
    columns: Tuple[ColumnSpec, ...]

    @property
    def width(self) -> float:
        return sum(column.width for column in self.columns)

    @property
    def right(self) -> float:
        return self.left + self.width

    def edges(self) -> List[float]:
        """x of every column boundary, outer borders included."""
        edges = [self.left]
        for column in self.columns:
            edges.append(edges[-1] + column.width)
        return edges


@dataclass(frozen=True)
class PageBreakPolicy:
    """
    When a row no longer fits above ``page_height - bottom_margin`` a new page is
    started and the row is placed at ``continuation_offset``. With
    ``repeat_table_header`` the column headings sit directly above that offset.
    """

    bottom_margin: float
    continuation_offset: float
    repeat_table_header: bool = True
    footer_bottom_margin: float = 40.0
    footer_continuation_offset: float = 60.0


@dataclass(frozen=True)
class TableRow:
    """A row of the transaction table; ``position`` is None for summary rows."""

    cells: Mapping[str, str]
    position: Optional[int] = None
    bold: bool = False


@dataclass
class FooterBlock:
    """A footer piece of known height; drawn with its top at the given y."""

    height: float
    draw: Callable[[LayoutCanvas, float], None]
    gap: float = 0.0


@dataclass(frozen=True)
class StatementContext:
    """Everything a template may read while laying out one statement."""

    schema: BankSchema
    account: AccountProfile
    totals: LedgerTotals
    assets: AssetLocator = no_assets
    generated_at: datetime = field(default_factory=datetime.now)


class TableTemplate(ABC):
    """
    Abstract base class for institution templates.

    A template owns what is drawn (header region, headings, cells, footer,
    page furniture); the layout engine owns where rows land and when pages break.
    """

    accent_color: str = BLACK
    asset_name: Optional[str] = None

    geometry: TableGeometry
    page_policy: PageBreakPolicy

    min_row_height: float = 22.0
    row_padding: float = 8.0
    cell_padding: float = 3.0

    body_style: TextStyle = TextStyle("Helvetica", 8)
    heading_style: TextStyle = TextStyle("Helvetica-Bold", 8)
    heading_align: str = "left"
    header_row_height: float = 24.0
    header_fill: Optional[str] = "#f5f5f5"
    header_rule_color: str = BLACK
    rule_color: str = BLACK

    zero_amount_text: str = ""

    @property
    @abstractmethod
    def bank_id(self) -> str:
        """Return the institution code (e.g., 'PNB', 'HDFC')."""
        pass

    @abstractmethod
    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        """
        Draw the first-page header region.

        Args:
            canvas: Canvas positioned on page 1
            ctx: Statement context

        Returns:
            y at which the table headings start
        """
        pass

    @abstractmethod
    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        """Cell text per column key for one ledger entry."""
        pass

    @abstractmethod
    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        """Footer pieces placed after the last table row, in order."""
        pass

    # ========== Optional hooks (override in subclass) ==========

    def draw_continuation(self, canvas: LayoutCanvas, ctx: StatementContext) -> None:
        """Branding redrawn at the top of every continuation page. Default: nothing."""
        return None

    def leading_rows(self, ctx: StatementContext) -> List[TableRow]:
        """Rows placed before the first ledger entry."""
        return []

    def trailing_rows(self, ctx: StatementContext) -> List[TableRow]:
        """Rows placed after the last ledger entry."""
        return []

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        """Page furniture, applied once the page count is known. Default: nothing."""
        return None

    # ========== Table drawing ==========

    def style_for(self, row: TableRow) -> TextStyle:
        return self.body_style.bold() if row.bold else self.body_style

    def inner_width(self, column: ColumnSpec) -> float:
        return column.width - 2 * self.cell_padding

    def draw_table_header(self, canvas: LayoutCanvas, y: float) -> None:
        geometry = self.geometry
        height = self.header_row_height
        if self.header_fill:
            canvas.fill(geometry.left, y, geometry.width, height, self.header_fill)
        canvas.rect(geometry.left, y, geometry.width, height, self.header_rule_color)
        for x in geometry.edges()[1:-1]:
            canvas.line(x, y, x, y + height, self.header_rule_color)

        text_top = y + max((height - self._heading_block_height(canvas)) / 2, 2)
        for x, column in zip(geometry.edges(), geometry.columns):
            canvas.text_block(x + self.cell_padding, text_top, self.inner_width(column),
                              column.heading, self.heading_style, self.heading_align)

    def _heading_block_height(self, canvas: LayoutCanvas) -> float:
        return max(
            canvas.measure(column.heading, self.heading_style, self.inner_width(column))
            for column in self.geometry.columns
        )

    def draw_row(self, canvas: LayoutCanvas, row: TableRow, y: float, height: float) -> None:
        geometry = self.geometry
        canvas.rect(geometry.left, y, geometry.width, height, self.rule_color)
        for x in geometry.edges()[1:-1]:
            canvas.line(x, y, x, y + height, self.rule_color)

        style = self.style_for(row)
        text_top = y + self.row_padding / 2
        for x, column in zip(geometry.edges(), geometry.columns):
            value = row.cells.get(column.key, "")
            if value:
                canvas.text_block(x + self.cell_padding, text_top, self.inner_width(column),
                                  value, style, column.align)

    # ========== Shared helpers ==========

    def amount_text(self, value: Decimal) -> str:
        """Two-decimal amount; zero shows as ``zero_amount_text``."""
        if value == 0:
            return self.zero_amount_text
        return format_amount(value)

    def row_for(self, entry: LedgerEntry, ctx: StatementContext) -> TableRow:
        return TableRow(cells=self.cell_values(entry, ctx), position=entry.position)

    def draw_branding(self, canvas: LayoutCanvas, ctx: StatementContext,
                      x: float, y: float, width: float, height: float) -> None:
        """
        Draw the institution's logo, or its text fallback when the asset is missing.

        The fallback is attached to the image instruction as well, so a surface can
        still draw it when the file exists but cannot be decoded.
        """
        fallback = LayoutCanvas(canvas.measurer, canvas.page_width, canvas.page_height)
        self.draw_text_logo(fallback, x, y, width, height)
        fallback_instructions = fallback.stream()

        path = ctx.assets(self.asset_name or self.bank_id)
        if path:
            canvas.image(path, x, y, width, height, fallback=tuple(fallback_instructions))
            return

        logger.info(f"Branding asset for {self.bank_id} unavailable, using text header")
        for instruction in fallback_instructions:
            canvas.add(instruction)

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        """Deterministic text header: institution name in the accent color."""
        canvas.fill(x, y, width, height, self.accent_color)
        style = TextStyle("Helvetica-Bold", 16, WHITE)
        canvas.text(x + 10, y + (height - canvas.line_height(style)) / 2, self.display_name, style)

    @property
    def display_name(self) -> str:
        return self.bank_id

    def key_value_grid(self, canvas: LayoutCanvas, x: float, y: float, width: float,
                       label_width: float, rows: Sequence[Tuple[str, str]],
                       style: TextStyle, min_row_height: float = 26.0, padding: float = 5.0) -> float:
        """Bordered two-column attribute/value table; returns its height."""
        top = y
        for label, value in rows:
            label_h = canvas.measure(label, style.bold(), label_width - 2 * padding)
            value_h = canvas.measure(value, style, width - label_width - 2 * padding)
            row_h = max(label_h, value_h) + 2 * padding
            row_h = max(row_h, min_row_height)
            canvas.rect(x, y, width, row_h)
            canvas.line(x + label_width, y, x + label_width, y + row_h)
            text_y = y + (row_h - max(label_h, value_h)) / 2
            canvas.text_block(x + padding, text_y, label_width - 2 * padding, label, style.bold())
            canvas.text_block(x + label_width + padding, text_y, width - label_width - 2 * padding,
                              value, style)
            y += row_h
        return y - top

    def summary_grid(self, canvas: LayoutCanvas, x: float, y: float, width: float,
                     headings: Sequence[str], values: Sequence[str],
                     heading_style: TextStyle, value_style: TextStyle,
                     heading_fill: Optional[str] = None, row_height: float = 24.0) -> float:
        """Headings row over a values row, equal column widths; returns its height."""
        column_width = width / len(headings)
        for row_index, (cells, style) in enumerate(((headings, heading_style), (values, value_style))):
            row_y = y + row_index * row_height
            if row_index == 0 and heading_fill:
                canvas.fill(x, row_y, width, row_height, heading_fill)
            canvas.rect(x, row_y, width, row_height)
            for index, cell in enumerate(cells):
                cell_x = x + index * column_width
                if index:
                    canvas.line(cell_x, row_y, cell_x, row_y + row_height)
                canvas.text(cell_x + column_width / 2,
                            row_y + (row_height - canvas.line_height(style)) / 2,
                            cell, style, "center")
        return 2 * row_height

    def paragraph(self, canvas: LayoutCanvas, text: str, style: TextStyle,
                  x: float, width: float, gap: float = 6.0, align: str = "left") -> FooterBlock:
        """Footer block for one wrapped paragraph."""
        height = canvas.measure(text, style, width)

        def draw(target: LayoutCanvas, y: float) -> None:
            target.text_block(x, y, width, text, style, align)

        return FooterBlock(height=height, draw=draw, gap=gap)

    def text_lines(self, canvas: LayoutCanvas, lines: Sequence[str], style: TextStyle,
                   x: float, gap: float = 6.0, align: str = "left") -> FooterBlock:
        """Footer block of pre-broken lines, one per row."""
        leading = canvas.line_height(style)

        def draw(target: LayoutCanvas, y: float) -> None:
            for index, line in enumerate(lines):
                target.text(x, y + index * leading, line, style, align)

        return FooterBlock(height=leading * len(lines), draw=draw, gap=gap)
