"""Paginated table layout for bank statements."""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from statement_generator.core.exceptions import RowOverflowError
from statement_generator.core.unified_config import A4_HEIGHT, A4_WIDTH
from statement_generator.domain.statements.models import AccountProfile, LedgerEntry, LedgerTotals
from statement_generator.domain.statements.services.schema_registry import SchemaRegistry
from statement_generator.shared.utils.logging_config import get_logger

from .page_instructions import LayoutCanvas, PageInstructionStream
from .templates.base_template import (
    AssetLocator,
    StatementContext,
    TableRow,
    TableTemplate,
    no_assets,
)
from .text_measurement import TextMeasurer

logger = get_logger(__name__)

# space between the last table row and the first footer block
FOOTER_GAP = 20.0


@dataclass(frozen=True)
class RowPlacement:
    """Where one table row landed."""

    page: int
    y: float
    height: float
    position: Optional[int] = None

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class StatementLayout:
    stream: PageInstructionStream
    rows: Tuple[RowPlacement, ...]
    page_count: int
    totals: LedgerTotals

    def entry_rows(self) -> List[RowPlacement]:
        """Placements of ledger entries only (summary rows excluded)."""
        return [row for row in self.rows if row.position is not None]


class TableLayoutEngine:
    """
    Turns an account profile and a ledger into page drawing instructions.

    Pages are filled top to bottom in a single pass: header region, column
    headings, one row per table row, then the footer blocks. Page furniture
    is applied last, when the page count is final.
    """

    def __init__(
        self,
        measurer: TextMeasurer,
        asset_locator: Optional[AssetLocator] = None,
        page_size: Tuple[float, float] = (A4_WIDTH, A4_HEIGHT),
    ):
        self.measurer = measurer
        self.asset_locator = asset_locator or no_assets
        self.page_width, self.page_height = page_size

    def layout(
        self,
        template: TableTemplate,
        account: AccountProfile,
        ledger: Sequence[LedgerEntry],
        totals: LedgerTotals,
        generated_at: Optional[datetime] = None,
    ) -> StatementLayout:
        """
        Lay out one statement.

        Args:
            template: Institution template
            account: Account attributes for the header region
            ledger: Ledger entries in statement order
            totals: Totals computed from the full ledger
            generated_at: Timestamp printed by templates that show one

        Returns:
            StatementLayout with the instruction stream and row placements

        Raises:
            RowOverflowError: A row is taller than a whole continuation page
            MeasurementFailureError: A cell could not be measured
        """
        ctx = StatementContext(
            schema=SchemaRegistry.schema_for(template.bank_id),
            account=account,
            totals=totals,
            assets=self.asset_locator,
            generated_at=generated_at or datetime.now(),
        )
        canvas = LayoutCanvas(self.measurer, self.page_width, self.page_height)
        policy = template.page_policy
        limit = self.page_height - policy.bottom_margin
        capacity = limit - policy.continuation_offset

        y = template.draw_header(canvas, ctx)
        if y + template.header_row_height + template.min_row_height > limit:
            # header region filled page 1; the headings open the next page instead
            logger.warning(f"{template.bank_id}: header region ends at {y:.1f}pt, table starts on page 2")
            y = self._continue_table(template, canvas, ctx, with_headings=True)
        else:
            template.draw_table_header(canvas, y)
            y += template.header_row_height

        rows: List[TableRow] = list(template.leading_rows(ctx))
        rows.extend(template.row_for(entry, ctx) for entry in ledger)
        rows.extend(template.trailing_rows(ctx))

        placements: List[RowPlacement] = []
        for index, row in enumerate(rows, start=1):
            height = self.row_height(template, canvas, row)
            if height > capacity:
                raise RowOverflowError(row.position or index, height, capacity)

            if y + height > limit:
                y = self._continue_table(template, canvas, ctx)

            template.draw_row(canvas, row, y, height)
            placements.append(RowPlacement(canvas.page_number, y, height, row.position))
            y += height

        self._place_footer(template, canvas, ctx, y + FOOTER_GAP)

        page_count = canvas.page_count
        for page_number in range(1, page_count + 1):
            canvas.select_page(page_number)
            template.decorate_page(canvas, page_number, page_count, ctx)

        stream = canvas.stream()
        logger.info(
            f"Laid out {template.bank_id} statement: {len(placements)} rows on {page_count} page(s), "
            f"{len(stream)} instructions"
        )
        return StatementLayout(stream=stream, rows=tuple(placements), page_count=page_count, totals=totals)

    def row_height(self, template: TableTemplate, canvas: LayoutCanvas, row: TableRow) -> float:
        """Tallest wrapped cell plus padding, never below the template minimum."""
        style = template.style_for(row)
        tallest = 0.0
        for column in template.geometry.columns:
            text = row.cells.get(column.key, "")
            tallest = max(tallest, canvas.measure(text, style, template.inner_width(column)))
        return max(tallest + template.row_padding, template.min_row_height)

    def _continue_table(self, template: TableTemplate, canvas: LayoutCanvas,
                        ctx: StatementContext, with_headings: bool = False) -> float:
        policy = template.page_policy
        canvas.new_page()
        template.draw_continuation(canvas, ctx)
        if policy.repeat_table_header or with_headings:
            template.draw_table_header(canvas, policy.continuation_offset - template.header_row_height)
        logger.debug(f"{template.bank_id}: table continues on page {canvas.page_number}")
        return policy.continuation_offset

    def _place_footer(self, template: TableTemplate, canvas: LayoutCanvas,
                      ctx: StatementContext, y: float) -> float:
        policy = template.page_policy
        limit = self.page_height - policy.footer_bottom_margin
        for block in template.footer_blocks(canvas, ctx):
            if y + block.height > limit and y > policy.footer_continuation_offset:
                canvas.new_page()
                y = policy.footer_continuation_offset
            block.draw(canvas, y)
            y += block.height + block.gap
        return y
