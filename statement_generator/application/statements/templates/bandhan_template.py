"""Bandhan Bank statement template."""

from decimal import Decimal
from typing import Dict, List

from statement_generator.domain.statements.models import LedgerEntry
from statement_generator.domain.statements.services.amount_parser import format_amount

from ..page_instructions import BLACK, WHITE, LayoutCanvas, TextStyle
from .base_template import (
    ColumnSpec,
    FooterBlock,
    PageBreakPolicy,
    StatementContext,
    TableGeometry,
    TableTemplate,
)

NAVY = "#1e3a5f"
RED_BAR = "#D32F2F"

BODY = TextStyle("Helvetica", 10)
SECTION = TextStyle("Helvetica-Bold", 12, NAVY)


def inr(value: Decimal) -> str:
    return f"INR {format_amount(value)}"


class BandhanTemplate(TableTemplate):
    """Single amount column with a Dr/Cr indicator; red bar closes every page."""

    accent_color = NAVY
    display_name = "Bandhan Bank"

    geometry = TableGeometry(left=40, columns=(
        ColumnSpec("date", "Transaction Date", 90),
        ColumnSpec("value_date", "Value Date", 90),
        ColumnSpec("description", "Description", 130),
        ColumnSpec("amount", "Amount", 75),
        ColumnSpec("dr_cr", "Dr / Cr", 55),
        ColumnSpec("balance", "Balance", 75),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=120,
        continuation_offset=124,
        repeat_table_header=True,
        footer_bottom_margin=50,
    )
    min_row_height = 28
    row_padding = 10
    cell_padding = 5
    heading_style = TextStyle("Helvetica-Bold", 9, WHITE)
    header_row_height = 24
    header_fill = NAVY
    header_rule_color = NAVY

    @property
    def bank_id(self) -> str:
        return "BANDHAN"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        self._draw_logo(canvas, ctx)

        canvas.text(canvas.page_width / 2, 120, "Current and Savings Account Statement",
                    TextStyle("Helvetica-Bold", 16), "center")

        y = 180
        address_lines = [account.upper("name")]
        if account.get("father_name"):
            address_lines.append(f"S/O {account.upper('father_name')}")
        for key in ("address", "address2"):
            if account.get(key):
                address_lines.append(account.upper(key))
        if account.get("city"):
            address_lines.append(f"{account['city']}, {account.text('state', '')}")
        if account.get("pin"):
            address_lines.append(f"{account['pin']}, INDIA")
        for line in address_lines:
            canvas.text(40, y, line, BODY)
            y += 14

        as_on = account.get("statement_date") or account.text("statement_to")
        canvas.text(canvas.page_width - 40, 280, f"Account Statement as on {as_on}",
                    TextStyle("Helvetica", 9), "right")

        y = max(y, 300) + 20
        canvas.text(40, y, "Customer Account Details", SECTION)
        y += 25

        details = [
            ("Account No", account.text("account_no")),
            ("Account Type", account.text("account_type", "Savings account")),
            ("Branch Details", account.text("branch_address")),
            ("Customer ID / CIF", account.get("customer_id") or account.text("cif")),
            ("IFSC", account.text("ifsc")),
            ("MICR Code", account.text("micr")),
            ("Nomination Registered", account.text("nominee_registered", "YES")),
            ("Joint Holder Names", account.text("jt_holder", "")),
            ("Statement period",
             f"From {account.text('statement_from')} to {account.text('statement_to')}"),
        ]
        y += self.key_value_grid(canvas, 40, y, canvas.page_width - 80, 180, details,
                                 TextStyle("Helvetica", 9))
        y += 30

        canvas.text(300, y, "Statement Details", SECTION)
        return y + 25

    def _draw_logo(self, canvas: LayoutCanvas, ctx: StatementContext) -> None:
        self.draw_branding(canvas, ctx, canvas.page_width - 320, 15, 280, 50)

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.fill(x, y, width, height, NAVY)
        canvas.text(x + 50, y + 4, "Bandhan", TextStyle("Helvetica-Bold", 24, WHITE))
        canvas.text(x + 180, y + 12, "Bank", TextStyle("Helvetica", 20, WHITE))

    def draw_continuation(self, canvas: LayoutCanvas, ctx: StatementContext) -> None:
        self._draw_logo(canvas, ctx)

    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        if entry.debit > 0:
            amount, indicator = entry.debit, "Dr"
        elif entry.credit > 0:
            amount, indicator = entry.credit, "Cr"
        else:
            amount, indicator = None, "-"
        return {
            "date": entry.date or "-",
            "value_date": entry.value_date or entry.date or "-",
            "description": entry.description or "-",
            "amount": inr(amount) if amount is not None else "-",
            "dr_cr": indicator,
            "balance": inr(entry.balance),
        }

    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        totals = ctx.totals
        width = self.geometry.width
        heading = TextStyle("Helvetica-Bold", 10, NAVY)

        def summary(target: LayoutCanvas, y: float) -> None:
            target.text(40, y, "Statement Summary", SECTION)
            self.summary_grid(
                target, 40, y + 25, width,
                ["Opening Balance", "Total Credits", "Total Debits", "Closing Balance"],
                [inr(totals.opening_balance), inr(totals.total_credit),
                 inr(totals.total_debit), inr(totals.closing_balance)],
                TextStyle("Helvetica-Bold", 9, WHITE), TextStyle("Helvetica", 9),
                heading_fill=NAVY,
            )

        stamp = ctx.generated_at.strftime("%Y-%m-%d %H:%M:%S.%f")[:23] + "+0530"
        return [
            FooterBlock(height=25 + 48, draw=summary, gap=30),
            self.text_lines(canvas, ["Statement generated on"], heading, 40, gap=8),
            self.text_lines(canvas, [stamp], TextStyle("Helvetica", 10), 40, gap=20),
            self.text_lines(canvas, ["Thanking You"], heading, 40, gap=20),
            self.text_lines(canvas, ["Disclaimer"], heading, 40, gap=6),
            self.text_lines(canvas, ["This is a system generated statement"],
                            TextStyle("Helvetica-Bold", 10, BLACK), 40, gap=30),
            self.text_lines(canvas, ["*End of Statement*"], heading, 250),
        ]

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        canvas.fill(0, canvas.page_height - 30, canvas.page_width, 30, RED_BAR)
