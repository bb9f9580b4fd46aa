"""IDFC FIRST Bank statement template."""

from typing import Dict, List

from statement_generator.domain.statements.models import LedgerEntry
from statement_generator.domain.statements.services.amount_parser import format_amount

from ..page_instructions import WHITE, LayoutCanvas, TextStyle
from .base_template import (
    ColumnSpec,
    FooterBlock,
    PageBreakPolicy,
    StatementContext,
    TableGeometry,
    TableTemplate,
)

BODY = TextStyle("Helvetica", 9)

REGISTERED_OFFICE = (
    "REGISTERED OFFICE: IDFC FIRST BANK LIMITED, KRM Tower, 7th Floor, No. 1, Harrington Road, "
    "Chetpet, Chennai-600031, Tamilnadu, INDIA."
)


class IDFCTemplate(TableTemplate):
    """Totals box above the table; continuation pages carry body rows only."""

    accent_color = "#8B0000"
    display_name = "IDFC FIRST Bank"

    geometry = TableGeometry(left=40, columns=(
        ColumnSpec("date", "Transaction Date", 57),
        ColumnSpec("value_date", "Value Date", 57),
        ColumnSpec("description", "Particulars", 175),
        ColumnSpec("cheque_no", "Cheque No.", 61),
        ColumnSpec("debit", "Debit", 55, "right"),
        ColumnSpec("credit", "Credit", 55, "right"),
        ColumnSpec("balance", "Balance", 55, "right"),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=80,
        continuation_offset=40,
        repeat_table_header=False,
        footer_bottom_margin=60,
    )
    min_row_height = 22
    row_padding = 8
    cell_padding = 3
    body_style = TextStyle("Helvetica", 7)
    heading_style = TextStyle("Helvetica-Bold", 8)
    heading_align = "center"
    header_row_height = 24

    @property
    def bank_id(self) -> str:
        return "IDFC"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        totals = ctx.totals
        canvas.text(40, 20, "STATEMENT OF ACCOUNT", TextStyle("Helvetica-Bold", 14))
        self.draw_branding(canvas, ctx, canvas.page_width - 180, 25, 140, 50)

        y = 50
        canvas.label_value(40, y, "CUSTOMER ID", f": {account.text('customer_id')}", BODY, 160)
        y += 12
        canvas.label_value(40, y, "ACCOUNT NO", f": {account.text('account_no')}", BODY, 160)
        y += 12
        canvas.text(40, y, f"STATEMENT PERIOD : {account.text('statement_from')} to {account.text('statement_to')}",
                    BODY)
        y += 30

        canvas.text(40, y, account.upper("name", ""), TextStyle("Helvetica-Bold", 11))
        y += 14
        lines = []
        if account.get("father_name"):
            lines.append(f"D/O {account['father_name']}")
        lines += [
            account.text("address"),
            f"{account.text('city')} - {account.text('pin')}",
            f"IFSC : {account.text('ifsc')}",
            f"MICR Code : {account.text('micr')}",
        ]
        for line in lines:
            canvas.text(40, y, line, BODY)
            y += 12

        right_y = 120
        for label, value in (
            ("DATE OF OPENING", account.text("opening_date")),
            ("ACCOUNT STATUS", account.text("status", "ACTIVE")),
            ("ACCOUNT TYPE", account.text("account_type", "Corporate Salary")),
            ("CURRENCY", "INR"),
        ):
            canvas.label_value(350, right_y, label, f": {value}", BODY, 470)
            right_y += 12

        y = max(y, right_y) + 30
        y += self.summary_grid(
            canvas, 40, y, canvas.page_width - 80,
            ["Opening Balance", "Total Debit", "Total Credit", "Closing Balance"],
            [format_amount(totals.opening_balance), format_amount(totals.total_debit),
             format_amount(totals.total_credit), format_amount(totals.closing_balance)],
            TextStyle("Helvetica-Bold", 10), BODY,
            row_height=22,
        )
        return y + 20

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.fill(x, y, width, height, self.accent_color)
        canvas.text(x + 10, y + 8, "IDFC FIRST", TextStyle("Helvetica-Bold", 16, WHITE))
        canvas.text(x + 10, y + 27, "Bank", TextStyle("Helvetica-Bold", 14, WHITE))

    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        return {
            "date": entry.date or "-",
            "value_date": entry.value_date or entry.date or "-",
            "description": entry.description or "-",
            "cheque_no": entry.extra("cheque_no"),
            "debit": self.amount_text(entry.debit),
            "credit": self.amount_text(entry.credit),
            "balance": format_amount(entry.balance),
        }

    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        return [self.paragraph(canvas, REGISTERED_OFFICE, TextStyle("Helvetica", 8), 40, canvas.page_width - 80)]

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        canvas.text(canvas.page_width - 40, canvas.page_height - 40, f"Page {page_number} of {page_count}",
                    TextStyle("Helvetica", 9, "#808080"), "right")
