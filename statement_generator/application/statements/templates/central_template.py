"""Central Bank of India statement template."""

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

SMALL = TextStyle("Helvetica", 8)
BODY = TextStyle("Helvetica", 9)
GRAY = "#808080"

DISCLAIMER = (
    "Unless a constituent notifies the Bank immediately of any discrepancy found by him in this "
    "statement of a/c, it will be taken that he has found the a/c correct."
)


class CentralTemplate(TableTemplate):
    """Right-aligned branch block, left customer block, headings repeated under the logo."""

    accent_color = "#0066b3"
    asset_name = "CENTRAL"
    display_name = "Central Bank of India"

    geometry = TableGeometry(left=15, columns=(
        ColumnSpec("date", "Post Date", 60),
        ColumnSpec("value_date", "Value\nDate", 60),
        ColumnSpec("branch_code", "Branch\nCode", 60),
        ColumnSpec("cheque_no", "Cheque\nNumber", 60),
        ColumnSpec("description", "Account Description", 100),
        ColumnSpec("debit", "Debit", 65, "right"),
        ColumnSpec("credit", "Credit", 65, "right"),
        ColumnSpec("balance", "Balance", 85, "right"),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=80,
        continuation_offset=130,
        repeat_table_header=True,
        footer_bottom_margin=60,
    )
    min_row_height = 24
    row_padding = 10
    cell_padding = 3
    body_style = TextStyle("Helvetica", 7)
    heading_style = TextStyle("Helvetica-Bold", 8)
    heading_align = "center"
    header_row_height = 30

    @property
    def bank_id(self) -> str:
        return "CENTRAL"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        self.draw_branding(canvas, ctx, 38, 10, 280, 60)

        right = canvas.page_width - 10
        y = 75
        canvas.text(right, y, "Central Bank of India", BODY, "right")
        branch_lines = [
            account.upper("branch_name"),
            account.upper("branch_address"),
            f"Branch Code: {account.text('branch_code')}",
            f"IFSC Code: {account.text('ifsc')}",
            f"Account Number: {account.text('account_no')}",
            f"Product Type: {account.get('product_type') or account.text('account_type')}",
        ]
        for line in branch_lines:
            y += 12
            canvas.text(right, y, line, SMALL, "right")

        y = 200
        canvas.text(7, y, account.upper("name"), TextStyle("Helvetica-Bold", 10))
        y += 14
        for key in ("address", "address2", "city"):
            if account.get(key):
                canvas.text(7, y, account.upper(key), BODY)
                y += 12
        if account.get("pin"):
            canvas.text(7, y, account["pin"], BODY)
            y += 12

        y += 6
        lines = [f"Statement Date :{account.text('statement_date')}"]
        if account.get("email"):
            lines.append(f"Email: {account['email']}")
        lines.append(f"Cleared Balance: {account.text('cleared_balance', '0.00')}")
        lines.append(f"Uncleared Amount: {account.text('uncleared_amount', '0.00')}")
        if account.get("drawing_power"):
            lines.append(f"Drawing Power: {account['drawing_power']}")
        for line in lines:
            canvas.text(7, y, line, BODY)
            y += 12

        canvas.text(
            7, y,
            f"STATEMENT OF ACCOUNT from {account.text('statement_from')} to {account.text('statement_to')}",
            TextStyle("Helvetica-Bold", 9),
        )
        return y + 25

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.fill(x, y, width, height, self.accent_color)
        canvas.text(x + 12, y + 14, "Central Bank of India", TextStyle("Helvetica-Bold", 16, WHITE))
        canvas.text(x + 12, y + 40, "CENTRAL TO YOU SINCE 1911", TextStyle("Helvetica", 8, WHITE))

    def draw_continuation(self, canvas: LayoutCanvas, ctx: StatementContext) -> None:
        self.draw_branding(canvas, ctx, 38, 10, 280, 60)

    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        return {
            "date": entry.date or "-",
            "value_date": entry.value_date or entry.date or "-",
            "branch_code": entry.extra("branch_code") or ctx.account.text("branch_code"),
            "cheque_no": entry.extra("cheque_no"),
            "description": entry.description or "-",
            "debit": self.amount_text(entry.debit),
            "credit": self.amount_text(entry.credit),
            "balance": f"{format_amount(entry.balance)} CR",
        }

    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        downloaded_by = ctx.account.text("name", "USER")
        stamp = ctx.generated_at.strftime("%a, %b %d, %Y, %I:%M:%S %p IST")
        width = canvas.page_width - 50
        return [
            self.paragraph(canvas, f"* Statement Downloaded By {downloaded_by} on {stamp}", SMALL, 7, width, gap=20),
            self.paragraph(canvas, DISCLAIMER, SMALL, 7, width, gap=20),
            self.text_lines(canvas, ["END OF STATEMENT - from Internet Banking."],
                            TextStyle("Helvetica-Bold", 8), 7),
        ]

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        style = TextStyle("Helvetica", 7, GRAY)
        center = canvas.page_width / 2
        canvas.text(center, canvas.page_height - 50, "This is a computer generated statement", style, "center")
        canvas.text(center, canvas.page_height - 35, f"Page {page_number}", style, "center")
