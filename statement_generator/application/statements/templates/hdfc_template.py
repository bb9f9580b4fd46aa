"""HDFC Bank statement template."""

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

HDFC_BLUE = "#004C8F"
GRAY = "#808080"

SMALL = TextStyle("Helvetica", 8)

LEGAL_FOOTER = [
    ("HDFC BANK LIMITED", TextStyle("Helvetica", 7, HDFC_BLUE)),
    ("*Closing Balance does not include the balance of unclearlized amount for hold and uncleared funds.",
     TextStyle("Helvetica", 7, "#0000ff")),
    ("Contents of this statement will be automatically corrected if any error is expected within 30 days "
     "of receipt of statement.", TextStyle("Helvetica", 7, GRAY)),
    ("State account branch GSTIN: 3AAACH7023R1Z1", TextStyle("Helvetica", 6, GRAY)),
    ("HDFC Bank GSTIN number details are available at "
     "https://www.hdfcbank.com/personal/making-payments/online-tax-payment/goods-and-service-tax",
     TextStyle("Helvetica", 6, GRAY)),
    ("Registered Office Address: HDFC Bank House, Senapati Bapat Marg, Lower Parel, Mumbai 400013",
     TextStyle("Helvetica", 6, GRAY)),
]


class HDFCTemplate(TableTemplate):
    """Wide bottom margin keeps the legal footer on every page clear of the table."""

    accent_color = HDFC_BLUE
    display_name = "HDFC BANK"

    geometry = TableGeometry(left=20, columns=(
        ColumnSpec("date", "Date", 55),
        ColumnSpec("description", "Narration", 180),
        ColumnSpec("ref_no", "Chq / Ref No", 75),
        ColumnSpec("debit", "Withdrawal Amount", 85, "right"),
        ColumnSpec("credit", "Deposit Amount", 80, "right"),
        ColumnSpec("balance", "Closing Balance*", 80, "right"),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=250,
        continuation_offset=100,
        repeat_table_header=True,
        footer_bottom_margin=140,
        footer_continuation_offset=100,
    )
    min_row_height = 22
    row_padding = 8
    cell_padding = 3
    body_style = TextStyle("Helvetica", 7)
    heading_style = TextStyle("Helvetica-Bold", 8)
    header_row_height = 20
    zero_amount_text = "0.00"

    @property
    def bank_id(self) -> str:
        return "HDFC"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        self.draw_branding(canvas, ctx, 20, 20, 140, 40)

        box_y = 80
        canvas.text(25, box_y + 8, account.upper("name", ""), TextStyle("Helvetica-Bold", 9))
        address_lines = [
            account.text("address"),
            account.text("address2", ""),
            account.text("city", ""),
            account.text("state", ""),
            account.text("country", "INDIA"),
            account.text("pin", ""),
        ]
        for index, line in enumerate(address_lines):
            if line:
                canvas.text(25, box_y + 22 + index * 12, line, SMALL)
        canvas.text(25, box_y + 108, "JOINT HOLDERS:", SMALL)

        details = [
            ("Account Branch", account.text("branch_name", "")),
            ("Address", account.text("branch_address", "")),
            ("", account.text("branch_address2", "")),
            ("City", account.text("branch_city", "")),
            ("State", account.text("branch_state", "")),
            ("Phone No.", account.text("branch_phone", "")),
            ("RTGS/NEFT IFSC", f"{account.text('ifsc', '')} MICR :{account.text('micr', '')}"),
            ("OD Limit", account.text("od_limit", "")),
            ("Cust ID", f"{account.text('customer_id', '')} Pr.Code : {account.text('pr_code', '')} "
                        f"Br.Code :{account.text('branch_code', '')}"),
            ("Account number", account.text("account_no", "")),
            ("A/C Open Date", account.text("opening_date", "")),
            ("Account Status", account.text("status", "")),
        ]
        detail_y = box_y + 8
        for label, value in details:
            if label:
                canvas.text(300, detail_y, label, SMALL)
            detail_y += max(canvas.text_block(390, detail_y, 185, f": {value}", SMALL), 12)

        y = max(box_y + 165, detail_y + 10)
        canvas.text(20, y, f"Nomination       : {account.text('nomination', 'Not Registered')}", SMALL)
        y += 12
        canvas.text(20, y, f"Statement From: {account.text('statement_from')}", SMALL)
        canvas.text(130, y, f"To: {account.text('statement_to')}", SMALL)
        return y + 35

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.fill(x, y, width, height, HDFC_BLUE)
        canvas.text(x + 10, y + 11, self.display_name, TextStyle("Helvetica-Bold", 16, WHITE))

    def draw_continuation(self, canvas: LayoutCanvas, ctx: StatementContext) -> None:
        self.draw_branding(canvas, ctx, 20, 20, 140, 40)

    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        return {
            "date": entry.date or "-",
            "description": entry.description or "-",
            "ref_no": entry.extra("ref_no"),
            "debit": self.amount_text(entry.debit),
            "credit": self.amount_text(entry.credit),
            "balance": format_amount(entry.balance),
        }

    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        totals = ctx.totals
        columns = [
            (20, "Opening Balance", format_amount(totals.opening_balance)),
            (125, "Dr Count", str(totals.debit_count)),
            (215, "Cr Count", str(totals.credit_count)),
            (305, "Debits", format_amount(totals.total_debit)),
            (400, "Credits", format_amount(totals.total_credit)),
            (495, "Closing Bal", format_amount(totals.closing_balance)),
        ]

        def summary(target: LayoutCanvas, y: float) -> None:
            target.text(20, y, "STATEMENT SUMMARY :-", TextStyle("Helvetica-Bold", 9))
            for x, label, value in columns:
                target.text(x, y + 15, label, SMALL)
                target.text(x, y + 27, value, SMALL)

        return [
            FooterBlock(height=40, draw=summary, gap=25),
            self.text_lines(canvas, ["**END OF STATEMENT**"], TextStyle("Helvetica-Bold", 10),
                            canvas.page_width / 2, align="center"),
        ]

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        canvas.text(canvas.page_width - 80, 20, f"Page {page_number} of {page_count}", SMALL)

        footer_y = canvas.page_height - 130
        gray = TextStyle("Helvetica", 7, GRAY)
        canvas.text(20, footer_y, "Generated by: SYSTEM", gray)
        canvas.text(canvas.page_width - 20, footer_y, "Requesting Branch code: SYSTEM", gray, "right")
        y = footer_y + 20
        for text, style in LEGAL_FOOTER:
            y += canvas.text_block(20, y, canvas.page_width - 40, text, style, "center") + 2
