"""State Bank of India statement template."""

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

SBI_BLUE = "#1a237e"
SBI_CYAN = "#0088cc"

FIELD = TextStyle("Helvetica", 10)
NOTE = TextStyle("Helvetica", 8)


class SBITemplate(TableTemplate):
    """Colon-aligned account fields, tall rows, headings repeated on every page."""

    accent_color = SBI_BLUE
    display_name = "SBI"

    geometry = TableGeometry(left=40, columns=(
        ColumnSpec("date", "Txn Date", 50),
        ColumnSpec("value_date", "Value\nDate", 50),
        ColumnSpec("description", "Description", 120),
        ColumnSpec("ref_no", "Ref No./Cheque\nNo.", 100),
        ColumnSpec("debit", "Debit", 70, "right"),
        ColumnSpec("credit", "Credit", 70, "right"),
        ColumnSpec("balance", "Balance", 70, "right"),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=80,
        continuation_offset=80,
        repeat_table_header=True,
        footer_bottom_margin=70,
    )
    min_row_height = 28
    row_padding = 10
    cell_padding = 4
    body_style = TextStyle("Helvetica", 9)
    heading_style = TextStyle("Helvetica-Bold", 9)
    header_row_height = 30
    header_fill = None

    @property
    def bank_id(self) -> str:
        return "SBI"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        self.draw_branding(canvas, ctx, 38, 15, 150, 45)

        y = 90
        address_extra = []
        if account.get("address2"):
            address_extra.append(account["address2"])
        address_extra.append(f"{account.text('city')}-{account.text('pin')}")
        if account.get("district"):
            address_extra.append(f"DIST-{account['district']}")

        y += self._field(canvas, y, "Account Name", account.text("name"))
        y += self._field(canvas, y, "Address", account.text("address"))
        for line in address_extra:
            canvas.text(180, y, f"  {line}", FIELD)
            y += 12
        y += 4

        fields = [
            ("Date", account.text("date")),
            ("Account Number", account.text("account_no")),
            ("Account Description", account.text("account_type")),
            ("Branch", account.text("branch_name")),
            ("Drawing Power", account.text("drawing_power", "0.00")),
            ("Interest Rate(% p.a.)", account.text("interest_rate", "0.00")),
            ("MOD Balance", account.text("mod_balance", "0.00")),
            ("CIF No.", account.text("cif")),
            ("IFS Code", account.text("ifsc")),
            ("MICR Code", account.text("micr")),
            ("Nomination Registered", account.text("nominee_registered", "Yes")),
            (f"Balance as on {account.text('statement_from')}", format_amount(ctx.totals.opening_balance)),
        ]
        for label, value in fields:
            y += self._field(canvas, y, label, value)

        y += 18
        canvas.text(
            40, y,
            f"Account Statement from {account.text('statement_from')} to {account.text('statement_to')}",
            TextStyle("Helvetica-Bold", 11),
        )
        return y + 26

    @staticmethod
    def _field(canvas: LayoutCanvas, y: float, label: str, value: str) -> float:
        canvas.text(40, y, label, FIELD)
        used = canvas.text_block(180, y, 350, f": {value}", FIELD)
        return max(used, 14)

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.fill(x, y + 5, 40, 40, SBI_CYAN)
        canvas.fill(x + 14, y + 18, 12, 14, WHITE)
        canvas.text(x + 50, y + 8, "SBI", TextStyle("Helvetica-Bold", 28, SBI_BLUE))

    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        return {
            "date": entry.date or "-",
            "value_date": entry.value_date or "-",
            "description": entry.description or "-",
            "ref_no": entry.extra("ref_no") or "-",
            "debit": self.amount_text(entry.debit),
            "credit": self.amount_text(entry.credit),
            "balance": format_amount(entry.balance),
        }

    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        return [
            self.text_lines(canvas, [
                "Please do not share your ATM, Debit/Credit card number, PIN and OTP with anyone over mail, "
                "SMS, phone call or any other",
                "media. Bank never asks for such information.",
            ], NOTE, 40, gap=15),
            self.text_lines(canvas, ["**This is a computer generated statement and does not require a signature."],
                            NOTE, 40),
        ]

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        style = TextStyle("Helvetica", 8, "#666666")
        if page_number == page_count:
            canvas.text(canvas.page_width / 2, canvas.page_height - 60, "*** End of Statement ***", style, "center")
        canvas.text(canvas.page_width - 40, canvas.page_height - 45, f"Page {page_number}", style, "right")
