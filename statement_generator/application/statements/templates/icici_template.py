"""ICICI Bank statement template."""

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

LABEL = TextStyle("Helvetica", 9)
VALUE = TextStyle("Helvetica-Bold", 9)
HEADING = TextStyle("Helvetica-Bold", 10)
LEGEND = TextStyle("Helvetica", 8)

LEGENDS = [
    "BBPS - Bharat Bill Payment Service",
    "BCTT - Banking Cash Transaction Tax",
    "BIL - Internet Bill payment or funds transfer to Third party",
    "BPAY - Bill payment",
    "CCWD - Cardless Cash Withdrawal",
    "DTAX - Direct Tax",
    "EBA - Transaction on ICICI Direct",
    "IDTX - Indirect Tax",
    "IMPS - Immediate Payment Service",
    "INF - Internet fund transfer in linked accounts",
    "INFT - Internal Fund Transfer (Within ICICI Bank)",
    "LCCBRN CMS - Local cheque collection",
    "LNPY - Linked loan payment",
    "MMT - Mobile Money Transfer (Insta FT - IMPS)",
    "N chg - NEFT Charges",
    "NEFT - National Electronics Funds Transfer System (Other Bank Fund transfer)",
    "ONL - Online Shopping transaction (Payment done on third party website)",
    "PAC - Personal Accident cover",
    "PAVC - Pay any Visa credit card",
    "PAYC - Pay to Contact",
    "RCHG - Recharge",
    "SMO - Smart Money order",
    "T Chg - Travel Charges",
    "TOP - Mobile recharge",
    "UCCBRN CMS - Upcountry cheque collection",
    "VAT / MAT / NFS - Cash withdrawal at other bank ATM",
    "VPS / IPS - Debit card transaction",
    "BIL - To third party is for RIB",
    "GIB - Tax & Statutory payment,EPFO, ESIC",
]


class ICICITemplate(TableTemplate):
    """Two-column detail block with an advanced-search section; zero amounts print as 0.00."""

    accent_color = "#ff6b35"
    display_name = "ICICI Bank"

    geometry = TableGeometry(left=40, columns=(
        ColumnSpec("date", "Txn Date", 65),
        ColumnSpec("value_date", "Value Date", 65),
        ColumnSpec("description", "Description", 120),
        ColumnSpec("ref_no", "Ref No./Cheque No.", 90),
        ColumnSpec("debit", "Debit", 60, "right"),
        ColumnSpec("credit", "Credit", 60, "right"),
        ColumnSpec("balance", "Balance", 60, "right"),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=100,
        continuation_offset=60,
        repeat_table_header=True,
        footer_continuation_offset=60,
    )
    min_row_height = 18
    row_padding = 6
    cell_padding = 3
    heading_align = "center"
    header_row_height = 20
    header_fill = "#f0f0f0"
    zero_amount_text = "0.00"

    @property
    def bank_id(self) -> str:
        return "ICICI"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        self.draw_branding(canvas, ctx, 38, 10, 120, 35)

        title = TextStyle("Helvetica-Bold", 12)
        canvas.text(40, 60, "Detailed", title)
        canvas.text(40, 75, "Statement", title)

        left_rows = [
            ("Name:", account.text("name")),
            ("Address:", account.text("address")),
            ("A/C No:", account.text("account_no")),
            ("Jt. Holder:", account.text("jt_holder", "")),
            ("Transaction Date from:", account.text("txn_date_from")),
            ("Transaction Period:",
             f"From {account.text('statement_from')} To {account.text('statement_to')}"),
            ("Statement Request/Download Date:", account.text("download_date")),
        ]
        right_rows = [
            ("A/C Branch:", account.text("branch_name")),
            ("Branch Address:", account.text("branch_address")),
            ("A/C Type:", account.text("account_type")),
            ("Cust ID:", account.text("cust_id")),
            ("Branch Code:", account.text("branch_code")),
            ("IFSC Code:", account.text("ifsc")),
            ("Account Currency:", account.text("currency", "INR")),
        ]
        top = 105
        left_y = self._detail_column(canvas, top, 40, 160, 150, left_rows)
        right_y = self._detail_column(canvas, top, 320, 420, 150, right_rows)

        y = max(left_y, right_y) + 20
        canvas.text(40, y, "Advanced Search", HEADING)
        y += 18
        search_rows = [
            ("Amount from:", f"{account.text('amount_from', 'NA')} To {account.text('amount_to', 'NA')}"),
            ("Cheque number from:", f"{account.text('cheque_from', 'NA')} To {account.text('cheque_to', 'NA')}"),
            ("Transaction remarks:", account.text("txn_remarks", "")),
            ("Transaction type:", account.text("txn_type", "DR")),
        ]
        for label, value in search_rows:
            y += canvas.label_value(40, y, label, value, LABEL, 180) + 3

        y += 14
        canvas.line(40, y, 40 + self.geometry.width, y)
        return y + 10

    @staticmethod
    def _detail_column(canvas: LayoutCanvas, y: float, label_x: float, value_x: float,
                       value_width: float, rows) -> float:
        for label, value in rows:
            used = canvas.label_value(label_x, y, label, value, LABEL, value_x,
                                      value_width=value_width, value_style=VALUE)
            y += max(used, 12) + 3
        return y

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.fill(x, y, width, height, self.accent_color)
        canvas.text(x + 10, y + 8, "ICICI Bank", TextStyle("Helvetica-Bold", 18, WHITE))

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
        totals = ctx.totals

        def page_total(target: LayoutCanvas, y: float) -> None:
            target.text(40, y, "Page Total", HEADING)
            rows = [
                ("Opening Bal:", format_amount(totals.opening_balance)),
                ("Withdrawls:", format_amount(totals.total_debit)),
                ("Deposits:", format_amount(totals.total_credit)),
                ("Closing Bal:", format_amount(totals.closing_balance)),
            ]
            for index, (label, value) in enumerate(rows):
                target.label_value(40, y + 18 + index * 14, label, value, LABEL, 150)

        blocks = [
            FooterBlock(height=18 + 4 * 14, draw=page_total, gap=11),
            self.text_lines(canvas, ["Legends Used in Account Statement"], HEADING, 40, gap=6),
        ]
        blocks.extend(
            self.text_lines(canvas, [f"{number}. {legend}"], LEGEND, 40, gap=2)
            for number, legend in enumerate(LEGENDS, start=1)
        )
        return blocks

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        canvas.text(canvas.page_width - 40, canvas.page_height - 30, f"Page {page_number} of {page_count}",
                    TextStyle("Helvetica", 9, "#808080"), "right")
