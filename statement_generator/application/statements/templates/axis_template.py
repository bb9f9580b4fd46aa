"""Axis Bank statement template."""

from typing import Dict, List

from statement_generator.domain.statements.models import LedgerEntry
from statement_generator.domain.statements.services.amount_parser import format_amount

from ..page_instructions import LayoutCanvas, TextStyle
from .base_template import (
    ColumnSpec,
    FooterBlock,
    PageBreakPolicy,
    StatementContext,
    TableGeometry,
    TableRow,
    TableTemplate,
)

BODY = TextStyle("Helvetica", 9)
DISCLAIMER = TextStyle("Helvetica", 7)

DISCLAIMERS = [
    "Unless the constituent notifies the bank immediately of any discrepancy found by him/her in this "
    "statement of Account, it will be taken that he/she has found the account correct.",
    "The closing balance as shown/displayed includes not only the credit balance and / or overdraft limit, "
    "but also funds which are under clearing. It excludes the amount marked as lien, if any. Hence the "
    "closing balance displayed may not be the effective available balance. For any further clarifications, "
    "please contact the Branch.",
    "We would like to reiterate that, as a policy, Axis Bank does not ask you to part with/disclose/revalidate "
    "of your iConnect passord,login id and debit card number through emails OR phone call Further,we would "
    "like to reiterate that Axis Bank shall not be liable for any losses arising from you sharing/disclosing "
    "of your login id, password and debit card number to anyone. Please co-operate by forwarding all such "
    "suspicious/spam emails, if received by you, to customer.service@axisbank.com",
    "REGISTERED OFFICE - AXIS BANK LTD,TRISHUL,Opp. Samartheswar Temple, Near Law Garden, Ellisbridge, "
    "Ahmedabad , 380006.This is a system generated output and requires no signature.",
]

LEGENDS = [
    ("ICONN", "Transaction trough Internet Banking"),
    ("VMT-ICON", "Visa Money Transfer through Internet Banking"),
    ("AUTOSWEEP", "Transfer to linked fixed deposit"),
    ("REV SWEEP", "Interest on Linked fixed Deposit"),
    ("SWEEP TRF", "Transfer from Linked Fixed Deposit / Account"),
    ("VMT", "Visa Money Transfer through ATM"),
    ("CWDR", "Cash Withdrawal through ATM"),
    ("PUR", "POS purchase"),
    ("TIP/ SCG", "Surcharge on usage of debit card at pumps/railway ticket purchase or hotel tips"),
    ("RATE DIFF", "Difference in rates on usage of card internationally"),
    ("CLG", "Cheque Clearing Transaction"),
    ("EDC", "Credit transaction through EDC Machine"),
    ("SETU", "Seamless electronic fund transfer through AXIS Bank"),
    ("Int.pd", "Interest paid to customer"),
    ("Int.Coll", "Interest collected from the customer"),
]


class AxisTemplate(TableTemplate):
    """Opening balance, transaction total and closing balance are rows of the table itself."""

    accent_color = "#A6192E"
    display_name = "AXIS BANK"

    geometry = TableGeometry(left=40, columns=(
        ColumnSpec("date", "Tran Date", 65),
        ColumnSpec("cheque_no", "Chq No", 55),
        ColumnSpec("description", "Particulars", 145),
        ColumnSpec("debit", "Debit", 70, "right"),
        ColumnSpec("credit", "Credit", 70, "right"),
        ColumnSpec("balance", "Balance", 70, "right"),
        ColumnSpec("init_br", "Init.\nBr", 40, "right"),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=100,
        continuation_offset=84,
        repeat_table_header=True,
        footer_continuation_offset=60,
    )
    min_row_height = 18
    row_padding = 8
    cell_padding = 3
    heading_style = TextStyle("Helvetica-Bold", 9)
    header_row_height = 24
    header_fill = None

    @property
    def bank_id(self) -> str:
        return "AXIS"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        self.draw_branding(canvas, ctx, 350, 20, 200, 35)

        y = 70
        canvas.text(40, y, account.upper("name", "-"), TextStyle("Helvetica-Bold", 10))
        y += 16
        lines = []
        if account.get("father_name"):
            lines.append(f"D/O {account.upper('father_name')}")
        address = account.text("address")
        if account.get("pin"):
            address += f"-{account['pin']}"
        lines.append(address.upper())
        for key in ("address2", "city", "state"):
            if account.get(key):
                lines.append(account.upper(key))
        for line in lines:
            canvas.text(40, y, line, BODY)
            y += 14

        right = canvas.page_width - 40
        details = [
            f"Customer No: {account.text('customer_no')}",
            f"Scheme: {account.text('scheme', 'EASY ACCESS SALARY')}",
            account.text("account_type", "ACCOUNT"),
            f"Currency: {account.text('currency', 'INR')}",
        ]
        for index, line in enumerate(details):
            canvas.text(right, 115 + index * 14, line, BODY, "right")

        y = max(y, 175)
        title = (
            f"Statement of Account No: {account.text('account_no')} for the period "
            f"(From: {account.text('statement_from')} To: {account.text('statement_to')})"
        )
        y += canvas.text_block(40, y, 520, title, TextStyle("Helvetica-Bold", 10), "center")
        return y + 12

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.text(x, y + 5, self.display_name, TextStyle("Helvetica-Bold", 22, self.accent_color))

    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        return {
            "date": entry.date or "-",
            "cheque_no": entry.extra("cheque_no") or "-",
            "description": entry.description or "-",
            "debit": self.amount_text(entry.debit),
            "credit": self.amount_text(entry.credit),
            "balance": format_amount(entry.balance),
            "init_br": entry.extra("init_br"),
        }

    def leading_rows(self, ctx: StatementContext) -> List[TableRow]:
        return [TableRow(cells={
            "description": "OPENING BALANCE",
            "balance": format_amount(ctx.totals.opening_balance),
        }, bold=True)]

    def trailing_rows(self, ctx: StatementContext) -> List[TableRow]:
        totals = ctx.totals
        return [
            TableRow(cells={
                "description": "TRANSACTION TOTAL",
                "debit": format_amount(totals.total_debit),
                "credit": format_amount(totals.total_credit),
            }, bold=True),
            TableRow(cells={
                "description": "CLOSING BALANCE",
                "balance": format_amount(totals.closing_balance),
            }, bold=True),
        ]

    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        blocks = [self.paragraph(canvas, text, DISCLAIMER, 40, 520, gap=8) for text in DISCLAIMERS]
        blocks[-1].gap = 15
        blocks.append(self.text_lines(canvas, ["Legends :"], TextStyle("Helvetica-Bold", 8), 40, gap=6))
        blocks.extend(
            self.text_lines(canvas, [f"{code.ljust(20)} -    {description}"], DISCLAIMER, 40, gap=3)
            for code, description in LEGENDS
        )
        blocks[-1].gap = 10
        blocks.append(self.text_lines(canvas, ["++++ End of Statement ++++"], TextStyle("Helvetica-Bold", 8),
                                      canvas.page_width / 2, align="center"))
        return blocks
