"""Punjab National Bank statement template."""

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
SECTION = TextStyle("Helvetica-Bold", 11)
TITLE = TextStyle("Helvetica", 12)
DISCLAIMER = TextStyle("Helvetica", 7)

DISCLAIMER_LINES = [
    [
        "Unless constituent notifies the bank immediately of any discrepancy found by him in his statement of",
        "Account, it will be taken that he has found the account correct.",
    ],
    [
        "*COMPUTER GENERATED ENTERIES SHOWN IN THE STATEMENT OF ACCOUNT DO NOT REQUIRE ANY",
        "AUTHENTICATION / INITIAL FROM THE BANK OFFICIAL.PLEASE DO NOT ACCEPT ANY MANUAL ENTRY IN",
        "YOUR COMPUTER GENERATED STATEMENT OF ACCOUNT",
    ],
    [
        "* PLEASE ENSURE THAT ALL THE CHEQUE LEAVES IN YOUR CUSTODY ARE DULY BRANDED WITH YOUR",
        "16 DIGITS ACCOUNT NUMBER",
    ],
    [
        "* CUSTOMERS ARE REQUESTED IN THEIR OWN INTEREST NOT TO ISSUE CHEQUES WITHOUT",
        "ADEQUATE CLEAR FUNDS /ARRANGEMENTS. SUCH CHEQUES CAN BE RETURNED WITHOUT MAKING",
        "ANY FURTHER REFERENCE TO THEM.",
    ],
    [
        "* PLEASE MAINTAIN MINIMUM AVERAGE BALANCE,TO AVOID LEVY OF CHARGES.",
    ],
    [
        "*Pls note Penal interest may be charged in loan accounts due to financial reasons such as over",
        "drawings, non receipt of install on the rates prescribed by bank from time to time and for non financial",
        "reasons like non submission of , QMS forms, non adherence to terms and conditions etc.",
    ],
    [
        "Abbreviations are as under:",
        "BR: Branch Name , Csh: Cash , Clg: Clearing , ISO: Inter Sol(##)",
        "QAB:Quarterly Average Balances , LF Chq :Ledger Folio Charges , Intl: Interest , Chrg: Charges",
        "Ret:Returning , Chq: Cheque , SI: Standing Instruction , Stk Stmt: Stock Statement , Trf: Transfer , POSP:POINT OF SALE",
    ],
]


class PNBTemplate(TableTemplate):
    """Maroon banner, branch and customer blocks; continuation pages repeat only the title."""

    accent_color = "#8B1538"
    display_name = "punjab national bank"

    geometry = TableGeometry(left=35, columns=(
        ColumnSpec("date", "Transaction\nDate", 65),
        ColumnSpec("cheque_no", "Cheque\nNumber", 65),
        ColumnSpec("debit", "Withdrawal", 75, "right"),
        ColumnSpec("credit", "Deposit", 75, "right"),
        ColumnSpec("balance", "Balance", 90, "right"),
        ColumnSpec("description", "Narration", 175),
    ))
    page_policy = PageBreakPolicy(
        bottom_margin=80,
        continuation_offset=80,
        repeat_table_header=False,
    )
    min_row_height = 22
    row_padding = 8
    cell_padding = 4
    body_style = TextStyle("Helvetica", 8)
    heading_style = TextStyle("Helvetica-Bold", 9)
    heading_align = "center"
    header_row_height = 26

    @property
    def bank_id(self) -> str:
        return "PNB"

    def _title(self, ctx: StatementContext) -> str:
        return f"Account Statement For Account:{ctx.account.text('account_no')}"

    def draw_header(self, canvas: LayoutCanvas, ctx: StatementContext) -> float:
        account = ctx.account
        canvas.fill(0, 0, canvas.page_width, 45, self.accent_color)
        self.draw_branding(canvas, ctx, 0, 0, canvas.page_width, 45)

        canvas.text(canvas.page_width / 2, 80, self._title(ctx), TITLE, "center")

        y = 155
        canvas.text(35, y, "Branch Details", SECTION)
        y += 15
        branch_rows = [
            ("Branch Name:", account.text("branch_name")),
            ("Bank Address:", account.text("branch_address")),
        ]
        if account.get("branch_address2"):
            branch_rows.append(("", account["branch_address2"]))
        branch_rows += [
            ("City:", account.text("city")),
            ("Pin:", account.text("pin")),
            ("IFSC Code:", account.text("ifsc")),
            ("MICR Code :", account.text("micr")),
        ]
        for label, value in branch_rows:
            y += canvas.label_value(35, y, label, value, LABEL, 120, value_width=420) + 3

        y += 11
        canvas.text(35, y, "Customer Details", SECTION)
        y += 15
        customer_rows = [
            ("Customer Name:", account.text("name"), 130),
            ("Joint Account Holder 1:", account.text("jt_holder1", ""), 150),
            ("Joint Account Holder 2:", account.text("jt_holder2", ""), 150),
            ("Joint Account Holder 3:", account.text("jt_holder3", ""), 150),
            ("Customer Address:", account.text("address"), 130),
            ("City:", account.text("city"), 130),
            ("Pin:", account.text("pin"), 130),
            ("Nominee :", account.text("nominee", ""), 130),
        ]
        for label, value, value_x in customer_rows:
            y += canvas.label_value(35, y, label, value, LABEL, value_x, value_width=560 - value_x) + 3

        y += 11
        period = TextStyle("Helvetica", 10)
        canvas.text(35, y, "Statement Period  :", period)
        canvas.text(150, y, account.text("statement_from"), period)
        canvas.text(230, y, "to", period)
        canvas.text(265, y, account.text("statement_to"), period)
        return y + 30

    def draw_text_logo(self, canvas: LayoutCanvas, x: float, y: float,
                       width: float, height: float) -> None:
        canvas.fill(x, y, width, height, self.accent_color)
        canvas.text(x + 420, y + 12, "punjab national bank", TextStyle("Helvetica", 14, WHITE))
        canvas.text(x + 520, y + 30, "...the name you can bank upon!", TextStyle("Helvetica", 6, WHITE))

    def draw_continuation(self, canvas: LayoutCanvas, ctx: StatementContext) -> None:
        canvas.text(canvas.page_width / 2, 40, self._title(ctx), TITLE, "center")

    def cell_values(self, entry: LedgerEntry, ctx: StatementContext) -> Dict[str, str]:
        return {
            "date": entry.date or "-",
            "cheque_no": entry.extra("cheque_no"),
            "debit": self.amount_text(entry.debit),
            "credit": self.amount_text(entry.credit),
            "balance": f"{format_amount(entry.balance)} Cr.",
            "description": entry.description or "-",
        }

    def footer_blocks(self, canvas: LayoutCanvas, ctx: StatementContext) -> List[FooterBlock]:
        return [self.text_lines(canvas, lines, DISCLAIMER, 35, gap=5) for lines in DISCLAIMER_LINES]

    def decorate_page(self, canvas: LayoutCanvas, page_number: int, page_count: int,
                      ctx: StatementContext) -> None:
        canvas.text(canvas.page_width - 40, canvas.page_height - 30, f"Page No {page_number}",
                    TextStyle("Helvetica", 9, "#808080"), "right")
