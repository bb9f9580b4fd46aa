"""Running balance computation over resolved statement entries."""

from decimal import Decimal
from typing import Iterable, List, Sequence

from statement_generator.shared.utils.logging_config import get_logger

from ..models.statement_entry import LedgerEntry, LedgerTotals, ResolvedEntry
from .amount_parser import ZERO, amount_context, quantize_amount

logger = get_logger(__name__)


def _finite_or_zero(value: Decimal, label: str, position: int) -> Decimal:
    if value.is_finite():
        return value
    logger.warning(f"Non-finite {label} at position {position} treated as zero")
    return ZERO


def advance(previous_balance: Decimal, entry: ResolvedEntry, position: int) -> LedgerEntry:
    """
    Apply one entry to a balance.

    Args:
        previous_balance: Balance before the entry
        entry: Resolved entry to apply
        position: 1-based position of the entry in its ledger

    Returns:
        LedgerEntry carrying ``previous_balance - debit + credit`` rounded to 2 places
    """
    debit = _finite_or_zero(entry.debit, "debit", position)
    credit = _finite_or_zero(entry.credit, "credit", position)
    if debit is not entry.debit or credit is not entry.credit:
        entry = entry.model_copy(update={"debit": debit, "credit": credit})
    with amount_context():
        balance = quantize_amount(previous_balance - debit + credit)
    if balance == 0:
        balance = ZERO
    return LedgerEntry.from_resolved(entry, balance=balance, position=position)


def compute_ledger(entries: Iterable[ResolvedEntry], opening_balance: Decimal = ZERO) -> List[LedgerEntry]:
    """
    Fold entries into a ledger in the order given (never re-sorted).

    The output is 1:1 with the input; rounding happens at every step.
    """
    balance = quantize_amount(opening_balance)
    ledger = []
    for position, entry in enumerate(entries, start=1):
        ledger_entry = advance(balance, entry, position)
        balance = ledger_entry.balance
        ledger.append(ledger_entry)

    logger.debug(f"Computed ledger of {len(ledger)} entries, closing balance {balance}")
    return ledger


def summarize_ledger(ledger: Sequence[LedgerEntry], opening_balance: Decimal = ZERO) -> LedgerTotals:
    """Totals for the whole ledger: sums of debits/credits and first/last balances."""
    opening = quantize_amount(opening_balance)
    if not ledger:
        return LedgerTotals(opening_balance=opening, closing_balance=opening)

    first = ledger[0]
    with amount_context():
        total_debit = quantize_amount(sum((entry.debit for entry in ledger), ZERO))
        total_credit = quantize_amount(sum((entry.credit for entry in ledger), ZERO))
        opening = quantize_amount(first.balance - first.credit + first.debit)

    return LedgerTotals(
        opening_balance=opening,
        total_debit=total_debit,
        total_credit=total_credit,
        closing_balance=ledger[-1].balance,
        debit_count=sum(1 for entry in ledger if entry.debit > 0),
        credit_count=sum(1 for entry in ledger if entry.credit > 0),
        entry_count=len(ledger),
    )
