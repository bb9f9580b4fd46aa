"""Monetary string normalization.

Statement sources write amounts as ``1,234.50``, ``(500)`` or leave the cell
blank. Every value is normalized to a two-decimal ``Decimal``; anything that
cannot be read becomes zero so a partially dirty file still renders.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext
from typing import Any

from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0.00")

# a single amount keeps at most 26 integer digits (28 significant digits at 0.01)
MAX_AMOUNT_DIGITS = 26
# running balances and totals are summed with room to spare
LEDGER_PRECISION = 60

_PARENTHESIZED = re.compile(r"^\((.*)\)$")


def amount_context():
    """Decimal context for ledger arithmetic: ``with amount_context(): ...``"""
    context = getcontext().copy()
    context.prec = LEDGER_PRECISION
    return localcontext(context)


def quantize_amount(value: Decimal) -> Decimal:
    """Round to two decimal places (half up)."""
    with amount_context():
        return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_amount(raw: Any) -> Decimal:
    """
    Parse a locale-formatted monetary value into a signed two-decimal Decimal.

    Rules, in order:
        1. None or empty after trimming -> 0.00
        2. Thousands separators (commas) and surrounding whitespace are removed
        3. A value wrapped in parentheses is negative: "(1,234.50)" -> -1234.50
        4. The rest is parsed as a decimal number
        5. Any failure, including NaN/Infinity and values of 10**26 or more -> 0.00 (never raises)

    Args:
        raw: String (or number) from an input row

    Returns:
        Decimal quantized to 0.01
    """
    if raw is None:
        return ZERO

    if isinstance(raw, bool):
        logger.warning(f"Could not parse amount from boolean value: {raw!r}")
        return ZERO

    cleaned = str(raw).replace(",", "").strip()
    if cleaned == "":
        return ZERO

    negate = False
    match = _PARENTHESIZED.match(cleaned)
    if match:
        cleaned = match.group(1).strip()
        negate = True

    try:
        value = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        logger.warning(f"Could not parse amount from: {raw!r}")
        return ZERO

    if not value.is_finite():
        logger.warning(f"Ignoring non-finite amount: {raw!r}")
        return ZERO

    if value and value.adjusted() >= MAX_AMOUNT_DIGITS:
        logger.warning(f"Ignoring out-of-range amount: {raw!r}")
        return ZERO

    if negate:
        value = -value

    value = quantize_amount(value)
    # no "-0.00" on the page
    return value if value != 0 else ZERO


def format_amount(value: Decimal) -> str:
    """Two decimals, no thousands separator: Decimal('1234.5') -> '1234.50'."""
    with amount_context():
        value = quantize_amount(value)
        return f"{value if value != 0 else ZERO:.2f}"
