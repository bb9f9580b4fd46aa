"""Domain models for statement generation."""

from .bank_schema import BankSchema, SignConvention, CORE_FIELDS, COMPUTED_FIELDS, INDICATOR_FIELDS
from .statement_entry import ResolvedEntry, LedgerEntry, LedgerTotals
from .account_profile import AccountProfile

__all__ = [
    "BankSchema",
    "SignConvention",
    "CORE_FIELDS",
    "COMPUTED_FIELDS",
    "INDICATOR_FIELDS",
    "ResolvedEntry",
    "LedgerEntry",
    "LedgerTotals",
    "AccountProfile",
]
