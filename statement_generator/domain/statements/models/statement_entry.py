"""Domain models for resolved transactions and ledger rows."""

from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class ResolvedEntry(BaseModel):
    """A transaction row normalized to canonical fields (immutable)."""

    model_config = ConfigDict(frozen=True)

    date: str = Field("", description="Transaction / posting date as written in the source")
    value_date: Optional[str] = Field(None, description="Value date, when the institution has one")
    description: str = Field("", description="Narration / particulars")
    debit: Decimal = Field(Decimal("0.00"), description="Money out")
    credit: Decimal = Field(Decimal("0.00"), description="Money in")
    extras: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Schema-declared extra fields (cheque_no, ref_no, ...) and passthrough columns"
    )

    @field_validator("extras", mode="after")
    @classmethod
    def _read_only_extras(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("extras")
    def _serialize_extras(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    @classmethod
    def empty(cls) -> "ResolvedEntry":
        """Zero-delta placeholder for a row that could not be resolved."""
        return cls()

    def extra(self, name: str, default: str = "") -> str:
        return self.extras.get(name, default)


class LedgerEntry(ResolvedEntry):
    """A resolved entry annotated with its running balance and 1-based position."""

    balance: Decimal = Field(..., description="Running balance after this entry")
    position: int = Field(..., ge=1, description="1-based sequence position in the ledger")

    @classmethod
    def from_resolved(cls, entry: ResolvedEntry, balance: Decimal, position: int) -> "LedgerEntry":
        return cls(**entry.model_dump(), balance=balance, position=position)

    @property
    def delta(self) -> Decimal:
        return self.credit - self.debit


class LedgerTotals(BaseModel):
    """Statement totals, computed once from the complete ledger."""

    model_config = ConfigDict(frozen=True)

    opening_balance: Decimal = Decimal("0.00")
    total_debit: Decimal = Decimal("0.00")
    total_credit: Decimal = Decimal("0.00")
    closing_balance: Decimal = Decimal("0.00")
    debit_count: int = 0
    credit_count: int = 0
    entry_count: int = 0
