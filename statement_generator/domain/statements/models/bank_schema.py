"""Domain model for an institution's statement schema."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class SignConvention(str, Enum):
    """How an institution encodes money in and money out."""

    DIRECT = "direct"          # separate debit/withdrawal and credit/deposit columns
    INDICATOR = "indicator"    # one amount column plus a Dr/Cr indicator column


# Canonical fields every ResolvedEntry carries as first-class attributes
CORE_FIELDS = ("date", "value_date", "description", "debit", "credit")
# Computed by the ledger, never taken from input
COMPUTED_FIELDS = ("balance",)
# Read only in INDICATOR mode
INDICATOR_FIELDS = ("amount", "dr_cr")


@dataclass(frozen=True)
class BankSchema:
    """
    Declarative description of one institution's statement data.

    Attributes:
        id: Short institution code (e.g. 'PNB')
        name: Institution display name
        transaction_fields: Ordered (canonical_field, display_label) pairs
        account_fields: Ordered account attribute names
        synonyms: Canonical field -> prioritized input column names
        sign_convention: DIRECT or INDICATOR debit/credit encoding
    """

    id: str
    name: str
    transaction_fields: Tuple[Tuple[str, str], ...]
    account_fields: Tuple[str, ...]
    synonyms: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    sign_convention: SignConvention = SignConvention.DIRECT

    def __post_init__(self):
        # read-only view so a shared schema can never be altered in place
        object.__setattr__(self, "synonyms", MappingProxyType(dict(self.synonyms)))

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.transaction_fields)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(label for _, label in self.transaction_fields)

    def label_for(self, field_name: str) -> str:
        for name, label in self.transaction_fields:
            if name == field_name:
                return label
        return field_name

    def synonyms_for(self, field_name: str) -> Tuple[str, ...]:
        """Prioritized input column names for a field (the field name itself if none declared)."""
        return self.synonyms.get(field_name, (field_name,))

    def primary_column(self, field_name: str) -> str:
        """The institution's own column name for a field, used in CSV templates."""
        return self.synonyms_for(field_name)[0]

    @property
    def extra_fields(self) -> Tuple[str, ...]:
        """Declared fields kept in the entry's open attribute map."""
        skip = set(CORE_FIELDS) | set(COMPUTED_FIELDS) | set(INDICATOR_FIELDS)
        return tuple(name for name in self.field_names if name not in skip)
