"""Resolution of raw input rows into canonical statement entries."""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from statement_generator.shared.utils.logging_config import get_logger

from ..models.bank_schema import BankSchema, COMPUTED_FIELDS, SignConvention
from ..models.statement_entry import ResolvedEntry
from .amount_parser import ZERO, parse_amount

logger = get_logger(__name__)

_MISSING = object()


class FieldResolver:
    """
    Map one raw row onto a schema's canonical fields.

    Lookup per field: each synonym in declared priority order, exact key first,
    then case-insensitive. The first key present wins, even when its value is blank.
    """

    def resolve(
        self,
        schema: BankSchema,
        row: Mapping[str, Any],
        prior_balance_hint: Optional[Decimal] = None,
    ) -> ResolvedEntry:
        """
        Resolve a raw row against a schema.

        Args:
            schema: Institution schema
            row: Raw input mapping (keys may be padded or mis-cased)
            prior_balance_hint: Running balance before this row; informational only

        Returns:
            ResolvedEntry with empty strings / zero amounts for absent fields
        """
        normalized = self._normalize_keys(row)
        consumed = set()

        def lookup(field_name: str) -> Any:
            key = self._find_key(normalized, schema.synonyms_for(field_name))
            if key is None:
                return _MISSING
            consumed.add(key)
            return normalized[key]

        def text(field_name: str) -> str:
            value = lookup(field_name)
            if value is _MISSING or value is None:
                return ""
            return str(value).strip()

        if schema.sign_convention == SignConvention.INDICATOR:
            debit, credit = self._split_indicator(lookup("amount"), lookup("dr_cr"))
        else:
            debit = self._amount(lookup("debit"))
            credit = self._amount(lookup("credit"))

        value_date = lookup("value_date")
        value_date = None if value_date is _MISSING or value_date is None else str(value_date).strip()

        extras: Dict[str, str] = {}
        for field_name in schema.extra_fields:
            extras[field_name] = text(field_name)

        date = text("date")
        description = text("description")

        # balance is always recomputed by the ledger
        for field_name in COMPUTED_FIELDS:
            lookup(field_name)

        for key, value in normalized.items():
            if key in consumed or key in extras:
                continue
            extras[key] = "" if value is None else str(value)

        if prior_balance_hint is not None:
            logger.debug(f"Resolving {schema.id} row after balance {prior_balance_hint}")

        return ResolvedEntry(
            date=date,
            value_date=value_date,
            description=description,
            debit=debit,
            credit=credit,
            extras=extras,
        )

    def resolve_all(self, schema: BankSchema, rows: Iterable[Mapping[str, Any]]) -> List[ResolvedEntry]:
        """Resolve rows in order; a row that fails is kept as a zero-delta entry."""
        resolved = []
        for index, row in enumerate(rows, start=1):
            try:
                resolved.append(self.resolve(schema, row))
            except Exception as e:
                logger.warning(f"Row {index} could not be resolved for {schema.id}, using empty entry: {e}")
                resolved.append(ResolvedEntry.empty())
        return resolved

    @staticmethod
    def _normalize_keys(row: Mapping[str, Any]) -> Dict[str, Any]:
        normalized = {}
        for key, value in row.items():
            name = str(key).strip()
            # on a trim collision the first key in row order is kept
            if name not in normalized:
                normalized[name] = value
        return normalized

    @staticmethod
    def _find_key(row: Mapping[str, Any], candidates: Tuple[str, ...]) -> Optional[str]:
        for candidate in candidates:
            if candidate in row:
                return candidate
            lowered = candidate.lower()
            for key in row:
                if key.lower() == lowered:
                    return key
        return None

    @staticmethod
    def _amount(value: Any) -> Decimal:
        return ZERO if value is _MISSING else parse_amount(value)

    def _split_indicator(self, amount_value: Any, indicator_value: Any) -> Tuple[Decimal, Decimal]:
        """Split one amount column into (debit, credit) using a Dr/Cr indicator."""
        amount = self._amount(amount_value)
        indicator = "" if indicator_value in (_MISSING, None) else str(indicator_value).strip().upper()

        if indicator.startswith("D"):
            return amount, ZERO
        if indicator.startswith("C"):
            return ZERO, amount
        if amount < 0:
            return -amount, ZERO
        return ZERO, amount
