"""Use cases for building ledgers and generating statement documents."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from statement_generator.core.unified_config import A4_HEIGHT, A4_WIDTH
from statement_generator.domain.statements.models import (
    AccountProfile,
    BankSchema,
    LedgerEntry,
    LedgerTotals,
    ResolvedEntry,
)
from statement_generator.domain.statements.services import (
    FieldResolver,
    SchemaRegistry,
    advance,
    compute_ledger,
    format_amount,
    parse_amount,
    summarize_ledger,
)
from statement_generator.shared.utils.logging_config import get_logger

from .layout_engine import StatementLayout, TableLayoutEngine
from .templates import TemplateRegistry
from .templates.base_template import AssetLocator, TableTemplate
from .text_measurement import ReportLabTextMeasurer, TextMeasurer

logger = get_logger(__name__)

RawRow = Mapping[str, Any]


def resolve_opening_balance(opening_balance: Any, account: Optional[Mapping[str, Any]] = None) -> Decimal:
    """Explicit opening balance if given, else the account's ``opening_balance`` attribute, else zero."""
    if opening_balance is None or (isinstance(opening_balance, str) and not opening_balance.strip()):
        opening_balance = (account or {}).get("opening_balance")
    return parse_amount(opening_balance)


@dataclass(frozen=True)
class StatementLedger:
    """Resolved rows with their running balances and totals."""

    schema: BankSchema
    entries: Tuple[LedgerEntry, ...]
    totals: LedgerTotals


class BuildLedgerUseCase:
    """Resolves raw rows against a bank schema and folds them into a running balance."""

    def __init__(self, resolver: Optional[FieldResolver] = None):
        self.resolver = resolver or FieldResolver()

    def execute(
        self,
        bank_id: str,
        rows: Sequence[RawRow],
        opening_balance: Any = None,
        account: Optional[Mapping[str, Any]] = None,
    ) -> StatementLedger:
        """
        Build the ledger for one statement.

        Args:
            bank_id: Institution code
            rows: Raw transaction rows in statement order
            opening_balance: Balance before the first row (falls back to the account attribute)
            account: Raw account attributes

        Returns:
            StatementLedger

        Raises:
            UnknownInstitutionError: If the institution is not supported
        """
        schema = SchemaRegistry.schema_for(bank_id)
        opening = resolve_opening_balance(opening_balance, account)

        resolved = self.resolver.resolve_all(schema, rows)
        entries = compute_ledger(resolved, opening)
        totals = summarize_ledger(entries, opening)

        logger.info(
            f"Built {schema.id} ledger: {totals.entry_count} entries, "
            f"debits {totals.total_debit}, credits {totals.total_credit}, closing {totals.closing_balance}"
        )
        return StatementLedger(schema=schema, entries=tuple(entries), totals=totals)

    def append(self, bank_id: str, previous_balance: Any, row: RawRow, position: int) -> LedgerEntry:
        """Resolve one manually entered row and place it after ``previous_balance``."""
        schema = SchemaRegistry.schema_for(bank_id)
        previous = parse_amount(previous_balance)
        entry: ResolvedEntry = self.resolver.resolve(schema, row, prior_balance_hint=previous)
        return advance(previous, entry, position)


class GenerateStatementUseCase:
    """
    End-to-end statement generation: resolve, compute the ledger, lay out, render.

    The rendering surface is acquired before the institution is looked up, so
    it is released on every path, an unknown institution included.
    """

    def __init__(
        self,
        measurer: Optional[TextMeasurer] = None,
        asset_locator: Optional[AssetLocator] = None,
        page_size: Tuple[float, float] = (A4_WIDTH, A4_HEIGHT),
        ledger_builder: Optional[BuildLedgerUseCase] = None,
    ):
        self.engine = TableLayoutEngine(measurer or ReportLabTextMeasurer(), asset_locator, page_size)
        self.ledger_builder = ledger_builder or BuildLedgerUseCase()

    def layout(
        self,
        bank_id: str,
        account: Optional[Mapping[str, Any]],
        rows: Sequence[RawRow],
        opening_balance: Any = None,
        generated_at: Optional[datetime] = None,
    ) -> StatementLayout:
        """Lay out a statement without rendering it."""
        template = TemplateRegistry.get_template(bank_id)
        return self._layout(template, account, rows, opening_balance, generated_at)

    def execute(
        self,
        surface,
        bank_id: str,
        account: Optional[Mapping[str, Any]],
        rows: Sequence[RawRow],
        opening_balance: Any = None,
        generated_at: Optional[datetime] = None,
    ) -> StatementLayout:
        """
        Generate a statement onto a rendering surface.

        Args:
            surface: RenderingSurface to draw on (used as a context manager)
            bank_id: Institution code
            account: Raw account attributes
            rows: Raw transaction rows in statement order
            opening_balance: Balance before the first row
            generated_at: Timestamp printed by templates that show one

        Returns:
            The StatementLayout that was rendered

        Raises:
            UnknownInstitutionError: Nothing is drawn
            MeasurementFailureError: Layout aborted, the surface discards its output
        """
        with surface:
            template = TemplateRegistry.get_template(bank_id)
            statement_layout = self._layout(template, account, rows, opening_balance, generated_at)
            surface.render(statement_layout.stream)

        logger.info(
            f"Generated {template.bank_id} statement: {statement_layout.page_count} page(s), "
            f"{len(statement_layout.rows)} rows"
        )
        return statement_layout

    def _layout(
        self,
        template: TableTemplate,
        account: Optional[Mapping[str, Any]],
        rows: Sequence[RawRow],
        opening_balance: Any,
        generated_at: Optional[datetime],
    ) -> StatementLayout:
        ledger = self.ledger_builder.execute(template.bank_id, rows, opening_balance, account)
        profile = AccountProfile.for_schema(ledger.schema, account)
        return self.engine.layout(template, profile, ledger.entries, ledger.totals, generated_at)


def entries_as_rows(entries: Sequence[LedgerEntry]) -> List[dict]:
    """Plain dict form of ledger entries (amounts as two-decimal strings)."""
    rows = []
    for entry in entries:
        rows.append({
            "position": entry.position,
            "date": entry.date,
            "value_date": entry.value_date,
            "description": entry.description,
            "debit": format_amount(entry.debit),
            "credit": format_amount(entry.credit),
            "balance": format_amount(entry.balance),
            "extras": dict(entry.extras),
        })
    return rows
