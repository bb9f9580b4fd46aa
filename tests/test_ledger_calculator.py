"""Tests for running balance computation."""

from decimal import Decimal

from statement_generator.domain.statements.models import ResolvedEntry
from statement_generator.domain.statements.services import (
    FieldResolver,
    SchemaRegistry,
    advance,
    compute_ledger,
    summarize_ledger,
)


def _entries(*deltas):
    """(debit, credit) pairs as resolved entries."""
    return [ResolvedEntry(debit=Decimal(debit), credit=Decimal(credit)) for debit, credit in deltas]


def test_pnb_statement_balances():
    schema = SchemaRegistry.schema_for("PNB")
    resolved = FieldResolver().resolve_all(schema, [
        {"withdrawal": "100"},
        {"deposit": "250"},
        {"withdrawal": "50"},
    ])

    ledger = compute_ledger(resolved, Decimal("0.00"))
    totals = summarize_ledger(ledger, Decimal("0.00"))

    assert [entry.balance for entry in ledger] == [Decimal("-100.00"), Decimal("150.00"), Decimal("100.00")]
    assert [entry.position for entry in ledger] == [1, 2, 3]
    assert totals.total_debit == Decimal("150.00")
    assert totals.total_credit == Decimal("250.00")
    assert totals.opening_balance == Decimal("0.00")
    assert totals.closing_balance == Decimal("100.00")
    assert totals.debit_count == 2
    assert totals.credit_count == 1
    assert totals.entry_count == 3


def test_closing_balance_equals_opening_plus_credits_minus_debits():
    entries = _entries(("10.10", "0"), ("0", "99.99"), ("1234.56", "0"), ("0", "0.01"), ("5", "5"))
    opening = Decimal("1000.00")

    ledger = compute_ledger(entries, opening)

    expected = opening + sum(e.credit for e in entries) - sum(e.debit for e in entries)
    assert ledger[-1].balance == expected


def test_order_is_preserved_never_sorted():
    entries = [
        ResolvedEntry(date="03/04/2024", credit=Decimal("1")),
        ResolvedEntry(date="01/04/2024", credit=Decimal("2")),
    ]

    ledger = compute_ledger(entries)

    assert [entry.date for entry in ledger] == ["03/04/2024", "01/04/2024"]


def test_reversing_input_changes_intermediate_balances():
    entries = _entries(("100", "0"), ("0", "250"), ("50", "0"))

    forward = [entry.balance for entry in compute_ledger(entries)]
    backward = [entry.balance for entry in compute_ledger(list(reversed(entries)))]

    assert forward[-1] == backward[-1]
    assert forward[:-1] != backward[:-1]


def test_reversing_zero_deltas_changes_nothing():
    entries = _entries(("0", "0"), ("5", "5"), ("0", "0"))

    forward = [entry.balance for entry in compute_ledger(entries, Decimal("7"))]
    backward = [entry.balance for entry in compute_ledger(list(reversed(entries)), Decimal("7"))]

    assert forward == backward == [Decimal("7.00")] * 3


def test_ledger_is_one_to_one_with_input():
    assert compute_ledger([]) == []
    assert len(compute_ledger(_entries(*[("1", "0")] * 25))) == 25


def test_advance_is_a_pure_step():
    entry = ResolvedEntry(description="manual", debit=Decimal("2.50"))

    first = advance(Decimal("10.00"), entry, 4)
    second = advance(Decimal("10.00"), entry, 4)

    assert first == second
    assert first.balance == Decimal("7.50")
    assert first.position == 4
    assert first.description == "manual"
    assert first.delta == Decimal("-2.50")


def test_advance_rounds_each_step():
    entry = ResolvedEntry(credit=Decimal("0.01"))
    assert advance(Decimal("0.004"), entry, 1).balance == Decimal("0.01")


def test_non_finite_delta_is_treated_as_zero():
    entry = ResolvedEntry.model_construct(
        date="", value_date=None, description="", debit=Decimal("0.00"), credit=Decimal("NaN"), extras={}
    )

    ledger_entry = advance(Decimal("10.00"), entry, 1)

    assert ledger_entry.balance == Decimal("10.00")
    assert ledger_entry.credit == Decimal("0.00")


def test_no_negative_zero_balance():
    ledger = compute_ledger(_entries(("5", "0"), ("0", "5")), Decimal("0"))
    assert str(ledger[-1].balance) == "0.00"


def test_summary_of_empty_ledger_uses_opening_balance():
    totals = summarize_ledger([], Decimal("50"))

    assert totals.opening_balance == Decimal("50.00")
    assert totals.closing_balance == Decimal("50.00")
    assert totals.entry_count == 0


def test_summary_opening_balance_is_derived_from_first_entry():
    ledger = compute_ledger(_entries(("100", "0"), ("0", "30")), Decimal("500"))
    totals = summarize_ledger(ledger, Decimal("500"))

    assert totals.opening_balance == Decimal("500.00")
    assert totals.closing_balance == Decimal("430.00")


def test_balance_may_grow_past_a_single_amount():
    largest = "99999999999999999999999999.99"
    ledger = compute_ledger(_entries(("0", largest), ("0", largest), ("0", largest)), Decimal("0"))
    totals = summarize_ledger(ledger, Decimal("0"))

    assert ledger[-1].balance == Decimal("299999999999999999999999999.97")
    assert totals.total_credit == Decimal("299999999999999999999999999.97")
    assert totals.opening_balance == Decimal("0.00")
