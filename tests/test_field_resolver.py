"""Tests for resolving raw rows against bank schemas."""

from decimal import Decimal

import pytest

from statement_generator.domain.statements.models import ResolvedEntry
from statement_generator.domain.statements.services import FieldResolver, SchemaRegistry


@pytest.fixture
def resolver():
    return FieldResolver()


@pytest.fixture
def pnb():
    return SchemaRegistry.schema_for("PNB")


@pytest.fixture
def bandhan():
    return SchemaRegistry.schema_for("BANDHAN")


def test_direct_row(resolver, pnb):
    entry = resolver.resolve(pnb, {
        "date": "01/04/2024",
        "cheque_no": "000123",
        "withdrawal": "1,500.00",
        "narration": "ATM WDL",
    })

    assert entry.date == "01/04/2024"
    assert entry.description == "ATM WDL"
    assert entry.debit == Decimal("1500.00")
    assert entry.credit == Decimal("0.00")
    assert entry.extra("cheque_no") == "000123"
    assert entry.value_date is None


def test_exact_key_beats_case_insensitive_match(resolver, pnb):
    entry = resolver.resolve(pnb, {"Narration": "upper", "narration": "exact"})

    assert entry.description == "exact"
    # the losing column is kept as a passthrough
    assert entry.extras["Narration"] == "upper"


def test_case_insensitive_match_when_no_exact_key(resolver, pnb):
    entry = resolver.resolve(pnb, {"NARRATION": "salary", "Deposit": "10"})

    assert entry.description == "salary"
    assert entry.credit == Decimal("10.00")


def test_synonym_priority_follows_declared_order(resolver, pnb):
    # PNB declares withdrawal before debit
    entry = resolver.resolve(pnb, {"debit": "5", "withdrawal": "7"})

    assert entry.debit == Decimal("7.00")
    assert entry.extras["debit"] == "5"


def test_keys_are_trimmed(resolver, pnb):
    entry = resolver.resolve(pnb, {"  date ": "02/04/2024", " deposit": "250"})

    assert entry.date == "02/04/2024"
    assert entry.credit == Decimal("250.00")


def test_absent_fields_are_empty_or_zero(resolver, pnb):
    entry = resolver.resolve(pnb, {})

    assert entry.date == ""
    assert entry.description == ""
    assert entry.debit == Decimal("0.00")
    assert entry.credit == Decimal("0.00")
    assert entry.extras == {"cheque_no": ""}


def test_unrecognized_columns_pass_through(resolver, pnb):
    entry = resolver.resolve(pnb, {"date": "x", " Remarks ": "paid", "UTR": None})

    assert entry.extras["Remarks"] == "paid"
    assert entry.extras["UTR"] == ""


def test_balance_column_is_ignored(resolver, pnb):
    entry = resolver.resolve(pnb, {"deposit": "10", "balance": "999999"})

    assert "balance" not in entry.extras
    assert entry.credit == Decimal("10.00")


def test_input_row_is_not_mutated(resolver, pnb):
    row = {" date ": "01/04/2024", "withdrawal": "(10)", "Other": "x"}
    snapshot = dict(row)

    resolver.resolve(pnb, row)

    assert row == snapshot


def test_prior_balance_hint_does_not_change_resolution(resolver, pnb):
    row = {"date": "01/04/2024", "deposit": "100"}
    assert resolver.resolve(pnb, row, prior_balance_hint=Decimal("50")) == resolver.resolve(pnb, row)


def test_value_date_is_stripped(resolver):
    icici = SchemaRegistry.schema_for("ICICI")
    entry = resolver.resolve(icici, {"txn_date": "01/04/2024", "Value Date": " 02/04/2024 "})

    assert entry.value_date == "02/04/2024"


@pytest.mark.parametrize("row, debit, credit", [
    ({"amount": "500", "dr_cr": "Dr"}, "500.00", "0.00"),
    ({"amount": "500", "dr_cr": "d"}, "500.00", "0.00"),
    ({"amount": "500", "dr_cr": "Cr"}, "0.00", "500.00"),
    ({"amount": "500", "dr_cr": "c"}, "0.00", "500.00"),
    ({"amount": "-300", "dr_cr": ""}, "300.00", "0.00"),
    ({"amount": "(300)"}, "300.00", "0.00"),
    ({"amount": "300"}, "0.00", "300.00"),
    ({"amount": "300", "dr_cr": "?"}, "0.00", "300.00"),
])
def test_indicator_sign_convention(resolver, bandhan, row, debit, credit):
    entry = resolver.resolve(bandhan, row)

    assert entry.debit == Decimal(debit)
    assert entry.credit == Decimal(credit)


def test_indicator_schema_ignores_direct_columns(resolver, bandhan):
    entry = resolver.resolve(bandhan, {"debit": "100", "credit": "50"})

    assert entry.debit == Decimal("0.00")
    assert entry.credit == Decimal("0.00")
    assert entry.extras == {"debit": "100", "credit": "50"}


def test_direct_schema_ignores_indicator(resolver, pnb):
    entry = resolver.resolve(pnb, {"deposit": "100", "dr_cr": "D"})

    assert entry.credit == Decimal("100.00")
    assert entry.debit == Decimal("0.00")


class ExplodingRow(dict):
    def items(self):
        raise RuntimeError("unreadable row")


def test_resolve_all_keeps_a_placeholder_for_failed_rows(resolver, pnb):
    entries = resolver.resolve_all(pnb, [
        {"deposit": "100"},
        ExplodingRow(),
        {"withdrawal": "40"},
    ])

    assert len(entries) == 3
    assert entries[1] == ResolvedEntry.empty()
    assert entries[2].debit == Decimal("40.00")


def test_resolved_entries_are_frozen(resolver, pnb):
    entry = resolver.resolve(pnb, {"deposit": "1"})
    with pytest.raises(Exception):
        entry.credit = Decimal("2")


def test_out_of_range_amount_keeps_the_rest_of_the_row(resolver, pnb):
    entries = resolver.resolve_all(pnb, [
        {"narration": "a", "withdrawal": "100"},
        {"date": "02/04/2024", "narration": "b", "withdrawal": "1e40"},
    ])

    assert entries[1].description == "b"
    assert entries[1].date == "02/04/2024"
    assert entries[1].debit == Decimal("0.00")


def test_extras_cannot_be_changed_in_place(resolver, pnb):
    entry = resolver.resolve(pnb, {"deposit": "1", "cheque_no": "77"})

    with pytest.raises(TypeError):
        entry.extras["cheque_no"] = "78"
    assert entry.extra("cheque_no") == "77"


def test_empty_entry_extras_are_read_only():
    with pytest.raises(TypeError):
        ResolvedEntry.empty().extras["note"] = "x"
