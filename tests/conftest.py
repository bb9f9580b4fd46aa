"""Pytest fixtures shared by the statement generator tests."""

import pytest

from tests.helpers import FixedWidthMeasurer


@pytest.fixture
def measurer():
    return FixedWidthMeasurer()


@pytest.fixture
def account():
    return {
        "name": "Rahul Sharma",
        "account_no": "0123456789012",
        "address": "12 MG Road",
        "city": "Pune",
        "pin": "411001",
        "ifsc": "PUNB0123400",
        "branch_name": "Pune Camp",
        "statement_from": "01/04/2024",
        "statement_to": "30/04/2024",
    }
