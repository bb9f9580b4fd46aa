"""Tests for CSV transaction import."""

import pytest

from statement_generator.application.statements.import_statement_csv import ImportStatementCsvUseCase
from statement_generator.core.exceptions import FileProcessingError


@pytest.fixture
def importer():
    return ImportStatementCsvUseCase()


def test_rows_keyed_by_header(importer):
    rows = importer.execute(b"date,narration,withdrawal\n01/04/2024,ATM WDL,\"1,000.00\"\n", "pnb.csv")

    assert rows == [{"date": "01/04/2024", "narration": "ATM WDL", "withdrawal": "1,000.00"}]


def test_cells_stay_text(importer):
    rows = importer.execute(b"date,withdrawal,deposit,cheque_no\n01/04/2024,,NA,000123\n")

    assert rows[0]["withdrawal"] == ""
    assert rows[0]["deposit"] == "NA"
    assert rows[0]["cheque_no"] == "000123"


def test_utf8_bom_is_ignored(importer):
    rows = importer.execute(b"\xef\xbb\xbfdate,deposit\n01/04/2024,5\n")

    assert list(rows[0]) == ["date", "deposit"]


def test_blank_rows_are_skipped(importer):
    rows = importer.execute(b"date,deposit\n01/04/2024,5\n,\n02/04/2024,6\n")

    assert [row["date"] for row in rows] == ["01/04/2024", "02/04/2024"]


def test_header_only_file_has_no_rows(importer):
    assert importer.execute(b"date,narration,withdrawal,deposit\n") == []


@pytest.mark.parametrize("content", [b"", b"   \n  \n"])
def test_empty_file(importer, content):
    with pytest.raises(FileProcessingError) as exc_info:
        importer.execute(content, "empty.csv")

    assert "empty" in exc_info.value.user_message


def test_missing_header_row(importer):
    with pytest.raises(FileProcessingError) as exc_info:
        importer.execute(b",,\n01/04/2024,ATM,100\n", "noheader.csv")

    assert "header" in exc_info.value.message.lower()


def test_undecodable_file(importer):
    with pytest.raises(FileProcessingError):
        importer.execute(b"date,narration\n01/04/2024,\xff\xfe\xfa\n", "latin.csv")
