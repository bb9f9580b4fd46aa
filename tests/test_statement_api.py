"""API tests for the statement endpoints."""

import pytest
from fastapi.testclient import TestClient

from main import app
from statement_generator.core.dependencies import get_config
from statement_generator.core.unified_config import RenderingConfig, UnifiedConfig

from tests.helpers import make_rows

API = "/api/statements"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def statement_request(account):
    return {
        "bank": "PNB",
        "account": account,
        "opening_balance": "1,000.00",
        "transactions": make_rows(12),
    }


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "PNB" in body["supported_banks"]


def test_list_banks(client):
    response = client.get(f"{API}/banks")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 8
    bandhan = next(bank for bank in body["banks"] if bank["id"] == "BANDHAN")
    assert bandhan["sign_convention"] == "indicator"
    assert [field["name"] for field in bandhan["fields"]] == [
        "date", "value_date", "description", "amount", "dr_cr", "balance",
    ]


def test_get_bank_schema(client):
    response = client.get(f"{API}/banks/hdfc")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "HDFC"
    assert body["fields"][0] == {"name": "date", "label": "Date", "synonyms": ["date", "txn_date"]}
    assert "opening_balance" in body["account_fields"]


def test_unknown_bank_schema(client):
    response = client.get(f"{API}/banks/XYZ")

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "UNKNOWN_INSTITUTION"
    assert "SBI" in body["supported_banks"]


def test_csv_template_download(client):
    response = client.get(f"{API}/csv-template/pnb")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="pnb_template.csv"' in response.headers["content-disposition"]
    assert response.text == "date,cheque_no,withdrawal,deposit,narration,balance\n"


def test_upload_csv_computes_running_balance(client):
    content = b"Date,Narration,Withdrawal,Deposit,Remarks\n01/04/2024,SALARY,,5000,ok\n02/04/2024,RENT,2000,,\n"

    response = client.post(
        f"{API}/upload/PNB",
        files={"file": ("april.csv", content, "text/csv")},
        data={"opening_balance": "1000"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["file_name"] == "april.csv"
    assert [row["balance"] for row in body["rows"]] == ["6000.00", "4000.00"]
    assert body["rows"][0]["credit"] == "5000.00"
    assert body["rows"][0]["extras"]["Remarks"] == "ok"
    assert body["totals"]["closing_balance"] == "4000.00"


def test_upload_rejects_non_csv(client):
    response = client.post(
        f"{API}/upload/PNB",
        files={"file": ("april.xlsx", b"PK\x03\x04", "application/octet-stream")},
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "FILE_PROCESSING_ERROR"


def test_upload_rejects_empty_file(client):
    response = client.post(f"{API}/upload/PNB", files={"file": ("empty.csv", b"", "text/csv")})

    assert response.status_code == 400
    assert response.json()["error_code"] == "FILE_PROCESSING_ERROR"


def test_ledger_endpoint(client):
    response = client.post(f"{API}/ledger/pnb", json={
        "opening_balance": "0",
        "transactions": [{"withdrawal": "100"}, {"deposit": "250"}, {"withdrawal": "50"}],
    })

    assert response.status_code == 200
    body = response.json()
    assert [row["balance"] for row in body["rows"]] == ["-100.00", "150.00", "100.00"]
    assert body["totals"]["total_debit"] == "150.00"
    assert body["totals"]["total_credit"] == "250.00"


def test_append_endpoint(client):
    response = client.post(f"{API}/ledger/PNB/append", json={
        "previous_balance": "100.00",
        "position": 4,
        "transaction": {"narration": "CASH DEP", "deposit": "25"},
    })

    assert response.status_code == 200
    assert response.json()["balance"] == "125.00"
    assert response.json()["position"] == 4


def test_layout_preview(client, statement_request):
    response = client.post(f"{API}/layout-preview", json=statement_request)

    assert response.status_code == 200
    body = response.json()
    assert body["bank"] == "PNB"
    assert body["page_count"] >= 1
    assert body["instructions"] is None
    assert body["instructions_by_kind"]["text"] > 0
    positions = [row["position"] for row in body["rows"] if row["position"] is not None]
    assert positions == list(range(1, 13))
    assert body["totals"]["opening_balance"] == "1000.00"


def test_layout_preview_with_instructions(client, statement_request):
    response = client.post(f"{API}/layout-preview?include_instructions=true", json=statement_request)

    body = response.json()
    assert len(body["instructions"]) == body["instruction_count"]
    assert body["instructions"][0]["kind"] in {"text", "fill_rect", "stroke_rect", "line", "image"}


def test_generate_pdf(client, statement_request):
    response = client.post(f"{API}/generate-pdf", json=statement_request)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
    assert "pnb_statement_" in response.headers["content-disposition"]


def test_generate_pdf_for_unknown_bank(client, statement_request):
    statement_request["bank"] = "XYZ"

    response = client.post(f"{API}/generate-pdf", json=statement_request)

    assert response.status_code == 400
    assert response.json()["error_code"] == "UNKNOWN_INSTITUTION"


def test_generate_pdf_requires_bank(client):
    response = client.post(f"{API}/generate-pdf", json={"transactions": []})

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_statement_size_limit(client, statement_request):
    app.dependency_overrides[get_config] = lambda: UnifiedConfig(
        rendering=RenderingConfig(max_entries_per_statement=5)
    )
    try:
        response = client.post(f"{API}/generate-pdf", json=statement_request)
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 400
    assert "at most 5" in response.json()["technical_details"]


def test_append_with_out_of_range_amount(client):
    response = client.post(f"{API}/ledger/PNB/append", json={
        "previous_balance": "100.00",
        "transaction": {"narration": "TYPO", "withdrawal": "1e40"},
    })

    assert response.status_code == 200
    assert response.json()["balance"] == "100.00"
    assert response.json()["debit"] == "0.00"
