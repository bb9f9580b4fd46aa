"""Pydantic schemas for the statement generation API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BankFieldResponse(BaseModel):
    """One transaction column of a bank schema."""

    name: str
    label: str
    synonyms: List[str] = Field(default_factory=list)


class BankSchemaResponse(BaseModel):
    """Response schema for one supported bank."""

    id: str
    name: str
    sign_convention: str
    fields: List[BankFieldResponse] = Field(default_factory=list)
    account_fields: List[str] = Field(default_factory=list)


class SupportedBanksResponse(BaseModel):
    banks: List[BankSchemaResponse] = Field(default_factory=list)
    count: int = 0


class LedgerRowResponse(BaseModel):
    """A transaction with its computed running balance (amounts as two-decimal strings)."""

    position: int
    date: str = ""
    value_date: Optional[str] = None
    description: str = ""
    debit: str = "0.00"
    credit: str = "0.00"
    balance: str = "0.00"
    extras: Dict[str, str] = Field(default_factory=dict)


class LedgerTotalsResponse(BaseModel):
    opening_balance: str = "0.00"
    total_debit: str = "0.00"
    total_credit: str = "0.00"
    closing_balance: str = "0.00"
    debit_count: int = 0
    credit_count: int = 0
    entry_count: int = 0


class LedgerRequest(BaseModel):
    """Raw transaction rows to resolve against a bank schema."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "opening_balance": "1,000.00",
                "transactions": [
                    {"date": "01/04/2024", "narration": "NEFT-SALARY", "deposit": "25,000.00"},
                    {"date": "03/04/2024", "narration": "ATM WDL", "withdrawal": "2,000.00"},
                ],
            }
        }
    )

    opening_balance: Optional[str] = Field(None, description="Balance before the first transaction")
    transactions: List[Dict[str, Any]] = Field(default_factory=list, description="Rows in statement order")


class LedgerResponse(BaseModel):
    success: bool = True
    bank: str
    file_name: Optional[str] = None
    rows: List[LedgerRowResponse] = Field(default_factory=list)
    totals: LedgerTotalsResponse


class AppendEntryRequest(BaseModel):
    """A single manually entered row placed after a known balance."""

    previous_balance: str = Field("0.00", description="Running balance before this entry")
    position: int = Field(1, ge=1, description="1-based position of the new entry")
    transaction: Dict[str, Any] = Field(default_factory=dict)


class StatementRequest(BaseModel):
    """Everything needed to generate one statement document."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "bank": "PNB",
                "account": {
                    "name": "RAHUL SHARMA",
                    "account_no": "0123456789",
                    "statement_from": "01/04/2024",
                    "statement_to": "30/04/2024",
                },
                "opening_balance": "1000.00",
                "transactions": [
                    {"date": "01/04/2024", "narration": "NEFT-SALARY", "deposit": "25000.00"},
                ],
            }
        }
    )

    bank: str = Field(..., min_length=1, description="Institution code, e.g. PNB or HDFC")
    account: Dict[str, Any] = Field(default_factory=dict, description="Account attributes for the header")
    opening_balance: Optional[str] = Field(None, description="Overrides the account's opening_balance")
    transactions: List[Dict[str, Any]] = Field(default_factory=list)
    file_name: Optional[str] = Field(None, description="Download name for the PDF")


class RowPlacementResponse(BaseModel):
    page: int
    y: float
    height: float
    position: Optional[int] = None


class LayoutPreviewResponse(BaseModel):
    """Pagination summary of a statement that was laid out but not rendered."""

    success: bool = True
    bank: str
    page_count: int
    instruction_count: int
    instructions_by_kind: Dict[str, int] = Field(default_factory=dict)
    rows: List[RowPlacementResponse] = Field(default_factory=list)
    totals: LedgerTotalsResponse
    instructions: Optional[List[Dict[str, Any]]] = None


class HealthResponse(BaseModel):
    status: str
    version: str
    supported_banks: List[str] = Field(default_factory=list)
