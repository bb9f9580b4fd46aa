"""API router for bank statement generation."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from fastapi.responses import Response

from statement_generator.application.statements.generate_statement import (
    BuildLedgerUseCase,
    GenerateStatementUseCase,
    StatementLedger,
    entries_as_rows,
)
from statement_generator.application.statements.import_statement_csv import ImportStatementCsvUseCase
from statement_generator.application.statements.page_instructions import describe
from statement_generator.core.dependencies import (
    get_config,
    get_csv_import_use_case,
    get_csv_validator,
    get_generate_statement_use_case,
    get_ledger_use_case,
)
from statement_generator.core.unified_config import UnifiedConfig
from statement_generator.domain.statements.models import BankSchema, LedgerTotals
from statement_generator.domain.statements.services import SchemaRegistry, format_amount
from statement_generator.infrastructure.rendering import ReportLabSurface
from statement_generator.presentation.schemas.statement_schemas import (
    AppendEntryRequest,
    BankFieldResponse,
    BankSchemaResponse,
    LayoutPreviewResponse,
    LedgerRequest,
    LedgerResponse,
    LedgerRowResponse,
    LedgerTotalsResponse,
    RowPlacementResponse,
    StatementRequest,
    SupportedBanksResponse,
)
from statement_generator.shared.utils.file_validation import CsvFileValidator
from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/statements", tags=["Statements"])


def _schema_response(schema: BankSchema) -> BankSchemaResponse:
    return BankSchemaResponse(
        id=schema.id,
        name=schema.name,
        sign_convention=schema.sign_convention.value,
        fields=[
            BankFieldResponse(name=name, label=label, synonyms=list(schema.synonyms_for(name)))
            for name, label in schema.transaction_fields
        ],
        account_fields=list(schema.account_fields),
    )


def _totals_response(totals: LedgerTotals) -> LedgerTotalsResponse:
    return LedgerTotalsResponse(
        opening_balance=format_amount(totals.opening_balance),
        total_debit=format_amount(totals.total_debit),
        total_credit=format_amount(totals.total_credit),
        closing_balance=format_amount(totals.closing_balance),
        debit_count=totals.debit_count,
        credit_count=totals.credit_count,
        entry_count=totals.entry_count,
    )


def _ledger_response(ledger: StatementLedger, file_name: Optional[str] = None) -> LedgerResponse:
    return LedgerResponse(
        bank=ledger.schema.id,
        file_name=file_name,
        rows=[LedgerRowResponse(**row) for row in entries_as_rows(ledger.entries)],
        totals=_totals_response(ledger.totals),
    )


def _check_statement_size(count: int, config: UnifiedConfig) -> None:
    limit = config.rendering.max_entries_per_statement
    if count > limit:
        raise HTTPException(
            status_code=400,
            detail=f"Statement has {count} transactions; at most {limit} are accepted per statement"
        )


@router.get("/banks", response_model=SupportedBanksResponse, summary="Get Supported Banks")
def get_supported_banks():
    """List supported banks with their transaction fields and account attributes."""
    banks = [_schema_response(SchemaRegistry.schema_for(bank)) for bank in SchemaRegistry.supported_banks()]
    return SupportedBanksResponse(banks=banks, count=len(banks))


@router.get("/banks/{bank}", response_model=BankSchemaResponse, summary="Get Bank Schema")
def get_bank_schema(bank: str):
    return _schema_response(SchemaRegistry.schema_for(bank))


@router.get("/csv-template/{bank}", summary="Download CSV Template")
def download_csv_template(bank: str):
    """CSV file with the bank's column names as its only row."""
    schema = SchemaRegistry.schema_for(bank)
    content = SchemaRegistry.csv_template(schema.id)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{schema.id.lower()}_template.csv"'}
    )


@router.post("/upload/{bank}", response_model=LedgerResponse, summary="Upload Transactions CSV")
async def upload_transactions(
    bank: str,
    file: UploadFile = File(..., description="Transactions CSV with a header row"),
    opening_balance: Optional[str] = Form(None, description="Balance before the first transaction"),
    validator: CsvFileValidator = Depends(get_csv_validator),
    importer: ImportStatementCsvUseCase = Depends(get_csv_import_use_case),
    ledger_use_case: BuildLedgerUseCase = Depends(get_ledger_use_case),
    config: UnifiedConfig = Depends(get_config),
):
    """
    Parse an uploaded CSV, resolve its columns against the bank schema and
    compute the running balance.
    """
    schema = SchemaRegistry.schema_for(bank)
    content = await validator.read_validated(file)
    rows = importer.execute(content, file.filename)
    _check_statement_size(len(rows), config)

    ledger = ledger_use_case.execute(schema.id, rows, opening_balance)
    logger.info(f"Upload {file.filename}: {len(rows)} rows resolved for {schema.id}")
    return _ledger_response(ledger, file.filename)


@router.post("/ledger/{bank}", response_model=LedgerResponse, summary="Compute Running Balance")
def compute_running_balance(
    bank: str,
    request: LedgerRequest,
    ledger_use_case: BuildLedgerUseCase = Depends(get_ledger_use_case),
    config: UnifiedConfig = Depends(get_config),
):
    _check_statement_size(len(request.transactions), config)
    ledger = ledger_use_case.execute(bank, request.transactions, request.opening_balance)
    return _ledger_response(ledger)


@router.post("/ledger/{bank}/append", response_model=LedgerRowResponse, summary="Append Manual Entry")
def append_entry(
    bank: str,
    request: AppendEntryRequest,
    ledger_use_case: BuildLedgerUseCase = Depends(get_ledger_use_case),
):
    """Balance of one manually entered transaction placed after a known balance."""
    entry = ledger_use_case.append(bank, request.previous_balance, request.transaction, request.position)
    return LedgerRowResponse(**entries_as_rows([entry])[0])


@router.post("/layout-preview", response_model=LayoutPreviewResponse, summary="Preview Pagination")
def preview_layout(
    request: StatementRequest,
    include_instructions: bool = Query(False, description="Return every drawing instruction"),
    use_case: GenerateStatementUseCase = Depends(get_generate_statement_use_case),
    config: UnifiedConfig = Depends(get_config),
):
    """Lay the statement out and report where rows land, without rendering a PDF."""
    _check_statement_size(len(request.transactions), config)
    statement_layout = use_case.layout(
        request.bank, request.account, request.transactions, request.opening_balance
    )
    stream = statement_layout.stream
    return LayoutPreviewResponse(
        bank=request.bank.strip().upper(),
        page_count=statement_layout.page_count,
        instruction_count=len(stream),
        instructions_by_kind=stream.count_by_kind(),
        rows=[
            RowPlacementResponse(page=row.page, y=row.y, height=row.height, position=row.position)
            for row in statement_layout.rows
        ],
        totals=_totals_response(statement_layout.totals),
        instructions=[describe(item) for item in stream] if include_instructions else None,
    )


@router.post("/generate-pdf", summary="Generate Statement PDF")
def generate_pdf(
    request: StatementRequest,
    use_case: GenerateStatementUseCase = Depends(get_generate_statement_use_case),
    config: UnifiedConfig = Depends(get_config),
):
    """Render the statement and return it as a PDF download."""
    _check_statement_size(len(request.transactions), config)

    bank = request.bank.strip().upper()
    surface = ReportLabSurface(
        page_size=(config.rendering.page_width, config.rendering.page_height),
        title=f"{bank} Statement of Account",
    )
    use_case.execute(surface, bank, request.account, request.transactions, request.opening_balance)

    file_name = request.file_name or f"{bank.lower()}_statement_{datetime.now().strftime('%Y%m%d_%H%M%S')}.pdf"
    return Response(
        content=surface.getvalue(),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'}
    )
