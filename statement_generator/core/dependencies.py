# statement_generator/core/dependencies.py
"""Dependency injection for FastAPI."""

from fastapi import Depends

from statement_generator.application.statements.generate_statement import (
    BuildLedgerUseCase,
    GenerateStatementUseCase,
)
from statement_generator.application.statements.import_statement_csv import ImportStatementCsvUseCase
from statement_generator.application.statements.text_measurement import ReportLabTextMeasurer
from statement_generator.infrastructure.rendering import AssetStore
from statement_generator.shared.utils.file_validation import CsvFileValidator

from .unified_config import UnifiedConfig, get_unified_config


# =============================================================================
# Configuration Dependencies
# =============================================================================

def get_config() -> UnifiedConfig:
    """Unified configuration (cached)."""
    return get_unified_config()


# =============================================================================
# Use Case Dependencies
# =============================================================================

def get_ledger_use_case() -> BuildLedgerUseCase:
    return BuildLedgerUseCase()


def get_generate_statement_use_case(config: UnifiedConfig = Depends(get_config)) -> GenerateStatementUseCase:
    """Statement generator wired to the configured page size, fonts and branding assets."""
    rendering = config.rendering
    return GenerateStatementUseCase(
        measurer=ReportLabTextMeasurer(line_spacing=rendering.line_spacing),
        asset_locator=AssetStore(rendering.asset_dir),
        page_size=(rendering.page_width, rendering.page_height),
    )


def get_csv_import_use_case(config: UnifiedConfig = Depends(get_config)) -> ImportStatementCsvUseCase:
    return ImportStatementCsvUseCase(encoding=config.file_processing.csv_encoding)


def get_csv_validator(config: UnifiedConfig = Depends(get_config)) -> CsvFileValidator:
    file_processing = config.file_processing
    return CsvFileValidator(
        max_file_size=file_processing.max_file_size,
        allowed_extensions=file_processing.allowed_file_extensions,
    )
