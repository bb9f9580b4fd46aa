# statement_generator/presentation/api/health_router.py
"""Health check endpoints."""

from fastapi import APIRouter, Depends

from statement_generator.application.statements.templates import TemplateRegistry
from statement_generator.core.dependencies import get_config
from statement_generator.core.unified_config import UnifiedConfig
from statement_generator.presentation.schemas.statement_schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(config: UnifiedConfig = Depends(get_config)):
    """Basic health check endpoint."""
    return HealthResponse(
        status="ok",
        version=config.app.app_version,
        supported_banks=TemplateRegistry.get_supported_banks()
    )


@router.get("/health/config")
async def config_health_check(config: UnifiedConfig = Depends(get_config)):
    """Configuration summary (no secrets are held in this service)."""
    return {"status": "ok", "configuration": config.summary()}
