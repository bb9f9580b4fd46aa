"""
Main entry point for the Bank Statement Generator API.

Architecture: N-Layer Monolith
- Presentation Layer: API routers and request/response schemas (presentation/)
- Application Layer: Use cases, layout engine and bank templates (application/)
- Domain Layer: Schemas, field resolution, ledger computation (domain/)
- Infrastructure Layer: Rendering surfaces and branding assets (infrastructure/)
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from statement_generator import __version__
from statement_generator.core.exceptions import register_exception_handlers
from statement_generator.core.unified_config import load_config_from_env
from statement_generator.presentation.api import health_router, statement_router
from statement_generator.shared.utils.logging_config import setup_logging

config = load_config_from_env()
setup_logging(config.app.log_level, config.app.log_file)

# Create the root application
app = FastAPI(
    title=config.app.app_name,
    description="Generates bank-specific statement PDFs from manual or CSV transaction data",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.app.cors_origins,
    allow_credentials=True,
    allow_methods=config.app.cors_methods,
    allow_headers=config.app.cors_headers,
)

register_exception_handlers(app)

app.include_router(health_router.router, prefix="/api", tags=["Health"])
app.include_router(statement_router.router, prefix="/api")


# Root health check
@app.get("/", tags=["Root"])
def root():
    return {
        "message": "Bank Statement Generator running",
        "version": __version__,
        "architecture": "N-Layer Monolith",
        "endpoints": [
            "/api/health",
            "/api/statements/banks",
            "/api/statements/csv-template/{bank}",
            "/api/statements/upload/{bank}",
            "/api/statements/ledger/{bank}",
            "/api/statements/layout-preview",
            "/api/statements/generate-pdf",
        ],
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        }
    }


# Local run
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=config.app.debug
    )
