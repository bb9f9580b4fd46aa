# statement_generator/core/unified_config.py
"""Unified configuration management system with validation."""

import os
from typing import List, Optional, Dict, Any
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from statement_generator.shared.utils.logging_config import get_logger

logger = get_logger(__name__)

# A4 in points
A4_WIDTH = 595.28
A4_HEIGHT = 841.89


class ApplicationConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STATEMENT_APP__")
    """Main application configuration section."""

    app_name: str = Field(
        default="Bank Statement Generator API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # CORS configuration
    cors_origins: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    cors_methods: List[str] = Field(
        default=["*"],
        description="Allowed CORS methods"
    )
    cors_headers: List[str] = Field(
        default=["*"],
        description="Allowed CORS headers"
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (console only when unset)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()


class RenderingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STATEMENT_RENDERING__")
    """Statement layout and rendering configuration section."""

    page_width: float = Field(
        default=A4_WIDTH,
        description="Page width in points; bank templates are laid out for A4 and clip on narrower pages",
        gt=100,
        le=5000
    )
    page_height: float = Field(
        default=A4_HEIGHT,
        description="Page height in points",
        gt=100,
        le=5000
    )
    asset_dir: str = Field(
        default="assets/branding",
        description="Directory holding institution branding images"
    )
    line_spacing: float = Field(
        default=1.2,
        description="Line height as a multiple of the font size",
        ge=1.0,
        le=3.0
    )
    max_entries_per_statement: int = Field(
        default=5000,
        description="Maximum number of transactions accepted for one statement",
        ge=1,
        le=100000
    )


class FileProcessingConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STATEMENT_FILE_PROCESSING__")
    """File upload and processing configuration section."""

    max_file_size: int = Field(
        default=10 * 1024 * 1024,  # 10MB
        description="Maximum file size in bytes",
        ge=1024,
        le=1024 * 1024 * 1024
    )
    allowed_file_extensions: List[str] = Field(
        default=[".csv"],
        description="Allowed file extensions for uploads"
    )
    csv_encoding: str = Field(
        default="utf-8-sig",
        description="Encoding used to decode uploaded CSV files"
    )


class UnifiedConfig(BaseSettings):
    """
    Unified configuration system that consolidates all application settings.

    Every section reads its own environment prefix; nested overrides are also
    accepted through STATEMENT_<SECTION>__<FIELD>.
    """

    app: ApplicationConfig = Field(default_factory=ApplicationConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    file_processing: FileProcessingConfig = Field(default_factory=FileProcessingConfig)

    model_config = SettingsConfigDict(
        env_prefix="STATEMENT_",
        env_nested_delimiter="__",
        case_sensitive=False
    )

    @model_validator(mode='after')
    def validate_page_orientation(self):
        """Statements are laid out portrait; a landscape page would break the templates."""
        if self.rendering.page_width > self.rendering.page_height:
            raise ValueError("page_width must not exceed page_height (portrait pages only)")
        return self

    def summary(self) -> Dict[str, Any]:
        """Configuration summary for health endpoints."""
        return {
            "app_name": self.app.app_name,
            "version": self.app.app_version,
            "debug": self.app.debug,
            "page_size": [self.rendering.page_width, self.rendering.page_height],
            "asset_dir": self.rendering.asset_dir,
            "max_entries_per_statement": self.rendering.max_entries_per_statement,
            "max_file_size": self.file_processing.max_file_size,
        }


@lru_cache()
def get_unified_config() -> UnifiedConfig:
    """Get the unified configuration instance with caching."""
    try:
        config = UnifiedConfig()
        logger.info("Unified configuration loaded successfully")
        return config
    except Exception as e:
        logger.error(f"Failed to load unified configuration: {e}", exc_info=True)
        raise


@lru_cache()
def get_settings() -> ApplicationConfig:
    """Application section of the unified configuration."""
    return get_unified_config().app


def load_config_from_env() -> UnifiedConfig:
    """Load configuration and report which environment overrides were found."""
    logger.info("Loading configuration from environment variables...")

    found_vars = [name for name in os.environ if name.upper().startswith("STATEMENT_")]
    if found_vars:
        logger.info(f"Found {len(found_vars)} environment configuration variables")
    else:
        logger.info("No environment configuration variables found, using defaults")

    return get_unified_config()
