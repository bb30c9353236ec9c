"""Centralized router settings using pydantic-settings.

This module provides a single source of truth for the admission router
configuration loaded from environment variables. Uses pydantic for automatic
validation, type coercion, and documentation.
"""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Router configuration loaded from environment variables.

    All settings have sensible defaults for production use. Override via
    environment variables as documented per field.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        validation_alias="JSON_LOGS",
        description="Enable JSON formatted logging for structured log aggregation",
    )
    correlation_ids: bool = Field(
        default=True,
        validation_alias="CORRELATION_IDS",
        description="Enable correlation IDs in logs for request tracing",
    )
    dispatch_log_level: str = Field(
        default="INFO",
        validation_alias="DISPATCH_LOG_LEVEL",
        description="Log level for the per-request handler selection message",
    )

    # Dispatch behavior
    dispatch_no_match_code: int = Field(
        default=500,
        validation_alias="DISPATCH_NO_MATCH_CODE",
        description="Admission status code returned when no handler matches",
    )

    # Metrics
    metrics_enabled: bool = Field(
        default=True,
        validation_alias="METRICS_ENABLED",
        description="Record Prometheus metrics for dispatched requests",
    )

    @property
    def dispatch_log_level_number(self) -> int:
        """Numeric logging level for dispatch messages, INFO if unknown."""
        return getattr(logging, self.dispatch_log_level.upper(), logging.INFO)


# Global settings instance - initialized once at module import
settings = Settings()
