"""Configuration module for the property database tools."""

from __future__ import annotations

from property_db.config.settings import (
    DATABASE_URL_ENV,
    DEFAULT_DATABASE_URL,
    AppConfig,
    DatabaseConfig,
    MigrationConfig,
    load_config,
    resolve_connection_string,
)

__all__ = [
    "DATABASE_URL_ENV",
    "DEFAULT_DATABASE_URL",
    "AppConfig",
    "DatabaseConfig",
    "MigrationConfig",
    "load_config",
    "resolve_connection_string",
]
