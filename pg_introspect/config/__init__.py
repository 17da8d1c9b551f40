"""Configuration management."""

from .config import (
    Config,
    DataSourceConfig,
    IntrospectionConfig,
    LoggingConfig,
    DEFAULT_MIGRATION_TABLE,
    DEFAULT_MIGRATION_LOCK_TABLE,
    load_config,
)

__all__ = [
    "Config",
    "DataSourceConfig",
    "IntrospectionConfig",
    "LoggingConfig",
    "DEFAULT_MIGRATION_TABLE",
    "DEFAULT_MIGRATION_LOCK_TABLE",
    "load_config",
]
