"""Configuration management for the catalog introspector."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
import yaml
from pathlib import Path

DEFAULT_MIGRATION_TABLE = "kysely_migration"
DEFAULT_MIGRATION_LOCK_TABLE = "kysely_migration_lock"

SUPPORTED_DATASOURCE_TYPES = ("postgresql",)


@dataclass
class DataSourceConfig:
    """Configuration for the database to introspect."""

    name: str
    type: str  # "postgresql"
    config: Dict[str, Any]


@dataclass
class IntrospectionConfig:
    """Configuration for catalog introspection."""

    migration_table: str = DEFAULT_MIGRATION_TABLE
    migration_lock_table: str = DEFAULT_MIGRATION_LOCK_TABLE
    include_internal_tables: bool = False


@dataclass
class LoggingConfig:
    """Configuration for logging setup."""

    level: str = "INFO"
    structured: bool = False
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main configuration class."""

    datasource: Optional[DataSourceConfig] = None
    introspection: IntrospectionConfig = field(default_factory=IntrospectionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the data source type is missing or unsupported

    Example YAML format:
        datasource:
          name: app_db
          type: postgresql
          host: localhost
          port: 5432
          database: app
          user: app
          password: secret

        introspection:
          migration_table: kysely_migration
          migration_lock_table: kysely_migration_lock
          include_internal_tables: false

        logging:
          level: INFO
          structured: false
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    datasource = None
    ds_data = data.get("datasource")
    if ds_data is not None:
        datasource = _parse_datasource(dict(ds_data))

    introspection_data = data.get("introspection", {})
    introspection = IntrospectionConfig(**introspection_data)

    logging_data = data.get("logging", {})
    logging_config = LoggingConfig(**logging_data)

    return Config(
        datasource=datasource, introspection=introspection, logging=logging_config
    )


def _parse_datasource(ds_data: Dict[str, Any]) -> DataSourceConfig:
    ds_type = ds_data.pop("type", None)
    if ds_type is None:
        raise ValueError("Data source config is missing 'type'")
    if ds_type not in SUPPORTED_DATASOURCE_TYPES:
        raise ValueError(f"Unsupported data source type: {ds_type}")
    name = ds_data.pop("name", ds_type)
    return DataSourceConfig(name=name, type=ds_type, config=ds_data)
