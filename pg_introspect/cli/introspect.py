"""Command line entry point that prints database metadata."""

from __future__ import annotations

import asyncio
import json
from typing import List, Optional

import click

from ..config import Config, DataSourceConfig, load_config
from ..datasources import DataSource, PostgreSQLDataSource
from ..introspection import PostgresIntrospector
from ..metadata import DatabaseMetadata, DatabaseMetadataOptions, SchemaMetadata
from ..utils.logging import get_contextual_logger, setup_logging


class MetadataPrinter:
    """Prints introspected metadata in a readable format."""

    def __init__(self, emit):
        self.emit = emit

    def display_schemas(self, schemas: List[SchemaMetadata]) -> None:
        if not schemas:
            self.emit("No schemas found.")
            return
        self.emit("Schemas:")
        for schema in schemas:
            self.emit(f"  - {schema.name}")

    def display_metadata(self, metadata: DatabaseMetadata) -> None:
        if not metadata.tables:
            self.emit("No tables found.")
            return
        for table in metadata.tables:
            kind = "View" if table.is_view else "Table"
            self.emit(f"\n{kind}: {table.fully_qualified_name()}")
            self._print_columns(table)

    def _print_columns(self, table) -> None:
        for column in table.columns:
            self.emit(f"    - {self._describe_column(column)}")

    def _describe_column(self, column) -> str:
        parts = [f"{column.name}: {column.data_type}"]
        parts.append("NULL" if column.is_nullable else "NOT NULL")
        if column.is_auto_incrementing:
            parts.append("AUTO INCREMENT")
        elif column.has_default_value:
            parts.append("DEFAULT")
        if column.comment:
            parts.append(f"-- {column.comment}")
        return " ".join(parts)


def create_datasource(ds_config: DataSourceConfig) -> DataSource:
    if ds_config.type == "postgresql":
        return PostgreSQLDataSource(ds_config.name, ds_config.config)
    raise ValueError(f"Unsupported data source type: {ds_config.type}")


async def _collect(
    introspector: PostgresIntrospector,
    options: DatabaseMetadataOptions,
    schemas_only: bool,
):
    if schemas_only:
        return await introspector.get_schemas()
    return await introspector.get_metadata(options)


def run_introspection(
    config: Config, schemas_only: bool, include_internal_tables: bool
):
    """Connect, introspect once and disconnect.

    Returns:
        List of SchemaMetadata when schemas_only is set, DatabaseMetadata otherwise
    """
    if config.datasource is None:
        raise ValueError("No datasource configured")

    settings = config.introspection
    options = DatabaseMetadataOptions(
        include_internal_tables=include_internal_tables
        or settings.include_internal_tables
    )
    logger = get_contextual_logger(__name__, {"datasource": config.datasource.name})

    with create_datasource(config.datasource) as datasource:
        introspector = PostgresIntrospector(
            datasource,
            migration_table=settings.migration_table,
            migration_lock_table=settings.migration_lock_table,
        )
        result = asyncio.run(_collect(introspector, options, schemas_only))

    if schemas_only:
        logger.info(f"Found {len(result)} schemas")
    else:
        logger.info(f"Found {len(result.tables)} tables")
    return result


@click.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file.",
)
@click.option("--schemas", "schemas_only", is_flag=True, help="List schemas only.")
@click.option(
    "--include-internal-tables",
    is_flag=True,
    help="Include migration bookkeeping tables.",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of text.")
def cli(
    config_path: Optional[str],
    schemas_only: bool,
    include_internal_tables: bool,
    as_json: bool,
) -> None:
    """Print schema, table and column metadata of a PostgreSQL database."""
    config = load_config(config_path)
    setup_logging(
        level=config.logging.level,
        structured=config.logging.structured,
        log_file=config.logging.log_file,
    )

    try:
        result = run_introspection(config, schemas_only, include_internal_tables)
    except (ConnectionError, ValueError) as exc:
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(1)

    if as_json:
        if schemas_only:
            document = [schema.to_dict() for schema in result]
        else:
            document = result.to_dict()
        click.echo(json.dumps(document, indent=2))
        return

    printer = MetadataPrinter(click.echo)
    if schemas_only:
        printer.display_schemas(result)
    else:
        printer.display_metadata(result)
