"""PostgreSQL catalog introspector."""

from typing import List, Optional

from ..config.config import DEFAULT_MIGRATION_LOCK_TABLE, DEFAULT_MIGRATION_TABLE
from ..datasources.base import QueryExecutor
from ..metadata import (
    DatabaseMetadata,
    DatabaseMetadataOptions,
    SchemaMetadata,
    TableMetadata,
)
from .aggregator import RawColumnRow, parse_table_metadata
from .query_builder import CatalogQueryBuilder


class PostgresIntrospector:
    """Reads schema, table and column metadata from pg_catalog.

    Each call issues one query through the executor and builds fresh
    metadata. Executor errors propagate to the caller unchanged.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        migration_table: str = DEFAULT_MIGRATION_TABLE,
        migration_lock_table: str = DEFAULT_MIGRATION_LOCK_TABLE,
    ):
        """Initialize introspector.

        Args:
            executor: Query executor used to run catalog queries
            migration_table: Migration history table excluded by default
            migration_lock_table: Migration lock table excluded by default
        """
        self.executor = executor
        self.query_builder = CatalogQueryBuilder(
            migration_table=migration_table,
            migration_lock_table=migration_lock_table,
        )

    async def get_schemas(self) -> List[SchemaMetadata]:
        """List every schema in the database, system schemas included."""
        query = self.query_builder.build_schemas_query()
        rows = await self.executor.execute(query)

        schemas = []
        for row in rows:
            schemas.append(SchemaMetadata(name=row["nspname"]))
        return schemas

    async def get_tables(
        self, options: Optional[DatabaseMetadataOptions] = None
    ) -> List[TableMetadata]:
        """List user tables, views and partitioned tables with their columns.

        Args:
            options: Introspection options (default: internal tables excluded)

        Returns:
            Tables ordered by schema then table name
        """
        if options is None:
            options = DatabaseMetadataOptions()

        query = self.query_builder.build_tables_query(options)
        rows = await self.executor.execute(query)

        raw_columns = []
        for row in rows:
            raw_columns.append(RawColumnRow.from_row(row))
        return parse_table_metadata(raw_columns)

    async def get_metadata(
        self, options: Optional[DatabaseMetadataOptions] = None
    ) -> DatabaseMetadata:
        """Get a metadata snapshot.

        Schemas are only available through get_schemas().
        """
        tables = await self.get_tables(options)
        return DatabaseMetadata(tables=tuple(tables))

    def __repr__(self) -> str:
        return f"PostgresIntrospector(executor={self.executor!r})"
