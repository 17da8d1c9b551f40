"""Catalog queries over pg_catalog, built as sqlglot expressions."""

from typing import Optional

from sqlglot import exp

from ..config.config import DEFAULT_MIGRATION_LOCK_TABLE, DEFAULT_MIGRATION_TABLE
from ..metadata import DatabaseMetadataOptions, TableKind

CATALOG_SCHEMA = "pg_catalog"
SYSTEM_SCHEMA_PATTERN = "^pg_"
INFORMATION_SCHEMA = "information_schema"
# CockroachDB exposes its internal schema through pg_namespace as well
CRDB_INTERNAL_SCHEMA = "crdb_internal"

INTROSPECTED_KINDS = (
    TableKind.ORDINARY_TABLE,
    TableKind.VIEW,
    TableKind.PARTITIONED_TABLE,
)


def _catalog_table(name: str, alias: Optional[str] = None) -> exp.Table:
    return exp.table_(name, db=CATALOG_SCHEMA, alias=alias)


def _col(name: str, table: str) -> exp.Column:
    return exp.column(name, table=table)


class CatalogQueryBuilder:
    """Builds the read-only catalog queries used by the introspector.

    The table query yields one row per (schema, table, column), ordered by
    schema name, table name and column ordinal. The row aggregator relies on
    that ordering.
    """

    def __init__(
        self,
        migration_table: str = DEFAULT_MIGRATION_TABLE,
        migration_lock_table: str = DEFAULT_MIGRATION_LOCK_TABLE,
    ):
        """Initialize query builder.

        Args:
            migration_table: Name of the migration history table
            migration_lock_table: Name of the migration lock table
        """
        self.migration_table = migration_table
        self.migration_lock_table = migration_lock_table

    def build_schemas_query(self) -> exp.Select:
        """Build the schema listing query.

        Every namespace is returned, system ones included, in catalog order.
        """
        return exp.select(exp.column("nspname")).from_(
            _catalog_table("pg_namespace")
        )

    def build_tables_query(
        self, options: Optional[DatabaseMetadataOptions] = None
    ) -> exp.Select:
        """Build the table/column query.

        Args:
            options: Introspection options; internal tables are excluded
                when omitted

        Returns:
            sqlglot Select expression
        """
        if options is None:
            options = DatabaseMetadataOptions()

        query = (
            exp.select(*self._projections())
            .from_(_catalog_table("pg_attribute", "a"))
            .join(
                _catalog_table("pg_class", "c"),
                on=exp.EQ(this=_col("attrelid", "a"), expression=_col("oid", "c")),
                join_type="inner",
            )
            .join(
                _catalog_table("pg_namespace", "ns"),
                on=exp.EQ(this=_col("relnamespace", "c"), expression=_col("oid", "ns")),
                join_type="inner",
            )
            .join(
                _catalog_table("pg_type", "typ"),
                on=exp.EQ(this=_col("atttypid", "a"), expression=_col("oid", "typ")),
                join_type="inner",
            )
            .join(
                _catalog_table("pg_namespace", "dtns"),
                on=exp.EQ(
                    this=_col("typnamespace", "typ"), expression=_col("oid", "dtns")
                ),
                join_type="inner",
            )
        )

        query = query.where(*self._filters(options))

        return query.order_by(
            _col("nspname", "ns"),
            _col("relname", "c"),
            _col("attnum", "a"),
        )

    def _projections(self):
        table_path = exp.DPipe(
            this=exp.DPipe(
                this=exp.func("quote_ident", _col("nspname", "ns")),
                expression=exp.Literal.string("."),
            ),
            expression=exp.func("quote_ident", _col("relname", "c")),
        )
        return [
            _col("attname", "a").as_("column", quoted=True),
            _col("attnotnull", "a").as_("not_null", quoted=True),
            _col("atthasdef", "a").as_("has_default", quoted=True),
            _col("relname", "c").as_("table", quoted=True),
            _col("relkind", "c").as_("table_type", quoted=True),
            _col("nspname", "ns").as_("schema", quoted=True),
            _col("typname", "typ").as_("type", quoted=True),
            _col("nspname", "dtns").as_("type_schema", quoted=True),
            exp.func(
                "col_description", _col("attrelid", "a"), _col("attnum", "a")
            ).as_("column_description", quoted=True),
            exp.func(
                "pg_get_serial_sequence", table_path, _col("attname", "a")
            ).as_("auto_incrementing", quoted=True),
        ]

    def _filters(self, options: DatabaseMetadataOptions):
        kinds = []
        for kind in INTROSPECTED_KINDS:
            kinds.append(exp.Literal.string(kind.value))

        schema_name = _col("nspname", "ns")
        filters = [
            exp.In(this=_col("relkind", "c"), expressions=kinds),
            exp.Not(
                this=exp.RegexpLike(
                    this=schema_name.copy(),
                    expression=exp.Literal.string(SYSTEM_SCHEMA_PATTERN),
                )
            ),
            exp.NEQ(
                this=schema_name.copy(),
                expression=exp.Literal.string(INFORMATION_SCHEMA),
            ),
            exp.NEQ(
                this=schema_name.copy(),
                expression=exp.Literal.string(CRDB_INTERNAL_SCHEMA),
            ),
            # hidden system columns have negative ordinals
            exp.GTE(this=_col("attnum", "a"), expression=exp.Literal.number(0)),
            exp.NEQ(this=_col("attisdropped", "a"), expression=exp.true()),
        ]

        if not options.include_internal_tables:
            for name in (self.migration_table, self.migration_lock_table):
                filters.append(
                    exp.NEQ(
                        this=_col("relname", "c"),
                        expression=exp.Literal.string(name),
                    )
                )

        return filters
