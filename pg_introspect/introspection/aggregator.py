"""Fold flat catalog rows into table metadata."""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from ..metadata import ColumnMetadata, TableKind, TableMetadata


@dataclass(frozen=True)
class RawColumnRow:
    """One catalog row: a single column of a single table."""

    column: str
    table: str
    table_type: str
    schema: str
    not_null: bool
    has_default: bool
    type: str
    type_schema: str
    auto_incrementing: Optional[str] = None
    column_description: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RawColumnRow":
        """Build from a row mapping keyed by the table query's aliases.

        Raises:
            KeyError: If a required field is missing
        """
        return cls(
            column=row["column"],
            table=row["table"],
            table_type=row["table_type"],
            schema=row["schema"],
            not_null=bool(row["not_null"]),
            has_default=bool(row["has_default"]),
            type=row["type"],
            type_schema=row["type_schema"],
            auto_incrementing=row.get("auto_incrementing"),
            column_description=row.get("column_description"),
        )

    @property
    def table_key(self) -> Tuple[str, str]:
        return (self.schema, self.table)

    def to_column(self) -> ColumnMetadata:
        return ColumnMetadata(
            name=self.column,
            data_type=self.type,
            data_type_schema=self.type_schema,
            is_nullable=not self.not_null,
            is_auto_incrementing=self.auto_incrementing is not None,
            has_default_value=self.has_default,
            comment=self.column_description,
        )


class _TableBuilder:
    """Mutable table accumulator, frozen once aggregation finishes."""

    def __init__(self, schema: str, name: str, is_view: bool):
        self.schema = schema
        self.name = name
        self.is_view = is_view
        self.columns: List[ColumnMetadata] = []

    @property
    def key(self) -> Tuple[str, str]:
        return (self.schema, self.name)

    def freeze(self) -> TableMetadata:
        return TableMetadata(
            name=self.name,
            schema=self.schema,
            is_view=self.is_view,
            columns=tuple(self.columns),
        )


def parse_table_metadata(rows: Iterable[RawColumnRow]) -> List[TableMetadata]:
    """Group column rows into tables.

    Rows are expected in (schema, table, ordinal) order, so consecutive rows
    usually belong to the current table. Tables keep first-encounter order
    and columns keep arrival order.

    Args:
        rows: Catalog rows

    Returns:
        List of frozen table metadata
    """
    builders: List[_TableBuilder] = []
    current: Optional[_TableBuilder] = None

    for row in rows:
        key = row.table_key
        if current is None or current.key != key:
            current = _find_table(builders, key)
            if current is None:
                current = _TableBuilder(
                    schema=row.schema,
                    name=row.table,
                    is_view=row.table_type == TableKind.VIEW.value,
                )
                builders.append(current)

        current.columns.append(row.to_column())

    tables = []
    for builder in builders:
        tables.append(builder.freeze())
    return tables


def _find_table(
    builders: List[_TableBuilder], key: Tuple[str, str]
) -> Optional[_TableBuilder]:
    # Matches only when rows arrive out of order.
    for builder in builders:
        if builder.key == key:
            return builder
    return None
