"""Database metadata classes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class TableKind(Enum):
    """Relation kinds (pg_class.relkind) that are introspected."""

    ORDINARY_TABLE = "r"
    VIEW = "v"
    PARTITIONED_TABLE = "p"


@dataclass(frozen=True)
class DatabaseMetadataOptions:
    """Options for table introspection.

    Attributes:
        include_internal_tables: Also return the migration bookkeeping
            tables (migration history and migration lock).
    """

    include_internal_tables: bool = False


@dataclass(frozen=True)
class SchemaMetadata:
    """Schema (namespace) metadata."""

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class ColumnMetadata:
    """Column metadata."""

    name: str
    data_type: str
    data_type_schema: str
    is_nullable: bool
    is_auto_incrementing: bool
    has_default_value: bool
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "data_type": self.data_type,
            "data_type_schema": self.data_type_schema,
            "is_nullable": self.is_nullable,
            "is_auto_incrementing": self.is_auto_incrementing,
            "has_default_value": self.has_default_value,
            "comment": self.comment,
        }

    def __repr__(self) -> str:
        return f"Column({self.name}, {self.data_type_schema}.{self.data_type})"


@dataclass(frozen=True)
class TableMetadata:
    """Table or view metadata.

    Columns are kept in catalog ordinal order.
    """

    name: str
    schema: str
    is_view: bool
    columns: Tuple[ColumnMetadata, ...] = field(default_factory=tuple)

    def get_column(self, name: str) -> Optional[ColumnMetadata]:
        """Get column by exact name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def fully_qualified_name(self) -> str:
        """Get schema-qualified table name."""
        return f"{self.schema}.{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        columns = []
        for col in self.columns:
            columns.append(col.to_dict())
        return {
            "name": self.name,
            "schema": self.schema,
            "is_view": self.is_view,
            "columns": columns,
        }

    def __repr__(self) -> str:
        return f"Table({self.fully_qualified_name()}, cols={len(self.columns)})"


@dataclass(frozen=True)
class DatabaseMetadata:
    """Snapshot of all introspected tables."""

    tables: Tuple[TableMetadata, ...] = field(default_factory=tuple)

    def get_table(self, schema: str, name: str) -> Optional[TableMetadata]:
        """Get table by schema and name."""
        for table in self.tables:
            if table.schema == schema and table.name == name:
                return table
        return None

    def to_dict(self) -> Dict[str, Any]:
        tables = []
        for table in self.tables:
            tables.append(table.to_dict())
        return {"tables": tables}

    def __repr__(self) -> str:
        return f"DatabaseMetadata(tables={len(self.tables)})"
