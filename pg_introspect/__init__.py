"""Reflect PostgreSQL schemas, tables and columns from the system catalog."""

from .introspection import PostgresIntrospector
from .metadata import (
    ColumnMetadata,
    DatabaseMetadata,
    DatabaseMetadataOptions,
    SchemaMetadata,
    TableKind,
    TableMetadata,
)

__all__ = [
    "PostgresIntrospector",
    "ColumnMetadata",
    "DatabaseMetadata",
    "DatabaseMetadataOptions",
    "SchemaMetadata",
    "TableKind",
    "TableMetadata",
]
