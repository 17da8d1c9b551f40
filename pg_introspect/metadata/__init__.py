"""Immutable metadata model for introspected databases."""

from .schema import (
    ColumnMetadata,
    DatabaseMetadata,
    DatabaseMetadataOptions,
    SchemaMetadata,
    TableKind,
    TableMetadata,
)

__all__ = [
    "ColumnMetadata",
    "DatabaseMetadata",
    "DatabaseMetadataOptions",
    "SchemaMetadata",
    "TableKind",
    "TableMetadata",
]
