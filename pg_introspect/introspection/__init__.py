"""Catalog introspection: query building, row aggregation and the facade."""

from .aggregator import RawColumnRow, parse_table_metadata
from .introspector import PostgresIntrospector
from .query_builder import CatalogQueryBuilder

__all__ = [
    "CatalogQueryBuilder",
    "PostgresIntrospector",
    "RawColumnRow",
    "parse_table_metadata",
]
