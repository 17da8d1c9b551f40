"""Data source connectors."""

from .base import DataSource, QueryExecutor
from .postgresql import PostgreSQLDataSource

__all__ = [
    "DataSource",
    "QueryExecutor",
    "PostgreSQLDataSource",
]
