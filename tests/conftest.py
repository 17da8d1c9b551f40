"""Shared fixtures for introspection tests."""

from typing import Any, Dict, List, Optional

import pytest

from pg_introspect.datasources.base import DataSource


class RecordingDataSource(DataSource):
    """In-memory data source that replays canned rows and records queries."""

    def __init__(self, name: str = "fake", rows: Optional[List[Dict[str, Any]]] = None):
        super().__init__(name, {})
        self.rows = rows or []
        self.captured_queries = []
        self.disconnect_calls = 0
        self.error: Optional[Exception] = None

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self._connected = False

    async def execute(self, query):
        self.captured_queries.append(query)
        if self.error is not None:
            raise self.error
        return [dict(row) for row in self.rows]


def make_column_row(
    schema: str = "public",
    table: str = "users",
    column: str = "id",
    table_type: str = "r",
    not_null: bool = False,
    has_default: bool = False,
    type: str = "int4",
    type_schema: str = "pg_catalog",
    auto_incrementing: Optional[str] = None,
    column_description: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a row shaped like the output of the table query."""
    return {
        "column": column,
        "not_null": not_null,
        "has_default": has_default,
        "table": table,
        "table_type": table_type,
        "schema": schema,
        "type": type,
        "type_schema": type_schema,
        "column_description": column_description,
        "auto_incrementing": auto_incrementing,
    }


@pytest.fixture
def column_row():
    """Factory for catalog rows."""
    return make_column_row


@pytest.fixture
def scenario_rows():
    """Two tables in catalog order: public.users (2 columns), public.orders (1)."""
    return [
        make_column_row(
            table="users",
            column="id",
            not_null=True,
            has_default=True,
            auto_incrementing="public.users_id_seq",
        ),
        make_column_row(table="users", column="email", type="text"),
        make_column_row(
            table="orders",
            column="id",
            not_null=True,
            has_default=True,
            auto_incrementing="public.orders_id_seq",
        ),
    ]


@pytest.fixture
def datasource_factory():
    """Factory for recording data sources."""
    return RecordingDataSource
